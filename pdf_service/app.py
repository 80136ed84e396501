"""
PDF Service - FastAPI application for resume export.

Renders ResumeData JSON to PDF (HTML printed by Playwright/Chromium), to
DOCX (python-docx), or to the HTML preview the PDF path prints.
"""

import asyncio
import uuid
from datetime import datetime, timezone
from io import BytesIO
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse, StreamingResponse
from pydantic import BaseModel

from pdf_service import __version__
from pdf_service.config import validate_config_on_startup
from pdf_service.pdf_helpers import content_disposition, render_html_to_pdf
from resume_export.common.error_handling import ExportIssue, RenderError
from resume_export.common.logger import get_logger, setup_logging
from resume_export.resume.docx_renderer import render_resume_docx_bytes
from resume_export.resume.html_renderer import render_resume_html
from resume_export.resume.types import ResumeData

settings = validate_config_on_startup()

# Configure logging
setup_logging(level=settings.log_level, format=settings.log_format)
logger = get_logger(__name__)

app = FastAPI(
    title="Resume PDF Service",
    version=__version__,
    description="Resume export to PDF (Playwright/Chromium) and DOCX"
)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

# Semaphore for rate limiting
_pdf_semaphore = asyncio.Semaphore(settings.max_concurrent_pdfs)

# Playwright readiness state
_playwright_ready = False
_playwright_error: Optional[str] = None


# ============================================================================
# Startup Event - Validate Playwright
# ============================================================================

@app.on_event("startup")
async def validate_playwright_on_startup():
    """
    Validate Playwright/Chromium is properly installed on startup.

    The service does not report healthy unless a test page actually prints.
    """
    global _playwright_ready, _playwright_error

    logger.info("PDF Service starting - validating Playwright installation...")

    try:
        test_pdf = await render_html_to_pdf(
            "<html><body><h1>Test</h1></body></html>",
            timeout_ms=settings.playwright_timeout_ms,
            headless=settings.playwright_headless,
        )
        if len(test_pdf) > 0:
            _playwright_ready = True
            logger.info(f"Playwright validation successful - generated {len(test_pdf)} byte test PDF")
        else:
            _playwright_error = "Test PDF generation returned empty result"
            logger.error(f"Playwright validation failed: {_playwright_error}")

    except Exception as e:
        _playwright_error = str(e) or type(e).__name__
        logger.error(f"Playwright validation failed: {_playwright_error}")
        logger.error("PDF generation will not work until this is resolved.")


# ============================================================================
# Response Models
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    timestamp: datetime
    active_renders: int
    max_concurrent: int
    playwright_ready: bool = True
    playwright_error: Optional[str] = None


def _active_renders() -> int:
    return settings.max_concurrent_pdfs - _pdf_semaphore._value


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


def _attachment_headers(data: ResumeData, extension: str, request_id: str) -> dict:
    return {
        "Content-Disposition": content_disposition(data.contact_info.name, extension),
        "X-Request-ID": request_id,
    }


# ============================================================================
# Health Check Endpoint
# ============================================================================

@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Health check endpoint for container orchestration.

    Returns HTTP 503 if Playwright validation failed on startup.
    """
    if not _playwright_ready:
        raise HTTPException(
            status_code=503,
            detail={
                "status": "unhealthy",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "active_renders": _active_renders(),
                "max_concurrent": settings.max_concurrent_pdfs,
                "playwright_ready": False,
                "playwright_error": _playwright_error,
                "message": "PDF service is unhealthy - Playwright/Chromium not available"
            }
        )

    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        active_renders=_active_renders(),
        max_concurrent=settings.max_concurrent_pdfs,
        playwright_ready=True,
        playwright_error=None
    )


# ============================================================================
# Resume Export Endpoints
# ============================================================================

@app.post("/resume/export-pdf")
async def export_resume_pdf(data: ResumeData):
    """
    Render a resume to PDF.

    Args:
        data: ResumeData JSON (camelCase keys)

    Returns:
        StreamingResponse with PDF binary data as an attachment

    Raises:
        HTTPException: 503 when every render slot is busy. Invalid input is
        rejected with 422 before this runs; render failures return
        500 {"error": "Failed to generate PDF"}.
    """
    if _pdf_semaphore._value <= 0:
        logger.warning("PDF service overloaded, rejecting request")
        raise HTTPException(
            status_code=503,
            detail="Service overloaded. Too many concurrent PDF operations."
        )

    request_id = uuid.uuid4().hex
    log = logger.bind(request_id=request_id, renderer="pdf")

    async with _pdf_semaphore:
        try:
            log.info(f"Starting resume PDF render ({len(data.experiences)} experiences)")
            html = render_resume_html(data)
            pdf_bytes = await render_html_to_pdf(
                html,
                timeout_ms=settings.playwright_timeout_ms,
                headless=settings.playwright_headless,
            )
            headers = _attachment_headers(data, "pdf", request_id)
        except RenderError as e:
            # Already logged with traceback by the renderer
            log.error("Resume PDF render failed", extra={"issue": e.issue.to_dict()})
            return _error_response("Failed to generate PDF")
        except asyncio.TimeoutError as e:
            issue = ExportIssue(
                renderer="pdf",
                operation="browser print",
                message=f"timed out after {settings.playwright_timeout_ms}ms",
                exception_type=type(e).__name__,
            )
            log.error(f"Resume PDF render {issue.message}", extra={"issue": issue.to_dict()})
            return _error_response("Failed to generate PDF")
        except Exception as e:
            issue = ExportIssue.from_exception("pdf", "browser print", e)
            log.exception(f"Resume PDF render failed: {issue.message}", extra={"issue": issue.to_dict()})
            return _error_response("Failed to generate PDF")

    log.info(f"Resume PDF render completed ({len(pdf_bytes)} bytes)")

    return StreamingResponse(BytesIO(pdf_bytes), media_type="application/pdf", headers=headers)


@app.post("/resume/export-docx")
def export_resume_docx(data: ResumeData):
    """
    Render a resume to DOCX.

    Sync handler: python-docx is CPU-bound, so FastAPI runs it in the
    threadpool. Failures return 500 {"error": "Failed to generate DOCX"}.
    """
    request_id = uuid.uuid4().hex
    log = logger.bind(request_id=request_id, renderer="docx")

    try:
        docx_bytes = render_resume_docx_bytes(data)
        headers = _attachment_headers(data, "docx", request_id)
    except RenderError as e:
        log.error("Resume DOCX render failed", extra={"issue": e.issue.to_dict()})
        return _error_response("Failed to generate DOCX")
    except Exception as e:
        issue = ExportIssue.from_exception("docx", "DOCX export", e)
        log.exception(f"Resume DOCX export failed: {issue.message}", extra={"issue": issue.to_dict()})
        return _error_response("Failed to generate DOCX")

    log.info(f"Resume DOCX render completed ({len(docx_bytes)} bytes)")

    return StreamingResponse(BytesIO(docx_bytes), media_type=DOCX_MEDIA_TYPE, headers=headers)


@app.post("/resume/preview-html", response_class=HTMLResponse)
def preview_resume_html(data: ResumeData):
    """Return the HTML document the PDF export would print."""
    try:
        return HTMLResponse(content=render_resume_html(data))
    except RenderError as e:
        logger.error("Resume HTML preview failed", extra={"issue": e.issue.to_dict()})
        return _error_response("Failed to render HTML")
