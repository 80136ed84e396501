"""
Client for the resume PDF service.

Posts ResumeData JSON to pdf-service and returns the rendered bytes. Each
exporter owns its requests.Session, so callers (and tests) inject or swap
the HTTP client per instance.
"""

import logging
from typing import Optional

import requests
from tenacity import (
    retry,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from resume_export.common.config import Config
from resume_export.common.error_handling import PDFExportError
from resume_export.resume.types import ResumeData

logger = logging.getLogger(__name__)


class ResumePDFExporter:
    """Export resumes through pdf-service."""

    def __init__(
        self,
        pdf_service_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.pdf_service_url = (pdf_service_url or Config.PDF_SERVICE_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout or Config.PDF_EXPORT_TIMEOUT_SECONDS

    def export_pdf(self, data: ResumeData) -> bytes:
        """
        Render a resume to PDF via pdf-service.

        Args:
            data: Resume to render

        Returns:
            PDF binary content

        Raises:
            PDFExportError: On timeout, unreachable service or non-200 response
        """
        return self._export("/resume/export-pdf", data)

    def export_docx(self, data: ResumeData) -> bytes:
        """Render a resume to DOCX via pdf-service."""
        return self._export("/resume/export-docx", data)

    def _export(self, path: str, data: ResumeData) -> bytes:
        payload = data.model_dump(mode="json", by_alias=True)

        try:
            response = self._post(path, payload)
        except requests.exceptions.Timeout:
            logger.error(f"PDF service timeout ({path})")
            raise PDFExportError("PDF service timeout - please try again")
        except requests.exceptions.ConnectionError:
            logger.error(f"PDF service unavailable ({path})")
            raise PDFExportError("PDF service unavailable")

        if response.status_code != 200:
            logger.error(f"PDF service error: {response.status_code} - {response.text[:200]}")
            raise PDFExportError(
                f"PDF service error: {response.status_code}",
                status_code=response.status_code,
            )

        return response.content

    @retry(
        stop=stop_after_attempt(Config.PDF_EXPORT_MAX_ATTEMPTS),
        wait=wait_exponential(min=1, max=5),
        # ConnectTimeout is a ConnectionError too; timeouts are not retried
        retry=(
            retry_if_exception_type(requests.exceptions.ConnectionError)
            & retry_if_not_exception_type(requests.exceptions.Timeout)
        ),
        reraise=True,
    )
    def _post(self, path: str, payload: dict) -> requests.Response:
        return self.session.post(
            f"{self.pdf_service_url}{path}",
            json=payload,
            timeout=self.timeout,
        )
