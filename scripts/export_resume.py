"""
Export a JSON resume to HTML, DOCX or PDF.

Reads ResumeData JSON (the same camelCase shape the web client posts) and
renders it locally. PDF output drives Playwright directly unless
--via-service is given, in which case the running pdf-service renders it.

Usage:
    python scripts/export_resume.py resume.json --format html
    python scripts/export_resume.py resume.json --format docx --output Jane_Doe.docx
    python scripts/export_resume.py resume.json --format pdf --via-service
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from pdf_service.pdf_helpers import build_export_filename, render_html_to_pdf
from resume_export.api.pdf_export import ResumePDFExporter
from resume_export.common.config import Config
from resume_export.common.error_handling import ExportError
from resume_export.common.logger import get_logger, setup_logging
from resume_export.resume.docx_renderer import render_resume_docx_bytes
from resume_export.resume.html_renderer import render_resume_html
from resume_export.resume.types import ResumeData

logger = get_logger(__name__)

FORMATS = ("html", "docx", "pdf")


def load_resume(input_path: Path) -> ResumeData:
    """
    Read and validate a resume JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the JSON doesn't match ResumeData
    """
    input_path = Path(input_path).resolve()
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")
    with open(input_path, "r", encoding="utf-8") as f:
        return ResumeData.model_validate(json.load(f))


def export_resume(
    data: ResumeData,
    fmt: str,
    output_path: Optional[Path] = None,
    via_service: bool = False,
) -> Path:
    """
    Render the resume and write it to disk.

    Args:
        data: Validated resume
        fmt: "html", "docx" or "pdf"
        output_path: Target file (default: <Name>_<Month>_<Year>.<fmt> in cwd)
        via_service: Render PDF/DOCX through pdf-service instead of locally

    Returns:
        Path to the written file
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format: {fmt}")

    if output_path is None:
        output_path = Path.cwd() / build_export_filename(data.contact_info.name, fmt)
    output_path = Path(output_path).resolve()

    if fmt == "html":
        output_path.write_text(render_resume_html(data), encoding="utf-8")
    elif via_service:
        exporter = ResumePDFExporter()
        content = exporter.export_pdf(data) if fmt == "pdf" else exporter.export_docx(data)
        output_path.write_bytes(content)
    elif fmt == "docx":
        output_path.write_bytes(render_resume_docx_bytes(data))
    else:
        html = render_resume_html(data)
        output_path.write_bytes(asyncio.run(render_html_to_pdf(html)))

    logger.info(f"Wrote {fmt.upper()} resume to {output_path}")
    return output_path


def main():
    """CLI entry point for resume export."""
    parser = argparse.ArgumentParser(
        description="Export a JSON resume to HTML, DOCX or PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Preview the HTML the PDF path prints
    python scripts/export_resume.py resume.json --format html

    # Local DOCX with a custom name
    python scripts/export_resume.py resume.json --format docx -o Jane_Doe.docx

    # PDF through a running pdf-service (PDF_SERVICE_URL)
    python scripts/export_resume.py resume.json --format pdf --via-service
        """
    )

    parser.add_argument("input", type=str, help="Path to the resume JSON file")
    parser.add_argument(
        "--format", "-f",
        choices=FORMATS,
        default="pdf",
        help="Output format (default: pdf)"
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Output path (default: <Name>_<Month>_<Year>.<format> in the current directory)"
    )
    parser.add_argument(
        "--via-service",
        action="store_true",
        help="Render PDF/DOCX through pdf-service instead of locally"
    )

    args = parser.parse_args()
    setup_logging(level=Config.LOG_LEVEL, format=Config.LOG_FORMAT)

    try:
        data = load_resume(Path(args.input))
        export_resume(
            data,
            args.format,
            output_path=Path(args.output) if args.output else None,
            via_service=args.via_service,
        )
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        sys.exit(1)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Invalid resume JSON: {e}")
        sys.exit(1)
    except ExportError as e:
        logger.error(f"Export failed: {e}")
        sys.exit(1)
    except asyncio.TimeoutError:
        logger.error("PDF rendering timed out")
        sys.exit(1)


if __name__ == "__main__":
    main()
