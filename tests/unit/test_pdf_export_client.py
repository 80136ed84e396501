"""
Unit tests for the pdf-service client.

The requests.Session is injected, so no network access is needed.
"""

from unittest.mock import MagicMock, patch

import pytest
import requests

from resume_export.api.pdf_export import ResumePDFExporter
from resume_export.common.error_handling import PDFExportError


def make_response(status_code: int = 200, content: bytes = b"%PDF-1.4", text: str = "") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = text
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def no_sleep():
    """Skip tenacity backoff waits."""
    with patch("time.sleep") as mock_sleep:
        yield mock_sleep


class TestResumePDFExporter:
    """Tests for ResumePDFExporter."""

    def test_export_pdf_posts_camel_case_json(self, session, full_resume):
        session.post.return_value = make_response(content=b"%PDF-1.4 data")
        exporter = ResumePDFExporter("http://pdf:8001/", session=session, timeout=5)

        assert exporter.export_pdf(full_resume) == b"%PDF-1.4 data"

        url = session.post.call_args.args[0]
        kwargs = session.post.call_args.kwargs
        assert url == "http://pdf:8001/resume/export-pdf"
        assert kwargs["timeout"] == 5
        assert kwargs["json"]["contactInfo"]["name"] == "Jane Doe"
        assert "startDate" in kwargs["json"]["experiences"][0]

    def test_export_docx_endpoint(self, session, full_resume):
        session.post.return_value = make_response(content=b"PK\x03\x04")
        exporter = ResumePDFExporter("http://pdf:8001", session=session)

        assert exporter.export_docx(full_resume) == b"PK\x03\x04"
        assert session.post.call_args.args[0] == "http://pdf:8001/resume/export-docx"

    def test_defaults_from_config(self, session):
        exporter = ResumePDFExporter(session=session)
        assert exporter.pdf_service_url.startswith("http")
        assert exporter.timeout > 0

    def test_each_exporter_owns_its_session(self):
        assert ResumePDFExporter().session is not ResumePDFExporter().session

    def test_non_200_raises_with_status(self, session, full_resume):
        session.post.return_value = make_response(status_code=500, text='{"error": "Failed to generate PDF"}')
        exporter = ResumePDFExporter("http://pdf:8001", session=session)

        with pytest.raises(PDFExportError) as exc_info:
            exporter.export_pdf(full_resume)
        assert exc_info.value.status_code == 500

    def test_timeout_not_retried(self, session, full_resume, no_sleep):
        session.post.side_effect = requests.exceptions.ReadTimeout("slow")
        exporter = ResumePDFExporter("http://pdf:8001", session=session)

        with pytest.raises(PDFExportError, match="timeout"):
            exporter.export_pdf(full_resume)
        assert session.post.call_count == 1

    def test_connect_timeout_not_retried(self, session, full_resume, no_sleep):
        """ConnectTimeout subclasses ConnectionError but is still a timeout."""
        session.post.side_effect = requests.exceptions.ConnectTimeout("no route")
        exporter = ResumePDFExporter("http://pdf:8001", session=session)

        with pytest.raises(PDFExportError, match="timeout"):
            exporter.export_pdf(full_resume)
        assert session.post.call_count == 1

    def test_connection_error_retried_then_raised(self, session, full_resume, no_sleep):
        session.post.side_effect = requests.exceptions.ConnectionError("refused")
        exporter = ResumePDFExporter("http://pdf:8001", session=session)

        with pytest.raises(PDFExportError, match="unavailable"):
            exporter.export_pdf(full_resume)
        assert session.post.call_count == 3

    def test_connection_error_recovers(self, session, full_resume, no_sleep):
        session.post.side_effect = [
            requests.exceptions.ConnectionError("refused"),
            make_response(content=b"%PDF-ok"),
        ]
        exporter = ResumePDFExporter("http://pdf:8001", session=session)

        assert exporter.export_pdf(full_resume) == b"%PDF-ok"
        assert session.post.call_count == 2
