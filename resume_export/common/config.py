"""
Configuration loader for resume export clients and scripts.

Loads settings from environment variables (.env file).
The PDF service has its own validated settings in pdf_service.config.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """
    Centralized configuration for library callers and the CLI.

    All values loaded from environment variables.
    """

    # ===== PDF Service =====
    PDF_SERVICE_URL: str = os.getenv("PDF_SERVICE_URL", "http://localhost:8001")
    PDF_EXPORT_TIMEOUT_SECONDS: float = float(os.getenv("PDF_EXPORT_TIMEOUT_SECONDS", "60"))
    PDF_EXPORT_MAX_ATTEMPTS: int = int(os.getenv("PDF_EXPORT_MAX_ATTEMPTS", "3"))

    # ===== Logging =====
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "simple")

    @classmethod
    def validate(cls) -> None:
        """
        Validate configuration values.
        Raises ValueError if a setting is unusable.
        """
        if not cls.PDF_SERVICE_URL.startswith(("http://", "https://")):
            raise ValueError(f"Invalid PDF_SERVICE_URL: {cls.PDF_SERVICE_URL}")

        if cls.PDF_EXPORT_TIMEOUT_SECONDS <= 0:
            raise ValueError("PDF_EXPORT_TIMEOUT_SECONDS must be positive")

        if cls.PDF_EXPORT_MAX_ATTEMPTS < 1:
            raise ValueError("PDF_EXPORT_MAX_ATTEMPTS must be at least 1")

        if cls.LOG_FORMAT not in ("simple", "json"):
            raise ValueError("LOG_FORMAT must be 'simple' or 'json'")

    @classmethod
    def summary(cls) -> dict:
        """Get configuration summary for logging."""
        return {
            "pdf_service_url": cls.PDF_SERVICE_URL,
            "pdf_export_timeout_seconds": cls.PDF_EXPORT_TIMEOUT_SECONDS,
            "pdf_export_max_attempts": cls.PDF_EXPORT_MAX_ATTEMPTS,
            "log_level": cls.LOG_LEVEL,
            "log_format": cls.LOG_FORMAT,
        }
