"""
Centralized error handling for resume export.

Provides the exception hierarchy raised by renderers and the PDF client,
the ExportIssue record logged for every failed export step, and a decorator
that turns renderer failures into RenderError.
"""

import logging
from functools import wraps
from typing import Any, Callable, Dict, Optional, TypeVar
from dataclasses import dataclass, field
from datetime import datetime, timezone

# Type variable for generic return types
T = TypeVar("T")


@dataclass
class ExportIssue:
    """
    Structured description of an export failure.

    Logged as the "issue" field of JSON log lines.
    """

    renderer: str  # e.g., "html", "docx", "pdf"
    operation: str  # e.g., "HTML render", "browser print"
    message: str
    exception_type: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @classmethod
    def from_exception(cls, renderer: str, operation: str, exc: BaseException) -> "ExportIssue":
        """Build an issue from a caught exception."""
        return cls(
            renderer=renderer,
            operation=operation,
            message=str(exc) or type(exc).__name__,
            exception_type=type(exc).__name__,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "renderer": self.renderer,
            "operation": self.operation,
            "message": self.message,
            "exception_type": self.exception_type,
            "timestamp": self.timestamp,
        }


class ExportError(Exception):
    """Base class for resume export failures."""


class RenderError(ExportError):
    """A renderer could not produce its document."""

    def __init__(self, issue: ExportIssue):
        super().__init__(f"{issue.operation} failed: {issue.message}")
        self.issue = issue


class PDFExportError(ExportError):
    """The PDF service could not be reached or returned an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def export_operation(operation_name: str, renderer: str = "unknown", log_success: bool = True):
    """
    Decorator for renderer entrypoints with consistent error handling.

    Provides:
    - DEBUG logging on success (if log_success=True)
    - ERROR logging with stack trace and an ExportIssue on failure
    - Failures re-raised as RenderError (chained to the original exception)

    Args:
        operation_name: Human-readable operation name (e.g., "HTML render")
        renderer: Renderer identifier (e.g., "html", "docx")
        log_success: If True, logs successful completion

    Usage:
        @export_operation("DOCX render", renderer="docx")
        def render_resume_docx(data):
            ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            logger = logging.getLogger(func.__module__)
            try:
                result = func(*args, **kwargs)
            except RenderError:
                raise
            except Exception as e:
                issue = ExportIssue.from_exception(renderer, operation_name, e)
                logger.error(
                    f"{operation_name} failed: {issue.message}",
                    exc_info=True,
                    extra={"renderer": renderer, "issue": issue.to_dict()},
                )
                raise RenderError(issue) from e

            if log_success:
                logger.debug(f"{operation_name} completed", extra={"renderer": renderer})
            return result

        return wrapper

    return decorator
