"""
Logging for resume export.

Every export runs under a request-scoped adapter that stamps request_id and
renderer onto the log record itself. The formatters decide how to show
them: a "[req:xxxxxxxx] [pdf]" prefix for humans, separate JSON fields for
log aggregators.

Usage:
    log = get_logger(__name__, request_id=request_id, renderer="pdf")
    log.info("Starting resume PDF render")
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, Optional, Tuple

CONTEXT_FIELDS = ("request_id", "renderer", "issue")


def _context_prefix(record: logging.LogRecord) -> str:
    parts = []
    request_id = getattr(record, "request_id", None)
    renderer = getattr(record, "renderer", None)
    if request_id:
        parts.append(f"[req:{request_id[:8]}]")
    if renderer:
        parts.append(f"[{renderer}]")
    return f"{' '.join(parts)} " if parts else ""


class ExportLogAdapter(logging.LoggerAdapter):
    """Logger adapter carrying request_id and renderer on each record."""

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        extra = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs

    def bind(self, **context: Any) -> "ExportLogAdapter":
        """Adapter for the same logger with extra context (e.g. a request id)."""
        merged = dict(self.extra)
        merged.update({k: v for k, v in context.items() if v is not None})
        return ExportLogAdapter(self.logger, merged)


class SimpleFormatter(logging.Formatter):
    """Plain text lines with the export context as a message prefix."""

    def __init__(self):
        super().__init__("%(asctime)s [%(levelname)s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")

    def formatMessage(self, record: logging.LogRecord) -> str:
        record.message = f"{_context_prefix(record)}{record.message}"
        return super().formatMessage(record)


class JsonFormatter(logging.Formatter):
    """One JSON object per line; unset context fields are omitted."""

    def format(self, record: logging.LogRecord) -> str:
        data: Dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        for name in CONTEXT_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                data[name] = value
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Configure root logging with a stdout handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        format: Log format ("simple" or "json")
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(JsonFormatter() if format == "json" else SimpleFormatter())

    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(
    name: str,
    request_id: Optional[str] = None,
    renderer: Optional[str] = None,
) -> ExportLogAdapter:
    """
    Get a logger adapter for export code.

    Args:
        name: Logger name (usually __name__)
        request_id: Request identifier for correlating one export
        renderer: Renderer name ("html", "docx", "pdf")
    """
    context = {"request_id": request_id, "renderer": renderer}
    return ExportLogAdapter(logging.getLogger(name), {k: v for k, v in context.items() if v is not None})
