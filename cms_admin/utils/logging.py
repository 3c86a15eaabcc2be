"""
Structured Logging Setup

Plain or JSON-formatted log output for plugin registration and form
processing. JSON output includes a request id so that one registration
request can be traced across fields.
"""

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone

from cms_admin.config import settings

# Context variable for request ID (thread-safe)
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

PLAIN_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


class RequestIdFilter(logging.Filter):
    """Logging filter to add request ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("")
        return True


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs in a format suitable for log aggregation systems
    like ELK Stack, Loki, or CloudWatch.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", ""),
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields from record
        for key in ["hook", "field_type", "field_name", "plugin", "slug"]:
            if hasattr(record, key):
                log_data[key] = getattr(record, key)

        return json.dumps(log_data)


def configure_logging(
    level: str | None = None,
    json_format: bool | None = None,
    logger_name: str = "cms_admin",
) -> logging.Logger:
    """
    Attach a single stream handler to the package logger.

    ``level`` and ``json_format`` default to Settings.log_level and
    Settings.log_json.

    Calling it again replaces the previous handler instead of stacking a
    second one.
    """
    if level is None:
        level = settings.log_level
    if json_format is None:
        json_format = settings.log_json

    logger = logging.getLogger(logger_name)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_cms_admin_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler._cms_admin_handler = True  # type: ignore[attr-defined]
    handler.addFilter(RequestIdFilter())
    handler.setFormatter(StructuredFormatter() if json_format else logging.Formatter(PLAIN_FORMAT))
    logger.addHandler(handler)
    return logger
