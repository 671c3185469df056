"""
Structured JSON logging configuration.

Every log line is a single JSON object with a channel (store, catalog,
uploads, form, dashboard) and a business context such as the student or
course id a record refers to.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Optional

CHANNELS = ["store", "catalog", "uploads", "form", "dashboard"]


class StructuredJsonFormatter(logging.Formatter):
    """
    Formatter that renders each record as one JSON object.

    Keys:
    - timestamp: ISO 8601 timestamp in UTC
    - level: log severity
    - message: human-readable message
    - channel: log source (store, catalog, uploads, form, dashboard)
    - context: business context (student_id, course_id, ...)
    - extra: additional metadata (duration_ms, counts, ...)
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z",
            "level": record.levelname,
            "message": record.getMessage(),
            "channel": getattr(record, "channel", record.name.split(".")[-1]),
            "context": getattr(record, "context", {}) or {},
            "extra": getattr(record, "extra_data", {}) or {},
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """
    Configure the root logger with the JSON formatter on stdout and set the
    level of every channel logger.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(StructuredJsonFormatter())

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers = [handler]

    for channel in CHANNELS:
        logging.getLogger(f"roster.{channel}").setLevel(log_level)

    return root_logger


def get_logger(channel: str) -> logging.Logger:
    """Get the logger for a channel (store, catalog, uploads, form, dashboard)."""
    return logging.getLogger(f"roster.{channel}")


def log_with_context(logger: logging.Logger, level: str, message: str,
                     context: Optional[dict] = None, extra_data: Optional[dict] = None,
                     exc_info: bool = False):
    """
    Emit a structured log entry with business context and extra metadata.

    Args:
        logger: The channel logger to use
        level: Log level string (INFO, WARNING, ERROR, DEBUG)
        message: Human-readable log message
        context: Business context dict (student_id, course_id)
        extra_data: Additional metadata dict (duration_ms, total)
        exc_info: Attach the exception currently being handled
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.log(
        log_level,
        message,
        exc_info=exc_info,
        extra={
            "context": context or {},
            "extra_data": extra_data or {},
            "channel": logger.name.split(".")[-1],
        },
    )
