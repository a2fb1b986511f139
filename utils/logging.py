"""
Logging Utility - Structured JSON Logging

Provides centralized, structured logging configuration for all crawler components.
Supports JSON format for production and human-readable format for development.

Usage:
    from utils.logging import get_logger

    logger = get_logger(__name__)
    logger.info("Crawl started", extra={"platform": "app_store", "app_id": "123"})
"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any

import orjson

TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    """Render each record as one orjson-encoded line, `extra` fields included.

    `static_fields` (app name, version, environment) are added to every line.
    """

    def __init__(self, static_fields: dict[str, Any] | None = None) -> None:
        super().__init__()
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **self.static_fields,
        }

        for key, value in vars(record).items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return orjson.dumps(payload, default=str).decode("utf-8")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def setup_logging(
    level: str = "INFO",
    format_type: str = "json",
    output: str = "stdout",
    static_fields: dict[str, Any] | None = None,
) -> None:
    """Configure application-wide logging.

    Replaces any handlers already installed on the root logger, so calling it
    twice does not duplicate output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Log format ('json' or 'text')
        output: Log output ('stdout' or 'stderr')
        static_fields: Fields stamped on every JSON line (ignored for 'text')

    Raises:
        ValueError: If format_type or output is not recognized
    """
    if format_type not in ("json", "text"):
        raise ValueError(f"Unknown log format: {format_type}")
    if output not in ("stdout", "stderr"):
        raise ValueError(f"Unknown log output: {output}")

    handler = logging.StreamHandler(sys.stdout if output == "stdout" else sys.stderr)
    if format_type == "json":
        handler.setFormatter(JsonFormatter(static_fields))
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # httpx logs every request at INFO; the crawler reports pages itself.
    logging.getLogger("httpx").setLevel(logging.WARNING)
