"""Logging setup for the git-summarizer server.

Provides:
- Correlation ID generation
- JSON structured logging
- Text logging (default)

All output goes to stderr; stdout carries the protocol.
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from datetime import datetime, timezone

from git_summarizer.config import AppConfig

LOGGER_NAME = "git-summarizer"

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_EXTRA_FIELDS = ("method", "tool", "latency_ms", "status", "error")


def generate_correlation_id() -> str:
    """Generate a unique correlation ID for request tracing."""
    return str(uuid.uuid4())[:8]  # Short form for readability


class JsonLogFormatter(logging.Formatter):
    """JSON structured log formatter with correlation ID support."""

    def __init__(self, include_correlation_id: bool = True):
        super().__init__()
        self.include_correlation_id = include_correlation_id

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname.lower(),
            "logger": record.name,
            "msg": record.getMessage(),
        }

        cid = getattr(record, "correlation_id", None)
        if self.include_correlation_id and cid:
            log_data["cid"] = cid

        for name in _EXTRA_FIELDS:
            value = getattr(record, name, None)
            if value is not None:
                log_data[name] = value

        if record.exc_info:
            log_data["exc"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, separators=(",", ":"))


def setup_logging(config: AppConfig, stream=None) -> logging.Logger:
    """Configure the server logger tree from settings.

    Args:
        config: Application configuration (log level and format)
        stream: Destination stream, stderr by default

    Returns:
        The configured root server logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.propagate = False

    level = getattr(logging, config.server.log_level.upper(), logging.INFO)
    logger.setLevel(level)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)

    if config.logging.format == "json":
        handler.setFormatter(
            JsonLogFormatter(include_correlation_id=config.logging.include_correlation_id)
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    logger.addHandler(handler)

    return logger
