"""Centralized logging configuration.

The gateway handles prompts and provider credentials, so logs are metadata only:
- One JSON object per line on stdout, ready for centralized collection
- Prompts, generated text, API keys, bodies and query strings are never logged
- `extra=` fields are optional; the formatter never raises when one is missing
"""

from __future__ import annotations

import json
import logging
import logging.config
import os
from datetime import UTC, datetime
from typing import Any


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Structured fields copied from `extra=` when present, in output order.
EXTRA_FIELDS: tuple[str, ...] = (
    "request_id",
    "status_code",
    "duration_ms",
    "config_name",
    "outcome",
    "handle",
    "error",
)


class JsonFormatter(logging.Formatter):
    """Render records as JSON, tolerating records without our `extra` fields.

    A `'%(request_id)s'`-style format string would raise KeyError on third-party records,
    so fields are read with getattr instead.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "method": getattr(record, "http_method", None),
            "path": getattr(record, "request_path", None),
        }
        for name in EXTRA_FIELDS:
            payload[name] = getattr(record, name, None)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logging() -> None:
    """Send all logs through the JSON formatter to stdout at LOG_LEVEL."""

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {"()": "llm_gateway.core.logging.JsonFormatter"},
            },
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stdout",
                }
            },
            "loggers": {
                # Debug narration is opt-in per call; keep it at INFO so it is not filtered.
                "llm_gateway.gateway.debug": {"level": "INFO"},
            },
            "root": {
                "level": LOG_LEVEL,
                "handlers": ["stdout"],
            },
        }
    )
