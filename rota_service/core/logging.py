# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Structured JSON logging — one JSON object per line on stdout.

Context passed through ``extra=`` (request id, member, task, fallback reason)
is lifted into top-level keys so log queries can filter on it.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from rota_service.core.config import settings

CONTEXT_FIELDS: tuple[str, ...] = (
    "request_id",
    "member_id",
    "task_id",
    "source",
    "reason",
)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "service": settings.SERVICE_NAME,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            value = getattr(record, key, None)
            if value is not None:
                entry[key] = value
        if record.exc_info and record.exc_info[1]:
            entry["error"] = str(record.exc_info[1])
            entry["error_type"] = type(record.exc_info[1]).__name__
        return json.dumps(entry, default=str)


def get_logger(name: str | None = None) -> logging.Logger:
    """Logger writing JSON lines to stdout at ``LOG_LEVEL``; configured once per name."""
    logger = logging.getLogger(name or settings.SERVICE_NAME)
    if logger.handlers:
        return logger
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    logger.addHandler(handler)
    logger.setLevel(logging.getLevelName(settings.LOG_LEVEL.upper()))
    logger.propagate = False
    return logger
