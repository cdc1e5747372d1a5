"""Structured Logging — JSON formatter and setup for the seminary site API.

Invariants:
    - Every record carries timestamp, level, logger name and message
    - Backend call fields (attempt, retries_left, table, bucket, error_code, ...)
      are copied from `extra` when present
    - Values of credential-like fields never reach the output
    - setup_logging is idempotent: a second call replaces its own handler

Design Decisions:
    - JSONFormatter on stdlib logging: one JSON object per line for the log shipper
    - httpx request logging held at WARNING: the retry wrapper already logs
      each failed attempt with more context
"""

import json
import logging
from datetime import datetime, timezone

_EXTRA_FIELDS = (
    "attempt", "retries_left", "status_code", "method", "url",
    "table", "bucket", "object_path", "error_code", "error_kind", "path",
)
_REDACTED_FIELDS = ("access_token", "refresh_token", "password", "apikey")
_HANDLER_NAME = "seminary_site"


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        for key in _REDACTED_FIELDS:
            if key in record.__dict__:
                log[key] = "[redacted]"
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the application handler on the root logger."""
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    logging.getLogger("httpx").setLevel(logging.WARNING)
    return handler
