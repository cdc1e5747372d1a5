"""Structured logging — JSON records and handler setup."""

import json
import logging

from seminary_site.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "seminary_site.test", logging.WARNING, __file__, 1, "Attempt failed", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_record_carries_backend_fields():
    line = JSONFormatter().format(_record(attempt=2, retries_left=1, table="courses"))
    payload = json.loads(line)
    assert payload["level"] == "WARNING"
    assert payload["message"] == "Attempt failed"
    assert payload["attempt"] == 2
    assert payload["retries_left"] == 1
    assert payload["table"] == "courses"
    assert "bucket" not in payload


def test_credentials_are_redacted():
    payload = json.loads(JSONFormatter().format(_record(access_token="secret")))
    assert payload["access_token"] == "[redacted]"
    assert "secret" not in json.dumps(payload)


def test_setup_logging_replaces_its_own_handler():
    first = setup_logging("DEBUG", "text")
    second = setup_logging("INFO", "json")
    try:
        assert first not in logging.root.handlers
        assert second in logging.root.handlers
        assert isinstance(second.formatter, JSONFormatter)
        assert logging.getLogger("httpx").level == logging.WARNING
    finally:
        logging.root.removeHandler(second)
