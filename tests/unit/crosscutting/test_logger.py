"""
Name: JSON Logger Tests

Responsibilities:
  - Request context is merged into every record
  - Sensitive extra fields are redacted
"""

import json
import logging

import pytest

from taskboard.context import clear_context, set_request_context, set_user_context
from taskboard.crosscutting.logger import JSONFormatter

pytestmark = pytest.mark.unit


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="taskboard",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formatter_includes_request_context():
    set_request_context(request_id="req-1", method="GET", path="/tasks")
    set_user_context(7)
    try:
        payload = json.loads(JSONFormatter().format(_record("hola")))
    finally:
        clear_context()

    assert payload["message"] == "hola"
    assert payload["request_id"] == "req-1"
    assert payload["method"] == "GET"
    assert payload["path"] == "/tasks"
    assert payload["user_id"] == "7"


def test_formatter_redacts_secrets():
    payload = json.loads(
        JSONFormatter().format(
            _record("login", password="pw123", token="abc", username="alice")
        )
    )

    assert payload["password"] == "***REDACTADO***"
    assert payload["token"] == "***REDACTADO***"
    assert payload["username"] == "alice"


def test_formatter_redacts_nested_secrets_and_serializes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        import sys

        record = _record("fallo", payload={"Authorization": "abc", "n": 1})
        record.exc_info = sys.exc_info()

    payload = json.loads(JSONFormatter().format(record))

    assert payload["payload"] == {"Authorization": "***REDACTADO***", "n": 1}
    assert payload["exception"]["type"] == "RuntimeError"
    assert payload["exception"]["message"] == "boom"
