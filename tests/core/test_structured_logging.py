"""Tests for structured (JSON) logging output.

The session refresh and event listener attach realm / event_type context
via extra=.  If those fields stop reaching the JSON output, per-realm
failures can no longer be filtered in the log pipeline.
"""

from __future__ import annotations

import json
import logging
import sys

from iam_metrics.core.logging import _ContainerFormatter, _JsonFormatter


def test_json_formatter_produces_valid_json() -> None:
    formatter = _JsonFormatter()
    record = logging.LogRecord(
        name="iam_metrics.services.exporter",
        level=logging.INFO,
        pathname="exporter.py",
        lineno=42,
        msg="Hello %s",
        args=("world",),
        exc_info=None,
    )
    parsed = json.loads(formatter.format(record))
    assert parsed["level"] == "INFO"
    assert parsed["logger"] == "iam_metrics.services.exporter"
    assert parsed["message"] == "Hello world"
    assert "timestamp" in parsed


def test_json_formatter_includes_context_fields() -> None:
    formatter = _JsonFormatter()
    record = logging.LogRecord(
        name="test",
        level=logging.DEBUG,
        pathname="event_listener.py",
        lineno=1,
        msg="Received user event",
        args=(),
        exc_info=None,
    )
    record.realm = "myrealm"  # type: ignore[attr-defined]
    record.event_type = "LOGIN"  # type: ignore[attr-defined]

    parsed = json.loads(formatter.format(record))
    assert parsed["realm"] == "myrealm"
    assert parsed["event_type"] == "LOGIN"


def test_json_formatter_ignores_unknown_extra_fields() -> None:
    formatter = _JsonFormatter()
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="event_listener.py",
        lineno=1,
        msg="Received user event",
        args=(),
        exc_info=None,
    )
    record.realm = "myrealm"  # type: ignore[attr-defined]
    record.route = "/realms/{realm}"  # type: ignore[attr-defined]
    record.status_code = 404  # type: ignore[attr-defined]

    parsed = json.loads(formatter.format(record))
    assert set(parsed) == {"timestamp", "level", "logger", "message", "realm"}


def test_json_formatter_includes_exception_info() -> None:
    formatter = _JsonFormatter()
    try:
        raise LookupError("client store unavailable")
    except LookupError:
        record = logging.LogRecord(
            name="test",
            level=logging.ERROR,
            pathname="session_gauge.py",
            lineno=1,
            msg="refresh failed",
            args=(),
            exc_info=sys.exc_info(),
        )
        output = formatter.format(record)

    parsed = json.loads(output)
    assert "LookupError: client store unavailable" in parsed["exception"]


def test_container_formatter_is_not_json() -> None:
    record = logging.LogRecord(
        name="iam_metrics.main",
        level=logging.INFO,
        pathname="main.py",
        lineno=10,
        msg="iam-metrics started",
        args=(),
        exc_info=None,
    )
    output = _ContainerFormatter().format(record)
    assert "INFO" in output
    assert "iam_metrics.main" in output
    try:
        json.loads(output)
        raise AssertionError("Container format should not be valid JSON")
    except json.JSONDecodeError:
        pass
