"""Structured Logging — JSON fields and the compact text format."""

import json
import logging

from union.infrastructure.observability import JSONFormatter, TEXT_DATE_FORMAT, TEXT_FORMAT


def _record(msg="hello", **extra):
    record = logging.LogRecord("union.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_emits_core_fields():
    payload = json.loads(JSONFormatter().format(_record()))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "union.test"
    assert payload["message"] == "hello"
    assert "timestamp" in payload


def test_json_formatter_surfaces_known_extras_only():
    payload = json.loads(JSONFormatter().format(
        _record(user_id="42", server_id=7, error_code="X", unrelated="nope"),
    ))
    assert payload["user_id"] == "42"
    assert payload["server_id"] == 7
    assert payload["error_code"] == "X"
    assert "unrelated" not in payload


def test_text_format_is_time_then_padded_level():
    formatter = logging.Formatter(TEXT_FORMAT, TEXT_DATE_FORMAT)
    line = formatter.format(_record("ready"))
    assert line.endswith("] [INFO ] ready")
    assert line[0] == "[" and line[9] == "]"
