"""Unit tests for the logging utility."""

from __future__ import annotations

import io
import json
import logging

from motomarket.core.logger import JSONFormatter, configure_logging, ensure_request_id


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG


def test_json_formatter_copies_known_extras() -> None:
    record = logging.LogRecord(
        name="motomarket.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="user %s registered",
        args=(7,),
        exc_info=None,
    )
    record.subject_id = 7
    record.code = "ok"
    record.password = "never-logged"

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "user 7 registered"
    assert payload["level"] == "INFO"
    assert payload["subject_id"] == 7
    assert payload["code"] == "ok"
    assert "password" not in payload


def test_request_id_prefers_the_incoming_header(app) -> None:
    with app.test_request_context("/", headers={"X-Correlation-ID": "corr-1"}):
        assert ensure_request_id() == "corr-1"
        assert ensure_request_id() == "corr-1"


def test_request_id_is_generated_outside_requests() -> None:
    assert ensure_request_id() != ensure_request_id()


def test_configure_logging_writes_json_lines() -> None:
    stream = io.StringIO()
    configure_logging("INFO", stream=stream)

    logging.getLogger("motomarket.test").info("deadline exceeded", extra={"unit": "users.sign_up"})
    logging.getLogger("motomarket.test").debug("filtered out")

    lines = stream.getvalue().splitlines()
    assert len(lines) == 1
    payload = json.loads(lines[0])
    assert payload["message"] == "deadline exceeded"
    assert payload["unit"] == "users.sign_up"
    assert payload["request_id"] is None
