"""Tests for structured JSON logging."""

from __future__ import annotations

import io
import json
import logging

import pytest

from shiftpay.core.logging_config import StructuredFormatter, configure_logging, reset_logging


@pytest.fixture
def stream():
    reset_logging()
    buffer = io.StringIO()
    configure_logging("DEBUG", stream=buffer)
    yield buffer
    reset_logging()


def test_emits_one_json_line_per_record(stream):
    logging.getLogger("shiftpay.payroll.service").info(
        "Calculated %d lines", 3, extra={"account": "mycafe"},
    )
    payload = json.loads(stream.getvalue().strip())
    assert payload["level"] == "INFO"
    assert payload["logger"] == "shiftpay.payroll.service"
    assert payload["message"] == "Calculated 3 lines"
    assert payload["account"] == "mycafe"


def test_includes_exception_details(stream):
    try:
        raise ValueError("boom")
    except ValueError:
        logging.getLogger("shiftpay.api").exception("failed")
    payload = json.loads(stream.getvalue().strip())
    assert payload["exc_type"] == "ValueError"
    assert payload["exc_message"] == "boom"


def _structured_handlers() -> list[logging.Handler]:
    return [
        h for h in logging.getLogger("shiftpay").handlers
        if isinstance(h.formatter, StructuredFormatter)
    ]


def test_configure_is_idempotent(stream):
    before = list(logging.getLogger("shiftpay").handlers)
    configure_logging("INFO", stream=io.StringIO())
    assert logging.getLogger("shiftpay").handlers == before
    assert len(_structured_handlers()) == 1
