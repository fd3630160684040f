# src/ticket_logger/tests/test_logging/test_filters.py
import logging

import pytest

from ticket_logger.core.logging.filters import (
    RedactFilter,
    RequestIdFilter,
    is_valid_request_id,
    reset_request_id,
    set_request_id,
)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "hello", (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_request_id_defaults_to_dash():
    record = make_record()
    assert RequestIdFilter().filter(record) is True
    assert record.request_id == "-"


def test_request_id_from_contextvar():
    token = set_request_id("req-123")
    try:
        record = make_record()
        RequestIdFilter().filter(record)
        assert record.request_id == "req-123"
    finally:
        reset_request_id(token)


def test_explicit_request_id_wins_over_contextvar():
    token = set_request_id("from-context")
    try:
        record = make_record(request_id="explicit")
        RequestIdFilter().filter(record)
        assert record.request_id == "explicit"
    finally:
        reset_request_id(token)


def test_redact_filter_masks_sensitive_extras():
    record = make_record(password="hunter2", Token="abc", username="alice")

    assert RedactFilter().filter(record) is True

    assert record.password == RedactFilter.MASK
    assert record.Token == RedactFilter.MASK
    assert record.username == "alice"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("abc-123", True),
        ("3f2b1c9e-6d2a-4b8e-9d7f-0a1b2c3d4e5f", True),
        ("", False),
        (None, False),
        ("has space", False),
        ("line\nbreak", False),
        ("x" * 129, False),
    ],
)
def test_is_valid_request_id(value, expected):
    assert is_valid_request_id(value) is expected
