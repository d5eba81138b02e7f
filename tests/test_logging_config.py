"""
Tests for logging configuration and correlation ids.
"""

import json
import logging
import sys

import pytest

from user_management.domain.exceptions import UserNotFoundException
from user_management.logging_config import (
    CorrelationIdFilter,
    HumanReadableFormatter,
    StructuredFormatter,
    clear_correlation_id,
    get_correlation_id,
    set_correlation_id,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_correlation_id():
    yield
    clear_correlation_id()


def make_record(message="Created user", level=logging.INFO, extra_fields=None, error=None):
    exc_info = (type(error), error, None) if error is not None else None
    record = logging.LogRecord(
        name="user_management.test",
        level=level,
        pathname=__file__,
        lineno=10,
        msg=message,
        args=(),
        exc_info=exc_info,
    )
    if extra_fields is not None:
        record.extra_fields = extra_fields
    return record


class TestCorrelationId:
    def test_generated_when_missing(self):
        correlation_id = set_correlation_id()

        assert len(correlation_id) == 36
        assert get_correlation_id() == correlation_id

    def test_explicit_and_cleared(self):
        set_correlation_id("abc")
        assert get_correlation_id() == "abc"

        clear_correlation_id()
        assert get_correlation_id() is None

    def test_filter_stamps_record(self):
        set_correlation_id("req-9")
        record = make_record()

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == "req-9"


class TestStructuredFormatter:
    def test_json_includes_service_extra_fields_and_correlation_id(self):
        set_correlation_id("req-1")

        output = StructuredFormatter("users-api").format(
            make_record(extra_fields={"user_id": "42"})
        )
        data = json.loads(output)

        assert data["service"] == "users-api"
        assert data["message"] == "Created user"
        assert data["level"] == "INFO"
        assert data["logger"] == "user_management.test"
        assert data["correlation_id"] == "req-1"
        assert data["user_id"] == "42"

    def test_no_correlation_id_key_without_context(self):
        data = json.loads(StructuredFormatter().format(make_record()))

        assert "correlation_id" not in data
        assert "error_code" not in data

    def test_domain_error_code_and_user_message(self):
        record = make_record(level=logging.ERROR, error=UserNotFoundException("42"))

        data = json.loads(StructuredFormatter().format(record))

        assert data["error_code"] == "USER_NOT_FOUND"
        assert data["user_message"] == "User not found"
        assert "UserNotFoundException" in data["exception"]


class TestHumanReadableFormatter:
    def test_line_contains_short_correlation_id_and_fields(self):
        set_correlation_id("0123456789abcdef")

        line = HumanReadableFormatter().format(
            make_record(level=logging.WARNING, extra_fields={"user_id": "42"})
        )

        assert "WARNING" in line
        assert "[cid:01234567]" in line
        assert "Created user" in line
        assert line.endswith("user_id=42")

    def test_domain_error_shown_as_code_without_traceback(self):
        line = HumanReadableFormatter().format(
            make_record(level=logging.ERROR, error=UserNotFoundException("42"))
        )

        assert line.endswith("error_code=USER_NOT_FOUND")
        assert "\n" not in line

    def test_unexpected_error_keeps_traceback(self):
        line = HumanReadableFormatter().format(
            make_record(level=logging.ERROR, error=RuntimeError("boom"))
        )

        assert "RuntimeError: boom" in line


def test_setup_logging_replaces_root_handlers(restore_root_logger):
    root = restore_root_logger

    logger = setup_logging("DEBUG", service_name="user-management", use_json=True)

    assert logger.name == "user_management"
    assert logger.level == logging.DEBUG
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    handler = root.handlers[0]
    assert handler.stream is sys.stdout
    assert isinstance(handler.formatter, StructuredFormatter)
    assert handler.formatter.service_name == "user-management"
    assert any(isinstance(f, CorrelationIdFilter) for f in handler.filters)
    assert logging.getLogger("httpx").level == logging.WARNING
