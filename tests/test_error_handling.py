"""
Tests for the application error handler.
"""

from unittest.mock import MagicMock

import httpx
import pytest

from user_management.application.error_handling import ErrorHandler
from user_management.domain.exceptions import (
    ErrorKind,
    NetworkException,
    RepositoryException,
    UserNotFoundException,
    ValidationException,
)


@pytest.fixture
def notifier():
    return MagicMock()


@pytest.fixture
def handler(notifier):
    return ErrorHandler(notifier)


class TestUseCaseErrors:
    def test_domain_error_returned_unchanged(self, handler, notifier):
        error = UserNotFoundException("42")

        assert handler.handle_use_case_error("get_user", error) is error
        notifier.assert_not_called()

    def test_unknown_error_converted_and_notified(self, handler, notifier):
        result = handler.handle_use_case_error("get_user", KeyError("id"))

        assert isinstance(result, RepositoryException)
        notifier.assert_called_once_with("Operation Failed", "Data access error occurred")

    def test_transport_error_becomes_network_error(self, handler):
        request = httpx.Request("GET", "http://api.test/users")
        error = httpx.ReadTimeout("timed out", request=request)

        result = handler.handle_use_case_error("get_users", error)

        assert isinstance(result, NetworkException)


class TestOtherHandlers:
    def test_repository_error_notifies(self, handler, notifier):
        result = handler.handle_repository_error("create", RuntimeError("disk full"))

        assert result.message == "disk full"
        notifier.assert_called_once_with("Error", "Data access error occurred")

    def test_validation_errors_joined_for_notification(self, handler, notifier):
        result = handler.handle_validation_errors(["Email is required", "Invalid email format"])

        assert isinstance(result, ValidationException)
        assert result.validation_errors == ["Email is required", "Invalid email format"]
        notifier.assert_called_once_with(
            "Validation Error", "Email is required, Invalid email format"
        )

    def test_business_rule_violation(self, handler, notifier):
        result = handler.handle_business_rule_violation("Not allowed", "some_rule")

        assert result.rule == "some_rule"
        notifier.assert_called_once_with("Business Rule Violation", "Business rule violation")

    def test_silent_error_does_not_notify(self, handler, notifier):
        result = handler.handle_silent_error("bulk_operation", ValueError("bad"))

        assert result.kind == ErrorKind.REPOSITORY_ERROR
        notifier.assert_not_called()

    def test_works_without_notifier(self):
        result = ErrorHandler().handle_repository_error("create", RuntimeError("x"))

        assert isinstance(result, RepositoryException)


class TestHelpers:
    def test_is_domain_error(self):
        error = UserNotFoundException("42")

        assert ErrorHandler.is_domain_error(error)
        assert ErrorHandler.is_domain_error(error, ErrorKind.USER_NOT_FOUND)
        assert not ErrorHandler.is_domain_error(error, ErrorKind.NETWORK_ERROR)
        assert not ErrorHandler.is_domain_error(ValueError("x"))

    def test_extract_user_message(self):
        assert ErrorHandler.extract_user_message(UserNotFoundException("42")) == "User not found"
        assert (
            ErrorHandler.extract_user_message(RuntimeError("secret stack detail"))
            == "An unexpected error occurred"
        )
