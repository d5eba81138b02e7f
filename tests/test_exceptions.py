"""
Tests for domain exceptions and the exception factory.
"""

import httpx
import pytest

from user_management.domain.exceptions import (
    BusinessRuleViolationException,
    DomainException,
    DomainExceptionFactory,
    ErrorKind,
    InvalidUserDataException,
    NetworkException,
    RepositoryException,
    UserAlreadyExistsException,
    UserInactiveException,
    UserNotFoundException,
    ValidationException,
)


def status_error(status_code: int, json=None, url: str = "http://api.test/users/9"):
    """Build an httpx.HTTPStatusError for the given status."""
    request = httpx.Request("GET", url)
    if json is None:
        response = httpx.Response(status_code, request=request)
    else:
        response = httpx.Response(status_code, json=json, request=request)
    return httpx.HTTPStatusError("error", request=request, response=response)


class TestExceptions:
    """Test exception attributes."""

    def test_user_not_found(self):
        """Test UserNotFoundException."""
        exc = UserNotFoundException("123")

        assert exc.kind is ErrorKind.USER_NOT_FOUND
        assert exc.code == "USER_NOT_FOUND"
        assert exc.user_message == "User not found"
        assert "123" in str(exc)
        assert exc.details == {"user_id": "123"}

    def test_user_already_exists(self):
        """Test UserAlreadyExistsException."""
        exc = UserAlreadyExistsException("a@b.com")

        assert exc.code == "USER_ALREADY_EXISTS"
        assert exc.message == "User with email a@b.com already exists"

    def test_validation_exception_defaults_errors_to_message(self):
        """Test ValidationException keeps a list of errors."""
        exc = ValidationException("User ID is required")

        assert exc.code == "VALIDATION_ERROR"
        assert exc.validation_errors == ["User ID is required"]
        assert exc.details == {"errors": ["User ID is required"]}

    def test_business_rule_violation(self):
        """Test BusinessRuleViolationException carries the rule."""
        exc = BusinessRuleViolationException("Deactivate first", rule="deactivate_first")

        assert exc.rule == "deactivate_first"
        assert exc.user_message == "Business rule violation"

    def test_user_inactive_custom_message(self):
        """Test UserInactiveException accepts a custom message."""
        exc = UserInactiveException("9", "User is already inactive")

        assert exc.message == "User is already inactive"
        assert exc.user_message == "Cannot perform operation on inactive user"

    def test_every_kind_has_one_exception(self):
        """Test each ErrorKind is covered by exactly one subclass."""
        kinds = [cls.kind for cls in DomainException.__subclasses__()]

        assert sorted(kinds) == sorted(ErrorKind)

    def test_to_dict(self):
        """Test serialization of an exception."""
        exc = RepositoryException("boom", operation="get_all")

        assert exc.to_dict() == {
            "code": "REPOSITORY_ERROR",
            "message": "boom",
            "userMessage": "Data access error occurred",
            "details": {"operation": "get_all"},
        }

    def test_kind_can_be_matched(self):
        """Test callers can match on the error kind."""

        def describe(error: DomainException) -> str:
            match error.kind:
                case ErrorKind.USER_NOT_FOUND:
                    return "missing"
                case ErrorKind.NETWORK_ERROR:
                    return "offline"
                case _:
                    return "other"

        assert describe(UserNotFoundException("1")) == "missing"
        assert describe(NetworkException("down")) == "offline"


class TestDomainExceptionFactory:
    """Test translation of transport failures."""

    def test_404_maps_to_user_not_found(self):
        """Test not found status."""
        error = DomainExceptionFactory.from_http_error(status_error(404))

        assert isinstance(error, UserNotFoundException)

    def test_409_maps_to_already_exists(self):
        """Test conflict status uses the email from the body."""
        error = DomainExceptionFactory.from_http_error(
            status_error(409, json={"email": "taken@example.com"})
        )

        assert isinstance(error, UserAlreadyExistsException)
        assert error.email == "taken@example.com"

    def test_409_without_body(self):
        """Test conflict status without a body."""
        error = DomainExceptionFactory.from_http_error(status_error(409))

        assert isinstance(error, UserAlreadyExistsException)
        assert error.email == "unknown"

    def test_400_maps_to_invalid_user_data_with_field_errors(self):
        """Test bad request keeps server-provided field errors."""
        error = DomainExceptionFactory.from_http_error(
            status_error(400, json={"errors": ["email is invalid", "lastName too short"]})
        )

        assert isinstance(error, InvalidUserDataException)
        assert error.validation_errors == ["email is invalid", "lastName too short"]

    @pytest.mark.parametrize(
        "body,expected",
        [({"message": "Bad email"}, ["Bad email"]), ({}, ["Invalid data"])],
    )
    def test_400_fallback_messages(self, body, expected):
        """Test bad request without an errors list."""
        error = DomainExceptionFactory.from_http_error(status_error(400, json=body))

        assert error.validation_errors == expected

    def test_connection_error_maps_to_network(self):
        """Test connectivity failures."""
        request = httpx.Request("GET", "http://api.test/users")
        error = DomainExceptionFactory.from_http_error(
            httpx.ConnectError("Connection refused", request=request)
        )

        assert isinstance(error, NetworkException)
        assert error.user_message == "Network connection error"

    def test_timeout_maps_to_network(self):
        """Test timeouts count as connectivity failures."""
        request = httpx.Request("GET", "http://api.test/users")
        error = DomainExceptionFactory.from_http_error(
            httpx.ReadTimeout("timed out", request=request)
        )

        assert isinstance(error, NetworkException)

    @pytest.mark.parametrize("status_code", [401, 403, 500, 503])
    def test_other_status_maps_to_repository_error(self, status_code):
        """Test remaining statuses become RepositoryException."""
        error = DomainExceptionFactory.from_http_error(status_error(status_code))

        assert isinstance(error, RepositoryException)
        assert error.operation == "http://api.test/users/9"

    def test_unknown_exception_maps_to_repository_error(self):
        """Test non-HTTP exceptions."""
        error = DomainExceptionFactory.from_http_error(RuntimeError("kaput"))

        assert isinstance(error, RepositoryException)
        assert error.message == "kaput"

    def test_from_exception_passes_domain_errors_through(self):
        """Test domain exceptions are returned unchanged."""
        original = UserNotFoundException("1")

        assert DomainExceptionFactory.from_exception(original) is original

    def test_from_validation_errors(self):
        """Test validation factory."""
        error = DomainExceptionFactory.from_validation_errors(["a", "b"])

        assert isinstance(error, ValidationException)
        assert error.validation_errors == ["a", "b"]

    def test_business_rule_violation(self):
        """Test business rule factory."""
        error = DomainExceptionFactory.business_rule_violation("no", "rule_x")

        assert isinstance(error, BusinessRuleViolationException)
        assert error.rule == "rule_x"
