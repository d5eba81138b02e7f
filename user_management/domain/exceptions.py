"""
Domain exceptions for user management.

Every failure the core reports is a DomainException tagged with an ErrorKind.
Each kind carries a stable machine-readable code, a message that is safe to
show to end users, and optional structured details. Transport failures are
translated into these kinds by DomainExceptionFactory so raw HTTP errors
never reach the presentation layer.
"""

from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional

import httpx


class ErrorKind(str, Enum):
    """Closed set of domain error tags."""

    USER_NOT_FOUND = "USER_NOT_FOUND"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    INVALID_USER_DATA = "INVALID_USER_DATA"
    USER_INACTIVE = "USER_INACTIVE"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    REPOSITORY_ERROR = "REPOSITORY_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"


class DomainException(Exception):
    """
    Base exception for all user management domain errors.

    Subclasses pin ``kind`` and ``user_message``; ``message`` is the
    developer-facing text used in logs.
    """

    kind: ClassVar[ErrorKind]
    user_message: ClassVar[str] = "An unexpected error occurred"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def code(self) -> str:
        """Stable machine-readable error code."""
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses and structured logs."""
        return {
            "code": self.code,
            "message": self.message,
            "userMessage": self.user_message,
            "details": self.details,
        }


class UserNotFoundException(DomainException):
    """Raised when a user cannot be found by id."""

    kind = ErrorKind.USER_NOT_FOUND
    user_message = "User not found"

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(
            message=f"User with ID {user_id} not found",
            details={"user_id": user_id},
        )


class UserAlreadyExistsException(DomainException):
    """Raised when creating a user whose email is already taken."""

    kind = ErrorKind.USER_ALREADY_EXISTS
    user_message = "A user with this email already exists"

    def __init__(self, email: str):
        self.email = email
        super().__init__(
            message=f"User with email {email} already exists",
            details={"email": email},
        )


class InvalidUserDataException(DomainException):
    """Raised when user data violates entity invariants or is rejected upstream."""

    kind = ErrorKind.INVALID_USER_DATA
    user_message = "Invalid user data provided"

    def __init__(self, message: str, validation_errors: Optional[List[str]] = None):
        self.validation_errors = list(validation_errors or [message])
        super().__init__(
            message=message, details={"errors": self.validation_errors}
        )


class UserInactiveException(DomainException):
    """Raised when an operation requires an active user."""

    kind = ErrorKind.USER_INACTIVE
    user_message = "Cannot perform operation on inactive user"

    def __init__(self, user_id: str, message: Optional[str] = None):
        self.user_id = user_id
        super().__init__(
            message=message or f"User {user_id} is inactive",
            details={"user_id": user_id},
        )


class ValidationException(DomainException):
    """Raised when call arguments fail validation before any data access."""

    kind = ErrorKind.VALIDATION_ERROR
    user_message = "Validation failed"

    def __init__(self, message: str, validation_errors: Optional[List[str]] = None):
        self.validation_errors = list(validation_errors or [message])
        super().__init__(
            message=message, details={"errors": self.validation_errors}
        )


class BusinessRuleViolationException(DomainException):
    """Raised when a request is well-formed but breaks a business rule."""

    kind = ErrorKind.BUSINESS_RULE_VIOLATION
    user_message = "Business rule violation"

    def __init__(self, message: str, rule: str):
        self.rule = rule
        super().__init__(message=message, details={"rule": rule})


class RepositoryException(DomainException):
    """Raised when the data source fails for a reason with no better mapping."""

    kind = ErrorKind.REPOSITORY_ERROR
    user_message = "Data access error occurred"

    def __init__(self, message: str, operation: str):
        self.operation = operation
        super().__init__(message=message, details={"operation": operation})


class NetworkException(DomainException):
    """Raised when the data source cannot be reached."""

    kind = ErrorKind.NETWORK_ERROR
    user_message = "Network connection error"

    def __init__(self, message: str, reason: Optional[str] = None):
        details = {"reason": reason} if reason else {}
        super().__init__(message=message, details=details)


class DomainExceptionFactory:
    """Builds domain exceptions from transport failures and rule checks."""

    @staticmethod
    def from_http_error(error: Exception) -> DomainException:
        """
        Translate an httpx failure into a domain exception.

        Mapping:
            404 -> UserNotFoundException
            409 -> UserAlreadyExistsException
            400 -> InvalidUserDataException with the server's field errors
            connection/timeout failures -> NetworkException
            anything else -> RepositoryException

        Args:
            error: Exception raised by the HTTP transport

        Returns:
            Matching DomainException
        """
        if isinstance(error, httpx.HTTPStatusError):
            status = error.response.status_code
            url = str(error.request.url)
            body = _json_body(error.response)

            if status == 404:
                return UserNotFoundException(url or "unknown")

            if status == 409:
                return UserAlreadyExistsException(body.get("email") or "unknown")

            if status == 400:
                errors = body.get("errors") or [body.get("message") or "Invalid data"]
                return InvalidUserDataException("Validation failed", errors)

            return RepositoryException(
                f"Repository operation failed with status {status}", url or "unknown"
            )

        if isinstance(error, httpx.RequestError):
            return NetworkException(
                "Network connection failed", reason=type(error).__name__
            )

        return RepositoryException(
            str(error) or "Repository operation failed", "unknown"
        )

    @staticmethod
    def from_exception(error: Exception) -> DomainException:
        """Pass domain exceptions through and translate everything else."""
        if isinstance(error, DomainException):
            return error
        return DomainExceptionFactory.from_http_error(error)

    @staticmethod
    def from_validation_errors(errors: List[str]) -> ValidationException:
        """Create a validation exception from a list of messages."""
        return ValidationException("Validation failed", errors)

    @staticmethod
    def business_rule_violation(
        message: str, rule: str
    ) -> BusinessRuleViolationException:
        """Create a business rule violation."""
        return BusinessRuleViolationException(message, rule)


def _json_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
