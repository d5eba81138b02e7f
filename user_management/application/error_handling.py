"""
Application-level error handling.

Logs failures, turns anything that is not already a domain exception into
one, and optionally forwards the user-facing message to a notifier (for
example a UI toast service supplied by the presentation layer).
"""

import logging
from typing import Callable, List, Optional

from ..domain.exceptions import (
    BusinessRuleViolationException,
    DomainException,
    DomainExceptionFactory,
    ErrorKind,
    ValidationException,
)

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]


class ErrorHandler:
    """
    Converts and reports errors raised below the application layer.

    The ``handle_*`` methods return the domain exception for the caller to
    raise; they never swallow it.
    """

    def __init__(self, notifier: Optional[Notifier] = None):
        """
        Args:
            notifier: Optional callback receiving ``(title, user_message)``
        """
        self.notifier = notifier

    def _notify(self, title: str, message: str) -> None:
        if self.notifier is not None:
            self.notifier(title, message)

    def handle_repository_error(self, operation: str, error: Exception) -> DomainException:
        """Convert a repository failure and notify the user."""
        domain_error = DomainExceptionFactory.from_exception(error)
        logger.error(
            f"Repository operation '{operation}' failed",
            extra={"extra_fields": {"operation": operation, **domain_error.to_dict()}},
        )
        self._notify("Error", domain_error.user_message)
        return domain_error

    def handle_validation_errors(self, errors: List[str]) -> ValidationException:
        domain_error = DomainExceptionFactory.from_validation_errors(errors)
        self._notify("Validation Error", ", ".join(errors))
        return domain_error

    def handle_business_rule_violation(
        self, message: str, rule: str
    ) -> BusinessRuleViolationException:
        domain_error = DomainExceptionFactory.business_rule_violation(message, rule)
        self._notify("Business Rule Violation", domain_error.user_message)
        return domain_error

    def handle_use_case_error(self, use_case: str, error: Exception) -> DomainException:
        """
        Handle a failure raised by a use case.

        Domain exceptions are returned unchanged. Anything else is converted,
        logged with its traceback and reported through the notifier.
        """
        if isinstance(error, DomainException):
            logger.info(
                f"Use case '{use_case}' failed: {error.message}",
                extra={"extra_fields": {"use_case": use_case, "code": error.code}},
            )
            return error

        domain_error = DomainExceptionFactory.from_exception(error)
        logger.error(
            f"Use case '{use_case}' failed with unexpected error",
            exc_info=error,
            extra={"extra_fields": {"use_case": use_case, "code": domain_error.code}},
        )
        self._notify("Operation Failed", domain_error.user_message)
        return domain_error

    def handle_silent_error(self, operation: str, error: Exception) -> DomainException:
        """Convert and log without notifying the user."""
        domain_error = DomainExceptionFactory.from_exception(error)
        logger.warning(
            f"Silent error in operation '{operation}': {domain_error.message}",
            extra={"extra_fields": {"operation": operation, "code": domain_error.code}},
        )
        return domain_error

    def log_error(self, error: Exception, context: Optional[str] = None) -> None:
        prefix = f"[{context}] " if context else ""
        logger.error(f"{prefix}Error logged: {error}", exc_info=error)

    @staticmethod
    def is_domain_error(error: Exception, kind: Optional[ErrorKind] = None) -> bool:
        if not isinstance(error, DomainException):
            return False
        return kind is None or error.kind == kind

    @staticmethod
    def extract_user_message(error: Exception) -> str:
        """Message that is safe to show to an end user."""
        if isinstance(error, DomainException):
            return error.user_message
        return "An unexpected error occurred"
