"""
BaseUseCase - shared foundation for the user use cases.

Every use case receives its repository at construction time. Argument
checks raise ValidationException synchronously, before any awaitable is
handed back, so callers can tell a malformed request apart from a failure
reported by the data source.
"""

import logging
from typing import Optional

from ..domain.exceptions import ValidationException
from ..domain.validators import is_blank
from ..repositories.user_repository import IUserRepository

logger = logging.getLogger(__name__)


class BaseUseCase:
    """Holds the repository dependency and common argument checks."""

    def __init__(self, user_repository: IUserRepository):
        self.user_repository = user_repository

    def _reject(self, message: Optional[str]) -> None:
        """Raise ValidationException if ``message`` is set."""
        if message:
            logger.debug(
                "Rejected use case input",
                extra={
                    "extra_fields": {
                        "use_case": type(self).__name__,
                        "reason": message,
                    }
                },
            )
            raise ValidationException(message)

    def _require_user_id(self, user_id: Optional[str]) -> None:
        if is_blank(user_id):
            self._reject("User ID is required")
