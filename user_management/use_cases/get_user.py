"""Get user use case: lookups by id and by email."""

from typing import Awaitable, Optional

from ..domain.entities import User
from ..domain.validators import check_email
from .base import BaseUseCase


class GetUserUseCase(BaseUseCase):
    """
    Single-user lookups.

    A missing user is not exceptional here: the awaitable resolves to None.
    """

    def execute(self, user_id: str) -> Awaitable[Optional[User]]:
        """Get a user by id."""
        self._require_user_id(user_id)
        return self.user_repository.get_by_id(user_id)

    def execute_by_email(self, email: str) -> Awaitable[Optional[User]]:
        """Get a user by email address."""
        self._reject(check_email(email))
        return self.user_repository.get_by_email(email)
