"""
Create user use case.

Validates the new user's data, makes sure the email is free and delegates
creation to the repository.
"""

import logging
from typing import Awaitable

from ..domain.entities import User, UserCreateData
from ..domain.exceptions import UserAlreadyExistsException
from ..domain.validators import check_email, check_name, is_blank
from .base import BaseUseCase

logger = logging.getLogger(__name__)


class CreateUserUseCase(BaseUseCase):
    """Business rules for creating a user."""

    def execute(self, data: UserCreateData) -> Awaitable[User]:
        """
        Create a new user.

        Input is validated immediately; the returned awaitable performs one
        existence check and, if the email is free, one create call.

        Args:
            data: Email and names of the new user

        Returns:
            Awaitable resolving to the created user

        Raises:
            ValidationException: Synchronously, if the input is invalid
            UserAlreadyExistsException: When awaited, if the email is taken
        """
        self._validate_user_data(data)
        return self._create(data)

    async def _create(self, data: UserCreateData) -> User:
        if await self.user_repository.exists_by_email(data.email):
            logger.warning(
                "Rejected duplicate email",
                extra={"extra_fields": {"email": data.email}},
            )
            raise UserAlreadyExistsException(data.email)

        user = await self.user_repository.create(data)
        logger.info(
            "Created user",
            extra={"extra_fields": {"user_id": user.id, "email": user.email}},
        )
        return user

    def _validate_user_data(self, data: UserCreateData) -> None:
        """Apply the creation rules in order, failing on the first violation."""
        if is_blank(data.email):
            self._reject("Email is required")
        if is_blank(data.first_name):
            self._reject("First name is required")
        if is_blank(data.last_name):
            self._reject("Last name is required")

        self._reject(check_email(data.email))
        self._reject(check_name(data.first_name, "First name"))
        self._reject(check_name(data.last_name, "Last name"))
