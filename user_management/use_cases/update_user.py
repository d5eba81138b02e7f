"""
Update user use case.

Only active users can be updated. Name fields are checked against the same
rules as creation, after the existence and activity checks.
"""

import logging
from typing import Awaitable

from ..domain.entities import User, UserUpdateData
from ..domain.exceptions import UserInactiveException, UserNotFoundException
from ..domain.validators import check_name, is_blank
from .base import BaseUseCase

logger = logging.getLogger(__name__)


class UpdateUserUseCase(BaseUseCase):
    """Business rules for updating a user's names."""

    def execute(self, user_id: str, data: UserUpdateData) -> Awaitable[User]:
        """
        Update a user.

        Args:
            user_id: Id of the user to update
            data: Fields to change; omitted fields are left to the repository

        Returns:
            Awaitable resolving to the updated user

        Raises:
            ValidationException: Synchronously for an empty id or payload, and
                when awaited if a provided name is invalid
            UserNotFoundException: When awaited, if the user does not exist
            UserInactiveException: When awaited, if the user is inactive
        """
        self._require_user_id(user_id)
        if data is None or data.is_empty():
            self._reject("Update data is required")
        return self._update(user_id, data)

    async def _update(self, user_id: str, data: UserUpdateData) -> User:
        existing = await self.user_repository.get_by_id(user_id)
        if existing is None:
            raise UserNotFoundException(user_id)

        if not existing.is_active:
            logger.warning(
                "Rejected update of inactive user",
                extra={"extra_fields": {"user_id": user_id}},
            )
            raise UserInactiveException(user_id, "Cannot update inactive user")

        self._validate_update_data(data)

        user = await self.user_repository.update(user_id, data)
        logger.info(
            "Updated user",
            extra={
                "extra_fields": {
                    "user_id": user_id,
                    "fields": sorted(data.to_payload()),
                }
            },
        )
        return user

    def _validate_update_data(self, data: UserUpdateData) -> None:
        if data.first_name is not None:
            if is_blank(data.first_name):
                self._reject("First name cannot be empty")
            self._reject(check_name(data.first_name, "First name"))

        if data.last_name is not None:
            if is_blank(data.last_name):
                self._reject("Last name cannot be empty")
            self._reject(check_name(data.last_name, "Last name"))
