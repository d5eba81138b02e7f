"""
Delete user use case.

Users move through ``active -> inactive -> removed``. Soft delete covers the
first step, hard delete the second; skipping a step is reported as an error.
Reactivation moves an inactive user back to active.
"""

import logging
from typing import Awaitable

from ..domain.entities import User
from ..domain.exceptions import (
    BusinessRuleViolationException,
    UserInactiveException,
    UserNotFoundException,
)
from .base import BaseUseCase

logger = logging.getLogger(__name__)


class DeleteUserUseCase(BaseUseCase):
    """Soft delete, hard delete and reactivation."""

    def execute_soft_delete(self, user_id: str) -> Awaitable[bool]:
        """
        Deactivate a user.

        Raises:
            ValidationException: Synchronously, for an empty id
            UserNotFoundException: When awaited, if the user does not exist
            UserInactiveException: When awaited, if the user is already inactive
        """
        self._require_user_id(user_id)
        return self._soft_delete(user_id)

    def execute_hard_delete(self, user_id: str) -> Awaitable[bool]:
        """
        Permanently remove a user. Only inactive users can be removed.

        Raises:
            ValidationException: Synchronously, for an empty id
            UserNotFoundException: When awaited, if the user does not exist
            BusinessRuleViolationException: When awaited, if the user is active
        """
        self._require_user_id(user_id)
        return self._hard_delete(user_id)

    def execute_reactivate(self, user_id: str) -> Awaitable[User]:
        """
        Reactivate a soft-deleted user.

        Raises:
            ValidationException: Synchronously, for an empty id
            UserNotFoundException: When awaited, if the user does not exist
            BusinessRuleViolationException: When awaited, if the user is active
        """
        self._require_user_id(user_id)
        return self._reactivate(user_id)

    async def _soft_delete(self, user_id: str) -> bool:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundException(user_id)

        if not user.is_active:
            logger.warning(
                "Rejected soft delete of inactive user",
                extra={"extra_fields": {"user_id": user_id}},
            )
            raise UserInactiveException(user_id, "User is already inactive")

        deleted = await self.user_repository.delete(user_id)
        logger.info(
            "Deactivated user",
            extra={"extra_fields": {"user_id": user_id, "success": deleted}},
        )
        return deleted

    async def _hard_delete(self, user_id: str) -> bool:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundException(user_id)

        if user.is_active:
            logger.warning(
                "Rejected permanent delete of active user",
                extra={"extra_fields": {"user_id": user_id}},
            )
            raise BusinessRuleViolationException(
                "Cannot permanently delete active user. Deactivate first.",
                rule="deactivate_before_permanent_delete",
            )

        deleted = await self.user_repository.permanent_delete(user_id)
        logger.info(
            "Permanently deleted user",
            extra={"extra_fields": {"user_id": user_id, "success": deleted}},
        )
        return deleted

    async def _reactivate(self, user_id: str) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundException(user_id)

        if user.is_active:
            raise BusinessRuleViolationException(
                f"User {user_id} is already active", rule="user_already_active"
            )

        reactivated = await self.user_repository.activate(user_id)
        logger.info("Reactivated user", extra={"extra_fields": {"user_id": user_id}})
        return reactivated
