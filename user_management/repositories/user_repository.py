"""
User repository interface (Abstract Base Class).

Defines the contract for user data access that the use cases depend on,
independent of the underlying data source.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..domain.entities import (
    User,
    UserCreateData,
    UserListOptions,
    UserPage,
    UserUpdateData,
)


class IUserRepository(ABC):
    """
    Abstract repository interface for user data operations.

    Implementations raise DomainException subclasses on failure and return
    None from the single-user lookups when nothing matches.
    """

    @abstractmethod
    async def get_all(self, options: UserListOptions) -> UserPage:
        """
        Get users with filtering and pagination.

        Args:
            options: Normalized page, limit, search and active filter

        Returns:
            Page of users with the total match count
        """
        pass

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """
        Get a user by id.

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get a user by email address.

        Returns:
            User if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, data: UserCreateData) -> User:
        """
        Create a new user.

        Args:
            data: Email and names of the new user

        Returns:
            The created user with its assigned id
        """
        pass

    @abstractmethod
    async def update(self, user_id: str, data: UserUpdateData) -> User:
        """
        Update an existing user. Omitted fields keep their current value.

        Returns:
            The updated user
        """
        pass

    @abstractmethod
    async def delete(self, user_id: str) -> bool:
        """Soft delete (deactivate) a user."""
        pass

    @abstractmethod
    async def permanent_delete(self, user_id: str) -> bool:
        """Permanently remove a user."""
        pass

    @abstractmethod
    async def activate(self, user_id: str) -> User:
        """Reactivate a soft-deleted user."""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check whether a user with the given email exists."""
        pass

    @abstractmethod
    async def get_by_date_range(
        self, start_date: datetime, end_date: datetime
    ) -> List[User]:
        """
        Get users created within a date range.

        Args:
            start_date: Range start
            end_date: Range end

        Returns:
            Users whose ``created_at`` falls in the range
        """
        pass

    @abstractmethod
    async def get_active_count(self) -> int:
        """Count active users."""
        pass

    @abstractmethod
    async def search(self, query: str, limit: int) -> List[User]:
        """
        Search users by name or email.

        Args:
            query: Search term
            limit: Maximum number of results

        Returns:
            Matching users
        """
        pass
