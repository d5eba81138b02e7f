"""
In-memory user repository.

Stand-in for the remote API in development and tests. State lives in a dict
that is only touched between awaits, so on a single event loop every call
sees a consistent snapshot without locking.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from ..domain.entities import (
    User,
    UserCreateData,
    UserListOptions,
    UserPage,
    UserUpdateData,
    to_utc,
    utc_now,
)
from ..domain.exceptions import (
    BusinessRuleViolationException,
    UserAlreadyExistsException,
    UserInactiveException,
    UserNotFoundException,
)
from ..repositories.user_repository import IUserRepository

logger = logging.getLogger(__name__)


def _sample_user(
    user_id: str, email: str, first_name: str, last_name: str, created: datetime, active: bool
) -> User:
    return User(
        id=user_id,
        email=email,
        first_name=first_name,
        last_name=last_name,
        created_at=created,
        updated_at=created,
        is_active=active,
    )


SAMPLE_USERS = (
    ("1", "john.doe@example.com", "John", "Doe", datetime(2023, 1, 15, tzinfo=timezone.utc), True),
    ("2", "jane.smith@example.com", "Jane", "Smith", datetime(2023, 2, 20, tzinfo=timezone.utc), True),
    ("3", "bob.johnson@example.com", "Bob", "Johnson", datetime(2023, 3, 10, tzinfo=timezone.utc), False),
    ("4", "alice.brown@example.com", "Alice", "Brown", datetime(2023, 4, 5, tzinfo=timezone.utc), True),
    ("5", "charlie.wilson@example.com", "Charlie", "Wilson", datetime(2023, 5, 12, tzinfo=timezone.utc), True),
)


class InMemoryUserRepository(IUserRepository):
    """
    Dict-backed IUserRepository.

    Attributes:
        users: Stored users keyed by id, in insertion order
    """

    def __init__(self, users: Optional[Iterable[User]] = None):
        self.users: Dict[str, User] = {user.id: user for user in users or ()}
        self._next_id = self._initial_next_id()

    @classmethod
    def with_sample_data(cls) -> "InMemoryUserRepository":
        """Repository seeded with five demo users, one of them inactive."""
        return cls(_sample_user(*row) for row in SAMPLE_USERS)

    def _initial_next_id(self) -> int:
        numeric_ids = [int(user_id) for user_id in self.users if user_id.isdigit()]
        return max(numeric_ids, default=0) + 1

    def _require(self, user_id: str) -> User:
        user = self.users.get(user_id)
        if user is None:
            raise UserNotFoundException(user_id)
        return user

    @staticmethod
    def _matches(user: User, term: str) -> bool:
        term = term.lower()
        return (
            term in user.first_name.lower()
            or term in user.last_name.lower()
            or term in user.email.lower()
        )

    async def get_all(self, options: UserListOptions) -> UserPage:
        matches = list(self.users.values())

        if options.is_active is not None:
            matches = [u for u in matches if u.is_active == options.is_active]

        if options.search:
            matches = [u for u in matches if self._matches(u, options.search)]

        page = options.page or 1
        limit = options.limit or 10
        start = (page - 1) * limit

        return UserPage(
            items=matches[start : start + limit],
            total=len(matches),
            page=page,
            limit=limit,
        )

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    async def create(self, data: UserCreateData) -> User:
        if await self.exists_by_email(data.email):
            raise UserAlreadyExistsException(data.email)

        now = utc_now()
        user = User(
            id=str(self._next_id),
            email=data.email,
            first_name=data.first_name,
            last_name=data.last_name,
            created_at=now,
            updated_at=now,
            is_active=True,
        )
        self.users[user.id] = user
        self._next_id += 1

        logger.debug(f"Stored new user {user.id}")
        return user

    async def update(self, user_id: str, data: UserUpdateData) -> User:
        existing = self._require(user_id)
        updated = existing.update_info(
            data.first_name or existing.first_name,
            data.last_name or existing.last_name,
        )
        self.users[user_id] = updated
        return updated

    async def delete(self, user_id: str) -> bool:
        user = self._require(user_id)
        if not user.is_active:
            raise UserInactiveException(user_id, "User is already inactive")
        self.users[user_id] = user.deactivate()
        return True

    async def permanent_delete(self, user_id: str) -> bool:
        user = self._require(user_id)
        if user.is_active:
            raise BusinessRuleViolationException(
                "Cannot permanently delete active user. Deactivate first.",
                rule="deactivate_before_permanent_delete",
            )
        del self.users[user_id]
        return True

    async def activate(self, user_id: str) -> User:
        user = self._require(user_id).activate()
        self.users[user_id] = user
        return user

    async def exists_by_email(self, email: str) -> bool:
        return any(u.email == email for u in self.users.values())

    async def get_by_date_range(
        self, start_date: datetime, end_date: datetime
    ) -> List[User]:
        start, end = to_utc(start_date), to_utc(end_date)
        return [u for u in self.users.values() if start <= u.created_at <= end]

    async def get_active_count(self) -> int:
        return sum(1 for u in self.users.values() if u.is_active)

    async def search(self, query: str, limit: int) -> List[User]:
        results = [u for u in self.users.values() if self._matches(u, query)]
        if limit and limit > 0:
            results = results[:limit]
        return results
