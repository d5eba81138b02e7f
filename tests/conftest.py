"""
Test configuration and fixtures.

Provides sample users and an AsyncMock repository that honors the
IUserRepository interface.
"""

import logging
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from user_management.domain.entities import User
from user_management.repositories.user_repository import IUserRepository


@pytest.fixture
def created_at() -> datetime:
    """Fixed creation timestamp with millisecond precision."""
    return datetime(2024, 3, 14, 9, 26, 53, 589000, tzinfo=timezone.utc)


@pytest.fixture
def active_user(created_at: datetime) -> User:
    """Active user John Doe."""
    return User(
        id="42",
        email="john.doe@example.com",
        first_name="John",
        last_name="Doe",
        created_at=created_at,
        updated_at=created_at,
        is_active=True,
    )


@pytest.fixture
def inactive_user(active_user: User) -> User:
    """Deactivated copy of the active user."""
    return active_user.deactivate()


@pytest.fixture
def mock_repository() -> AsyncMock:
    """AsyncMock restricted to the repository interface."""
    return AsyncMock(spec=IUserRepository)


@pytest.fixture
def restore_root_logger():
    """Put the root and package loggers back after logging is reconfigured."""
    root = logging.getLogger()
    package = logging.getLogger("user_management")
    saved = (root.handlers[:], root.level, package.level)
    yield root
    root.handlers[:] = saved[0]
    root.setLevel(saved[1])
    package.setLevel(saved[2])
