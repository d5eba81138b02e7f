"""
Infrastructure layer - Repository implementations and the HTTP transport.
"""

from .http_user_repository import HttpUserRepository
from .in_memory_user_repository import InMemoryUserRepository
from .user_api_client import UserApiClient

__all__ = ["HttpUserRepository", "InMemoryUserRepository", "UserApiClient"]
