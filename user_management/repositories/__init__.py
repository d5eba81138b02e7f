"""
Repository layer - Data access abstractions.

This layer provides the interface for user data access, hiding
implementation details from the business logic.
"""

from .user_repository import IUserRepository

__all__ = ["IUserRepository"]
