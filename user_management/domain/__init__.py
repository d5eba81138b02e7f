"""
Domain layer - Core business entities and domain logic.

This layer contains the User aggregate, its validation rules and the
domain error taxonomy, independent of any infrastructure concerns.
"""

from .entities import User, UserCreateData, UserListOptions, UserPage, UserUpdateData
from .exceptions import (
    BusinessRuleViolationException,
    DomainException,
    DomainExceptionFactory,
    ErrorKind,
    InvalidUserDataException,
    NetworkException,
    RepositoryException,
    UserAlreadyExistsException,
    UserInactiveException,
    UserNotFoundException,
    ValidationException,
)

__all__ = [
    "BusinessRuleViolationException",
    "DomainException",
    "DomainExceptionFactory",
    "ErrorKind",
    "InvalidUserDataException",
    "NetworkException",
    "RepositoryException",
    "User",
    "UserAlreadyExistsException",
    "UserCreateData",
    "UserInactiveException",
    "UserListOptions",
    "UserNotFoundException",
    "UserPage",
    "UserUpdateData",
    "ValidationException",
]
