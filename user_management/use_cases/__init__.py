"""
Use case layer - Business operations on users.

Each use case takes its repository as a constructor argument.
"""

from .create_user import CreateUserUseCase
from .delete_user import DeleteUserUseCase
from .get_user import GetUserUseCase
from .list_users import ListUsersUseCase
from .update_user import UpdateUserUseCase

__all__ = [
    "CreateUserUseCase",
    "DeleteUserUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "UpdateUserUseCase",
]
