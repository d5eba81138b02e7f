"""
Application layer - DTOs, error handling and the user application service.
"""

from .error_handling import ErrorHandler
from .user_service import UserApplicationService

__all__ = ["ErrorHandler", "UserApplicationService"]
