"""
Explicit composition of the user management object graph.

Configures logging from settings, selects the repository implementation and
wires it into the application service. Nothing is resolved implicitly.
"""

import logging
from typing import Optional

from .application.error_handling import ErrorHandler
from .application.user_service import UserApplicationService
from .config import Settings, settings as default_settings
from .infrastructure.http_user_repository import HttpUserRepository
from .infrastructure.in_memory_user_repository import InMemoryUserRepository
from .infrastructure.user_api_client import UserApiClient
from .logging_config import setup_logging
from .repositories.user_repository import IUserRepository

logger = logging.getLogger(__name__)


def configure_logging(settings: Optional[Settings] = None) -> logging.Logger:
    """
    Apply ``LOG_LEVEL``, ``APP_NAME`` and ``LOG_JSON`` to the logging setup.

    Args:
        settings: Settings to use (defaults to the global settings)

    Returns:
        The configured package logger
    """
    settings = settings or default_settings
    return setup_logging(
        log_level=settings.LOG_LEVEL,
        service_name=settings.APP_NAME,
        use_json=settings.LOG_JSON,
    )


def build_user_repository(settings: Optional[Settings] = None) -> IUserRepository:
    """
    Create the repository selected by ``USE_MOCK_DATA``.

    Args:
        settings: Settings to use (defaults to the global settings)

    Returns:
        In-memory repository with sample data, or the HTTP repository
    """
    settings = settings or default_settings

    if settings.USE_MOCK_DATA:
        logger.info("Using in-memory user repository with sample data")
        return InMemoryUserRepository.with_sample_data()

    logger.info(f"Using HTTP user repository at {settings.USER_API_URL}")
    client = UserApiClient(
        base_url=settings.USER_API_URL, timeout=settings.REQUEST_TIMEOUT
    )
    return HttpUserRepository(client)


def build_user_service(
    settings: Optional[Settings] = None,
    repository: Optional[IUserRepository] = None,
    error_handler: Optional[ErrorHandler] = None,
) -> UserApplicationService:
    """
    Configure logging and wire the application service to a repository.

    Args:
        settings: Settings to use (defaults to the global settings)
        repository: Repository to use instead of the one selected by settings
        error_handler: Error handler to use instead of a default one

    Returns:
        Ready-to-use UserApplicationService
    """
    settings = settings or default_settings
    configure_logging(settings)

    return UserApplicationService(
        repository or build_user_repository(settings),
        error_handler=error_handler,
    )
