"""
Configuration module for the user management core.

This module provides centralized configuration management using Pydantic settings.
All configuration values can be overridden via environment variables or .env file.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings for user management.

    Attributes:
        USER_API_URL: Base URL of the remote user API
        USE_MOCK_DATA: Use the in-memory repository instead of the remote API
        APP_NAME: Name used to identify the service in logs
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        LOG_JSON: Emit JSON structured logs instead of human-readable lines
        REQUEST_TIMEOUT: Timeout for HTTP requests in seconds
    """

    USER_API_URL: str = Field(
        default="http://localhost:3000/api",
        description="Base URL of the remote user API",
    )
    USE_MOCK_DATA: bool = Field(
        default=True,
        description="Use the in-memory repository instead of the remote API",
    )

    APP_NAME: str = Field(
        default="user-management",
        description="Name used to identify the service in logs",
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    LOG_JSON: bool = Field(
        default=False,
        description="Emit JSON structured logs",
    )

    REQUEST_TIMEOUT: float = Field(
        default=30.0,
        gt=0,
        le=60.0,
        description="Timeout for HTTP requests in seconds",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator("USER_API_URL")
    @classmethod
    def validate_url(cls, value: str) -> str:
        """
        Validate that the API URL is properly formatted.

        Args:
            value: The URL to validate

        Returns:
            The validated URL without trailing slash

        Raises:
            ValueError: If URL is invalid
        """
        if not value:
            raise ValueError("User API URL cannot be empty")

        value = value.rstrip("/")

        if not (value.startswith("http://") or value.startswith("https://")):
            raise ValueError(
                f"User API URL must start with http:// or https://, got: {value}"
            )

        return value


# Global settings instance
settings = Settings()
