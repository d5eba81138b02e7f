"""
Logging configuration for user management.

``setup_logging`` installs one stdout handler on the root logger with either
a JSON formatter (production) or a colored line formatter (development).
Every record passes through ``CorrelationIdFilter``, which stamps it with the
correlation id of the current async context, and both formatters surface the
code of a DomainException logged with ``exc_info``.
"""

import json
import logging
import sys
from contextvars import ContextVar
from typing import Any, Dict, Optional
from uuid import uuid4

from .domain.exceptions import DomainException

PACKAGE_LOGGER = "user_management"

correlation_id_context: ContextVar[Optional[str]] = ContextVar(
    "correlation_id", default=None
)


class CorrelationIdFilter(logging.Filter):
    """Copies the context correlation id onto each record as ``correlation_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_context.get()
        return True


def _domain_error(record: logging.LogRecord) -> Optional[DomainException]:
    if record.exc_info and isinstance(record.exc_info[1], DomainException):
        return record.exc_info[1]
    return None


def _correlation_id(record: logging.LogRecord) -> Optional[str]:
    return getattr(record, "correlation_id", None) or correlation_id_context.get()


class StructuredFormatter(logging.Formatter):
    """
    Log formatter that outputs one JSON object per record.

    Fields passed as ``extra={"extra_fields": {...}}`` are merged into the
    object. A DomainException in ``exc_info`` adds its ``error_code`` and
    ``user_message`` next to the traceback.
    """

    def __init__(self, service_name: str = "user-management", datefmt: Optional[str] = None):
        super().__init__(datefmt=datefmt)
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "service": self.service_name,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "function": record.funcName,
            "line": record.lineno,
        }

        correlation_id = _correlation_id(record)
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        error = _domain_error(record)
        if error is not None:
            log_data["error_code"] = error.code
            log_data["user_message"] = error.user_message

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra_fields = getattr(record, "extra_fields", None)
        if extra_fields:
            log_data.update(extra_fields)

        return json.dumps(log_data, default=str)


class HumanReadableFormatter(logging.Formatter):
    """Colored single-line formatter for development."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]

        parts = [f"{color}{record.levelname:8}{reset}", f"[{record.name}]"]

        correlation_id = _correlation_id(record)
        if correlation_id:
            parts.append(f"[cid:{correlation_id[:8]}]")

        parts.append(record.getMessage())

        fields = dict(getattr(record, "extra_fields", None) or {})
        error = _domain_error(record)
        if error is not None:
            fields.setdefault("error_code", error.code)
        if fields:
            parts.append(" ".join(f"{key}={value}" for key, value in fields.items()))

        line = " ".join(parts)
        if record.exc_info and error is None:
            # Domain errors are expected outcomes; only unexpected ones get a traceback.
            line += f"\n{self.formatException(record.exc_info)}"
        return line


def setup_logging(
    log_level: str = "INFO",
    service_name: str = "user-management",
    use_json: bool = False,
) -> logging.Logger:
    """
    Configure root logging for the user management core.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        service_name: Service name written into JSON records
        use_json: Use JSON structured logging instead of human-readable format

    Returns:
        The ``user_management`` package logger
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    formatter: logging.Formatter
    if use_json:
        formatter = StructuredFormatter(service_name, datefmt="%Y-%m-%d %H:%M:%S")
    else:
        formatter = HumanReadableFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)
    return package_logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger, defaulting to the package logger."""
    return logging.getLogger(name or PACKAGE_LOGGER)


def set_correlation_id(correlation_id: Optional[str] = None) -> str:
    """
    Set the correlation id for the current context.

    Args:
        correlation_id: Id to set, a new UUID is generated if None

    Returns:
        The correlation id that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid4())
    correlation_id_context.set(correlation_id)
    return correlation_id


def get_correlation_id() -> Optional[str]:
    return correlation_id_context.get()


def clear_correlation_id() -> None:
    correlation_id_context.set(None)
