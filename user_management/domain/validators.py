"""
Validation rules shared by the User entity and the use cases.

Each ``check_*`` function returns an error message or None so callers can
decide which exception type to raise.
"""

import re
from typing import Optional

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
NAME_PATTERN = re.compile(r"[a-zA-Z\s]+")

MIN_NAME_LENGTH = 2
MIN_SEARCH_LENGTH = 2


def is_blank(value: Optional[str]) -> bool:
    """Check if a string is missing or only whitespace."""
    return not value or not value.strip()


def is_valid_email(email: Optional[str]) -> bool:
    """Check an email against the accepted format."""
    return bool(email) and EMAIL_PATTERN.fullmatch(email) is not None


def check_email(email: Optional[str]) -> Optional[str]:
    """Validate an email address."""
    if is_blank(email):
        return "Email is required"
    if not is_valid_email(email):
        return "Invalid email format"
    return None


def check_name(name: Optional[str], field_label: str) -> Optional[str]:
    """
    Validate a first or last name.

    Names must be at least two characters once trimmed and may only contain
    ASCII letters and whitespace.

    Args:
        name: Value to validate
        field_label: Human label used in the message (e.g. "First name")

    Returns:
        Error message, or None if the name is valid
    """
    if is_blank(name):
        return f"{field_label} is required"
    if len(name.strip()) < MIN_NAME_LENGTH:
        return f"{field_label} must be at least {MIN_NAME_LENGTH} characters long"
    if NAME_PATTERN.fullmatch(name) is None:
        return f"{field_label} can only contain letters and spaces"
    return None
