"""
Domain entities for user management.

The User aggregate is immutable: invariants are checked on construction and
every change produces a new instance. The small value objects below describe
the inputs and outputs of the repository contract.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from .exceptions import InvalidUserDataException
from .validators import check_email, check_name


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Encode a datetime as an ISO-8601 UTC string with a ``Z`` suffix."""
    return to_utc(value).isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_timestamp(value: Union[str, datetime]) -> datetime:
    """Decode an ISO-8601 string (or pass through a datetime) as aware UTC."""
    if isinstance(value, datetime):
        return to_utc(value)
    try:
        return to_utc(datetime.fromisoformat(value))
    except (TypeError, ValueError) as e:
        raise InvalidUserDataException(f"Invalid timestamp: {value!r}") from e


@dataclass(frozen=True)
class User:
    """
    Aggregate root representing a user account.

    A User can never exist in an invalid state: email and names are
    validated in ``__post_init__`` and timestamps are normalized to UTC.
    """

    id: str
    email: str
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime
    is_active: bool = True

    def __post_init__(self):
        """Validate fields on creation."""
        errors = [
            message
            for message in (
                check_email(self.email),
                check_name(self.first_name, "First name"),
                check_name(self.last_name, "Last name"),
            )
            if message
        ]
        if errors:
            raise InvalidUserDataException(errors[0], errors)

        object.__setattr__(self, "created_at", to_utc(self.created_at))
        object.__setattr__(self, "updated_at", to_utc(self.updated_at))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def update_info(self, first_name: str, last_name: str) -> "User":
        """Return a copy with new names and a refreshed ``updated_at``."""
        return replace(
            self, first_name=first_name, last_name=last_name, updated_at=utc_now()
        )

    def deactivate(self) -> "User":
        """Return an inactive copy."""
        return replace(self, is_active=False, updated_at=utc_now())

    def activate(self) -> "User":
        """Return an active copy."""
        return replace(self, is_active=True, updated_at=utc_now())

    def to_transfer_shape(self) -> Dict[str, Any]:
        """Convert to the camelCase wire shape used by the user API."""
        return {
            "id": self.id,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "fullName": self.full_name,
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
            "isActive": self.is_active,
        }

    @classmethod
    def from_transfer_shape(cls, data: Mapping[str, Any]) -> "User":
        """
        Rebuild a User from its wire shape.

        Args:
            data: Mapping produced by ``to_transfer_shape`` or returned by the API

        Returns:
            Validated User entity

        Raises:
            InvalidUserDataException: If fields are missing or invalid
        """
        is_active = data.get("isActive", True)
        if not isinstance(is_active, bool):
            raise InvalidUserDataException(
                f"Invalid isActive value: {is_active!r} (expected a boolean)"
            )

        try:
            return cls(
                id=str(data["id"]),
                email=data["email"],
                first_name=data["firstName"],
                last_name=data["lastName"],
                created_at=parse_timestamp(data["createdAt"]),
                updated_at=parse_timestamp(data["updatedAt"]),
                is_active=is_active,
            )
        except KeyError as e:
            raise InvalidUserDataException(f"Missing user field: {e.args[0]}") from e


@dataclass(frozen=True)
class UserCreateData:
    """Input for creating a user."""

    email: str
    first_name: str
    last_name: str

    def to_payload(self) -> Dict[str, str]:
        return {
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }


@dataclass(frozen=True)
class UserUpdateData:
    """Partial update; ``None`` means the field is left unchanged."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None

    def is_empty(self) -> bool:
        return self.first_name is None and self.last_name is None

    def to_payload(self) -> Dict[str, str]:
        """Only the fields that were provided."""
        payload = {}
        if self.first_name is not None:
            payload["firstName"] = self.first_name
        if self.last_name is not None:
            payload["lastName"] = self.last_name
        return payload


@dataclass(frozen=True)
class UserListOptions:
    """Filtering and pagination options for listing users."""

    page: Optional[int] = None
    limit: Optional[int] = None
    search: Optional[str] = None
    is_active: Optional[bool] = None


@dataclass
class UserPage:
    """One page of users plus the total number of matches."""

    items: List[User] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return -(-self.total // self.limit)
