"""
Data transfer objects for user operations.

Pydantic models used between the application service and its callers.
Field names are snake_case in Python and camelCase on the wire
(``model_dump(by_alias=True)``); both spellings are accepted on input.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.entities import User, format_timestamp


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateUserDto(_CamelModel):
    """Request body for creating a user."""

    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")


class UpdateUserDto(_CamelModel):
    """Request body for updating a user; omitted fields are unchanged."""

    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")


class UserResponseDto(_CamelModel):
    """User as returned to callers."""

    id: str
    email: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    full_name: str = Field(alias="fullName")
    created_at: str = Field(alias="createdAt")
    updated_at: str = Field(alias="updatedAt")
    is_active: bool = Field(alias="isActive")

    @classmethod
    def from_user(cls, user: User) -> "UserResponseDto":
        return cls(
            id=user.id,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            full_name=user.full_name,
            created_at=format_timestamp(user.created_at),
            updated_at=format_timestamp(user.updated_at),
            is_active=user.is_active,
        )


class UserListResponseDto(_CamelModel):
    """One page of users."""

    users: List[UserResponseDto]
    total: int
    page: int
    limit: int
    total_pages: int = Field(alias="totalPages")


class UserListQueryDto(_CamelModel):
    """Query parameters for listing users."""

    page: Optional[int] = None
    limit: Optional[int] = None
    search: Optional[str] = None
    is_active: Optional[bool] = Field(default=None, alias="isActive")


class UserSearchDto(_CamelModel):
    """Parameters for a free-text user search."""

    query: str
    limit: Optional[int] = None


class DateRangeDto(_CamelModel):
    """Creation date range as ISO-8601 strings."""

    start_date: str = Field(alias="startDate")
    end_date: str = Field(alias="endDate")


class UserStatsDto(_CamelModel):
    """Aggregate user counts."""

    total_users: int = Field(alias="totalUsers")
    active_users: int = Field(alias="activeUsers")
    inactive_users: int = Field(alias="inactiveUsers")
    new_users_this_month: int = Field(alias="newUsersThisMonth")


class BulkUserOperationDto(_CamelModel):
    """The same operation applied to several users."""

    user_ids: List[str] = Field(alias="userIds")
    operation: Literal["activate", "deactivate", "delete"]


class BulkOperationFailure(_CamelModel):
    id: str
    error: str


class BulkOperationResultDto(_CamelModel):
    """Outcome of a bulk operation, per user id."""

    successful: List[str] = Field(default_factory=list)
    failed: List[BulkOperationFailure] = Field(default_factory=list)
    total_processed: int = Field(default=0, alias="totalProcessed")
