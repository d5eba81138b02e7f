"""
User application service.

Entry point for the presentation layer: resolves the matching use case,
maps entities to DTOs and makes sure every failure leaves as a domain
exception.
"""

import logging
from datetime import datetime
from typing import Awaitable, Callable, List, Optional, TypeVar

from ..domain.entities import (
    User,
    UserCreateData,
    UserListOptions,
    UserUpdateData,
    utc_now,
)
from ..domain.exceptions import ValidationException
from ..repositories.user_repository import IUserRepository
from ..use_cases import (
    CreateUserUseCase,
    DeleteUserUseCase,
    GetUserUseCase,
    ListUsersUseCase,
    UpdateUserUseCase,
)
from .dto import (
    BulkOperationFailure,
    BulkOperationResultDto,
    BulkUserOperationDto,
    CreateUserDto,
    DateRangeDto,
    UpdateUserDto,
    UserListQueryDto,
    UserListResponseDto,
    UserResponseDto,
    UserSearchDto,
    UserStatsDto,
)
from .error_handling import ErrorHandler

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UserApplicationService:
    """
    Orchestrates the user use cases for the presentation layer.

    All use cases share the repository passed to the constructor.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        error_handler: Optional[ErrorHandler] = None,
    ):
        self.user_repository = user_repository
        self.error_handler = error_handler or ErrorHandler()

        self.get_user_use_case = GetUserUseCase(user_repository)
        self.create_user_use_case = CreateUserUseCase(user_repository)
        self.update_user_use_case = UpdateUserUseCase(user_repository)
        self.delete_user_use_case = DeleteUserUseCase(user_repository)
        self.list_users_use_case = ListUsersUseCase(user_repository)

    async def _run(self, operation: str, call: Callable[[], Awaitable[T]]) -> T:
        """Invoke a use case and convert whatever it raises into a domain exception."""
        try:
            return await call()
        except Exception as e:
            raise self.error_handler.handle_use_case_error(operation, e)

    async def get_user_by_id(self, user_id: str) -> Optional[UserResponseDto]:
        user = await self._run(
            "get_user_by_id", lambda: self.get_user_use_case.execute(user_id)
        )
        return self._to_dto(user) if user else None

    async def get_user_by_email(self, email: str) -> Optional[UserResponseDto]:
        user = await self._run(
            "get_user_by_email", lambda: self.get_user_use_case.execute_by_email(email)
        )
        return self._to_dto(user) if user else None

    async def create_user(self, dto: CreateUserDto) -> UserResponseDto:
        data = UserCreateData(
            email=dto.email, first_name=dto.first_name, last_name=dto.last_name
        )
        user = await self._run(
            "create_user", lambda: self.create_user_use_case.execute(data)
        )
        return self._to_dto(user)

    async def update_user(self, user_id: str, dto: UpdateUserDto) -> UserResponseDto:
        data = UserUpdateData(first_name=dto.first_name, last_name=dto.last_name)
        user = await self._run(
            "update_user", lambda: self.update_user_use_case.execute(user_id, data)
        )
        return self._to_dto(user)

    async def delete_user(self, user_id: str) -> bool:
        """Soft delete (deactivate) a user."""
        return await self._run(
            "delete_user",
            lambda: self.delete_user_use_case.execute_soft_delete(user_id),
        )

    async def permanently_delete_user(self, user_id: str) -> bool:
        return await self._run(
            "permanently_delete_user",
            lambda: self.delete_user_use_case.execute_hard_delete(user_id),
        )

    async def get_users(
        self, query: Optional[UserListQueryDto] = None
    ) -> UserListResponseDto:
        query = query or UserListQueryDto()
        options = UserListOptions(
            page=query.page,
            limit=query.limit,
            search=query.search,
            is_active=query.is_active,
        )
        result = await self._run(
            "get_users", lambda: self.list_users_use_case.execute(options)
        )
        return UserListResponseDto(
            users=[self._to_dto(user) for user in result.items],
            total=result.total,
            page=result.page,
            limit=result.limit,
            total_pages=result.total_pages,
        )

    async def search_users(self, dto: UserSearchDto) -> List[UserResponseDto]:
        users = await self._run(
            "search_users",
            lambda: self.list_users_use_case.execute_search(dto.query, dto.limit),
        )
        return [self._to_dto(user) for user in users]

    async def get_users_by_date_range(self, dto: DateRangeDto) -> List[UserResponseDto]:
        start_date = self._parse_date(dto.start_date, "start date")
        end_date = self._parse_date(dto.end_date, "end date")
        users = await self._run(
            "get_users_by_date_range",
            lambda: self.list_users_use_case.execute_by_date_range(start_date, end_date),
        )
        return [self._to_dto(user) for user in users]

    async def get_user_stats(self) -> UserStatsDto:
        """
        Aggregate user counts.

        Total comes from a one-item page, inactive is total minus active, and
        new users are those created since the start of the current UTC month.
        """
        active = await self._run(
            "get_user_stats", self.list_users_use_case.execute_get_active_count
        )
        page = await self._run(
            "get_user_stats",
            lambda: self.list_users_use_case.execute(UserListOptions(page=1, limit=1)),
        )

        now = utc_now()
        month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        new_this_month = 0
        if month_start < now:
            recent = await self._run(
                "get_user_stats",
                lambda: self.list_users_use_case.execute_by_date_range(month_start, now),
            )
            new_this_month = len(recent)

        return UserStatsDto(
            total_users=page.total,
            active_users=active,
            inactive_users=max(page.total - active, 0),
            new_users_this_month=new_this_month,
        )

    async def bulk_operation(self, dto: BulkUserOperationDto) -> BulkOperationResultDto:
        """
        Apply one operation to several users, one after another.

        A failure for one id is recorded and does not stop the others.
        """
        result = BulkOperationResultDto()

        for user_id in dto.user_ids:
            try:
                await self._bulk_step(dto.operation, user_id)
            except Exception as e:
                error = self.error_handler.handle_silent_error("bulk_operation", e)
                result.failed.append(
                    BulkOperationFailure(id=user_id, error=error.user_message)
                )
            else:
                result.successful.append(user_id)

        result.total_processed = len(dto.user_ids)
        logger.info(
            "Bulk operation finished",
            extra={
                "extra_fields": {
                    "operation": dto.operation,
                    "successful": len(result.successful),
                    "failed": len(result.failed),
                }
            },
        )
        return result

    async def _bulk_step(self, operation: str, user_id: str) -> None:
        if operation == "deactivate":
            await self.delete_user_use_case.execute_soft_delete(user_id)
        elif operation == "delete":
            await self.delete_user_use_case.execute_hard_delete(user_id)
        else:
            await self.delete_user_use_case.execute_reactivate(user_id)

    @staticmethod
    def _parse_date(value: str, label: str) -> datetime:
        try:
            return datetime.fromisoformat(value)
        except (TypeError, ValueError) as e:
            raise ValidationException(f"Invalid {label}: {value!r}") from e

    @staticmethod
    def _to_dto(user: User) -> UserResponseDto:
        return UserResponseDto.from_user(user)
