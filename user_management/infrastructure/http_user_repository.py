"""
HTTP-backed user repository.

Implements IUserRepository over UserApiClient. API payloads are mapped to
User entities, and every transport failure is translated through
DomainExceptionFactory so callers only ever see domain exceptions. A body
that decodes to the wrong shape is reported as RepositoryException.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from ..domain.entities import (
    User,
    UserCreateData,
    UserListOptions,
    UserPage,
    UserUpdateData,
)
from ..domain.exceptions import (
    DomainException,
    DomainExceptionFactory,
    RepositoryException,
)
from ..repositories.user_repository import IUserRepository
from .user_api_client import UserApiClient

logger = logging.getLogger(__name__)


class HttpUserRepository(IUserRepository):
    """User repository backed by the remote user API."""

    def __init__(self, api_client: UserApiClient):
        self.api_client = api_client

    async def get_all(self, options: UserListOptions) -> UserPage:
        try:
            response = await self.api_client.get_users(
                page=options.page,
                limit=options.limit,
                search=options.search,
                is_active=options.is_active,
            )
        except httpx.HTTPError as e:
            raise self._translate("get_all", e) from e

        body = self._expect_object("get_all", response)
        items = self._expect_list("get_all", body.get("users", []))
        return UserPage(
            items=[self._to_user(item) for item in items],
            total=self._expect_int("get_all", body.get("total", 0)),
            page=self._expect_int("get_all", body.get("page", options.page or 1)),
            limit=self._expect_int("get_all", body.get("limit", options.limit or 10)),
        )

    async def get_by_id(self, user_id: str) -> Optional[User]:
        try:
            data = await self.api_client.get_user_by_id(user_id)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise self._translate("get_by_id", e) from e
        except httpx.HTTPError as e:
            raise self._translate("get_by_id", e) from e

        return self._to_user(self._expect_object("get_by_id", data))

    async def get_by_email(self, email: str) -> Optional[User]:
        try:
            data = await self.api_client.get_user_by_email(email)
        except httpx.HTTPStatusError as e:
            if e.response.status_code == 404:
                return None
            raise self._translate("get_by_email", e) from e
        except httpx.HTTPError as e:
            raise self._translate("get_by_email", e) from e

        return self._to_user(self._expect_object("get_by_email", data))

    async def create(self, data: UserCreateData) -> User:
        try:
            response = await self.api_client.create_user(data.to_payload())
        except httpx.HTTPError as e:
            raise self._translate("create", e) from e
        return self._to_user(self._expect_object("create", response))

    async def update(self, user_id: str, data: UserUpdateData) -> User:
        try:
            response = await self.api_client.update_user(user_id, data.to_payload())
        except httpx.HTTPError as e:
            raise self._translate("update", e) from e
        return self._to_user(self._expect_object("update", response))

    async def delete(self, user_id: str) -> bool:
        try:
            response = await self.api_client.delete_user(user_id)
        except httpx.HTTPError as e:
            raise self._translate("delete", e) from e
        return bool(self._expect_object("delete", response).get("success"))

    async def permanent_delete(self, user_id: str) -> bool:
        try:
            response = await self.api_client.permanent_delete_user(user_id)
        except httpx.HTTPError as e:
            raise self._translate("permanent_delete", e) from e
        return bool(self._expect_object("permanent_delete", response).get("success"))

    async def activate(self, user_id: str) -> User:
        try:
            response = await self.api_client.activate_user(user_id)
        except httpx.HTTPError as e:
            raise self._translate("activate", e) from e
        return self._to_user(self._expect_object("activate", response))

    async def exists_by_email(self, email: str) -> bool:
        try:
            response = await self.api_client.check_user_exists(email)
        except httpx.HTTPError as e:
            raise self._translate("exists_by_email", e) from e
        return bool(self._expect_object("exists_by_email", response).get("exists"))

    async def get_by_date_range(
        self, start_date: datetime, end_date: datetime
    ) -> List[User]:
        try:
            items = await self.api_client.get_users_by_date_range(start_date, end_date)
        except httpx.HTTPError as e:
            raise self._translate("get_by_date_range", e) from e
        return [self._to_user(item) for item in self._expect_list("get_by_date_range", items)]

    async def get_active_count(self) -> int:
        try:
            response = await self.api_client.get_active_users_count()
        except httpx.HTTPError as e:
            raise self._translate("get_active_count", e) from e
        body = self._expect_object("get_active_count", response)
        return self._expect_int("get_active_count", body.get("count"))

    async def search(self, query: str, limit: int) -> List[User]:
        try:
            items = await self.api_client.search_users(query, limit)
        except httpx.HTTPError as e:
            raise self._translate("search", e) from e
        return [self._to_user(item) for item in self._expect_list("search", items)]

    @staticmethod
    def _to_user(data: Dict[str, Any]) -> User:
        return User.from_transfer_shape(data)

    @staticmethod
    def _malformed(operation: str, value: Any) -> RepositoryException:
        logger.error(
            f"User API operation '{operation}' returned a malformed body",
            extra={
                "extra_fields": {
                    "operation": operation,
                    "body_type": type(value).__name__,
                }
            },
        )
        return RepositoryException("Malformed response", operation)

    @classmethod
    def _expect_object(cls, operation: str, value: Any) -> Dict[str, Any]:
        if not isinstance(value, dict):
            raise cls._malformed(operation, value)
        return value

    @classmethod
    def _expect_list(cls, operation: str, value: Any) -> List[Dict[str, Any]]:
        if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
            raise cls._malformed(operation, value)
        return value

    @classmethod
    def _expect_int(cls, operation: str, value: Any) -> int:
        # bool is an int subclass but never a valid count
        if isinstance(value, bool) or not isinstance(value, int):
            raise cls._malformed(operation, value)
        return value

    @staticmethod
    def _translate(operation: str, error: httpx.HTTPError) -> DomainException:
        domain_error = DomainExceptionFactory.from_http_error(error)
        logger.error(
            f"User API operation '{operation}' failed",
            extra={
                "extra_fields": {
                    "operation": operation,
                    "error_type": type(error).__name__,
                    "error_code": domain_error.code,
                }
            },
        )
        return domain_error
