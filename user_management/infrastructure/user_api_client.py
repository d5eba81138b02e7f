"""
HTTP client for the remote user API.

Thin async transport over httpx. It returns decoded JSON and lets httpx
errors propagate; translating them into domain errors is the repository's job.
A success response that cannot be decoded is reported as RepositoryException.
Timeouts come from settings and no request is retried.
"""

import time
from datetime import datetime
from typing import Any, Dict, List, Optional

import httpx

from ..config import settings
from ..domain.entities import format_timestamp
from ..domain.exceptions import RepositoryException
from ..logging_config import get_correlation_id, get_logger

logger = get_logger(__name__)


class UserApiClient:
    """
    Client for the ``/users`` endpoints of the user API.

    Uses one persistent ``httpx.AsyncClient`` created lazily on first use.

    Attributes:
        base_url: Base URL of the API, without the ``/users`` suffix
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the user API client.

        Args:
            base_url: Base URL of the API (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            transport: Optional httpx transport, used to plug in a mock transport
        """
        self.base_url = (base_url or settings.USER_API_URL).rstrip("/")
        self.timeout = timeout or settings.REQUEST_TIMEOUT
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

        logger.info(
            f"Initialized UserApiClient: base_url={self.base_url}, "
            f"timeout={self.timeout}s"
        )

    @property
    def users_url(self) -> str:
        return f"{self.base_url}/users"

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                limits=httpx.Limits(
                    max_keepalive_connections=20,
                    max_connections=100,
                    keepalive_expiry=30.0,
                ),
            )
            logger.debug("Created new HTTP client")
        return self._client

    async def close(self) -> None:
        """Close the HTTP client and release connections."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
            logger.debug("Closed HTTP client")

    def _get_request_headers(self) -> Dict[str, str]:
        headers = {
            "User-Agent": "UserManagement/1.0",
            "Accept": "application/json",
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            headers["X-Request-ID"] = correlation_id

        return headers

    async def _request(
        self,
        method: str,
        path: str = "",
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a request and decode the JSON response.

        Raises:
            httpx.HTTPStatusError: For non-2xx responses
            httpx.RequestError: For connection failures and timeouts
            RepositoryException: For a 2xx response whose body is not JSON
        """
        client = await self._get_client()
        url = f"{self.users_url}{path}"
        start_time = time.perf_counter()

        response = await client.request(
            method,
            url,
            params=params,
            json=json,
            headers=self._get_request_headers(),
        )

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            "Received response from user API",
            extra={
                "extra_fields": {
                    "method": method,
                    "url": url,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                }
            },
        )

        response.raise_for_status()
        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(
                "User API returned a non-JSON body",
                extra={
                    "extra_fields": {
                        "method": method,
                        "url": url,
                        "content_type": response.headers.get("content-type"),
                    }
                },
            )
            raise RepositoryException(
                "Malformed response: body is not JSON", f"{method} {path or '/'}"
            ) from e

    async def get_users(
        self,
        page: Optional[int] = None,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Get a page of users: ``{"users": [...], "total", "page", "limit"}``."""
        params: Dict[str, Any] = {}
        if page:
            params["page"] = str(page)
        if limit:
            params["limit"] = str(limit)
        if search:
            params["search"] = search
        if is_active is not None:
            params["isActive"] = "true" if is_active else "false"
        return await self._request("GET", params=params)

    async def get_user_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        return await self._request("GET", f"/{user_id}")

    async def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        return await self._request("GET", "/by-email", params={"email": email})

    async def create_user(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", json=payload)

    async def update_user(self, user_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/{user_id}", json=payload)

    async def delete_user(self, user_id: str) -> Dict[str, Any]:
        """Soft delete; responds ``{"success": bool}``."""
        return await self._request("DELETE", f"/{user_id}")

    async def permanent_delete_user(self, user_id: str) -> Dict[str, Any]:
        """Hard delete; responds ``{"success": bool}``."""
        return await self._request("DELETE", f"/{user_id}/permanent")

    async def activate_user(self, user_id: str) -> Dict[str, Any]:
        return await self._request("POST", f"/{user_id}/activate")

    async def check_user_exists(self, email: str) -> Dict[str, Any]:
        """Responds ``{"exists": bool}``."""
        return await self._request("GET", "/exists", params={"email": email})

    async def search_users(
        self, query: str, limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"q": query}
        if limit:
            params["limit"] = str(limit)
        return await self._request("GET", "/search", params=params)

    async def get_users_by_date_range(
        self, start_date: datetime, end_date: datetime
    ) -> List[Dict[str, Any]]:
        params = {
            "startDate": format_timestamp(start_date),
            "endDate": format_timestamp(end_date),
        }
        return await self._request("GET", "/date-range", params=params)

    async def get_active_users_count(self) -> Dict[str, Any]:
        """Responds ``{"count": int}``."""
        return await self._request("GET", "/active/count")
