"""
List users use case.

Normalizes pagination and search options, validates search queries and date
ranges, and delegates the actual filtering to the repository.
"""

from datetime import datetime
from typing import Awaitable, List, Optional

from ..domain.entities import User, UserListOptions, UserPage, to_utc, utc_now
from ..domain.validators import MIN_SEARCH_LENGTH, is_blank
from .base import BaseUseCase

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SEARCH_LIMIT = 20
MAX_LIMIT = 100


class ListUsersUseCase(BaseUseCase):
    """Listing, searching and counting users."""

    def execute(self, options: Optional[UserListOptions] = None) -> Awaitable[UserPage]:
        """
        Get a page of users.

        Invalid paging values are corrected rather than rejected: page is
        raised to 1, limit falls back to 10 when missing or non-positive and
        is capped at 100, and a search term shorter than two characters is
        ignored.
        """
        return self.user_repository.get_all(self.normalize_options(options))

    def execute_search(self, query: str, limit: Optional[int] = None) -> Awaitable[List[User]]:
        """
        Search users by name or email.

        Raises:
            ValidationException: If the trimmed query is shorter than two characters
        """
        if is_blank(query):
            self._reject("Search query is required")
        if len(query.strip()) < MIN_SEARCH_LENGTH:
            self._reject(
                f"Search query must be at least {MIN_SEARCH_LENGTH} characters long"
            )

        search_limit = min(limit, MAX_LIMIT) if limit and limit > 0 else DEFAULT_SEARCH_LIMIT
        return self.user_repository.search(query.strip(), search_limit)

    def execute_by_date_range(
        self, start_date: Optional[datetime], end_date: Optional[datetime]
    ) -> Awaitable[List[User]]:
        """
        Get users created between two dates.

        Raises:
            ValidationException: If a date is missing, start is not before end,
                or start lies in the future
        """
        if start_date is None or end_date is None:
            self._reject("Both start date and end date are required")
        if to_utc(start_date) >= to_utc(end_date):
            self._reject("Start date must be before end date")
        if to_utc(start_date) > utc_now():
            self._reject("Start date cannot be in the future")

        return self.user_repository.get_by_date_range(start_date, end_date)

    def execute_get_active_count(self) -> Awaitable[int]:
        """Count active users."""
        return self.user_repository.get_active_count()

    @staticmethod
    def normalize_options(options: Optional[UserListOptions]) -> UserListOptions:
        """Apply defaults and bounds to list options."""
        if options is None:
            return UserListOptions(page=DEFAULT_PAGE, limit=DEFAULT_LIMIT)

        page = options.page or DEFAULT_PAGE
        if page < 1:
            page = DEFAULT_PAGE

        limit = options.limit or DEFAULT_LIMIT
        if limit < 1:
            limit = DEFAULT_LIMIT
        if limit > MAX_LIMIT:
            limit = MAX_LIMIT

        search = options.search.strip() if options.search else None
        if search is not None and len(search) < MIN_SEARCH_LENGTH:
            search = None

        return UserListOptions(
            page=page, limit=limit, search=search, is_active=options.is_active
        )
