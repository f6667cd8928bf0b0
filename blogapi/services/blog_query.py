"""
Filter and search engine.

Validates filter/search requests, turns them into bounded repository
queries and shapes the response envelopes.
"""

from datetime import UTC, date, datetime, time, timedelta

from blogapi.configs.settings import DEFAULT_FILTER_LIMIT
from blogapi.errors import ValidationError
from blogapi.monitoring import get_logger
from blogapi.repositories.blog import BlogRepository
from blogapi.schemas.blog import BlogResponse
from blogapi.schemas.query import (
    BlogWithAuthor,
    FilterParams,
    FilterResponse,
    SearchParams,
    SearchQuery,
    SearchResponse,
)

logger = get_logger(__name__)

# "engagement" has no column of its own and ranks exactly like "likes"
SORT_COLUMNS = {
    "views": "view_count",
    "likes": "like_count",
    "dislikes": "dislike_count",
    "engagement": "like_count",
}
SORT_ORDERS = ("asc", "desc")


def effective_limit(limit: int) -> int:
    """Return ``limit``, or the default page size when it is zero."""
    return limit or DEFAULT_FILTER_LIMIT


def page_to_skip(page: int, limit: int) -> int:
    """Translate a 1-based page into an offset using the effective limit."""
    return (page - 1) * effective_limit(limit)


def _start_of(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def _check_paging(limit: int, skip: int) -> None:
    if limit < 0:
        mssg = "limit must be non-negative"
        raise ValidationError(mssg)
    if skip < 0:
        mssg = "skip must be non-negative"
        raise ValidationError(mssg)


class BlogQueryService:
    """Runs blog filter and search requests."""

    def __init__(self, blog_repo: BlogRepository) -> None:
        self.blog_repo = blog_repo

    async def filter_blogs(self, params: FilterParams) -> FilterResponse:
        """
        Filter blogs by tags and date range with optional popularity sorting.

        ``date_to`` includes the whole day. Without ``popularity_sort``,
        results are newest first and ``sort_order`` has no effect.

        Args:
            params: Parsed filter inputs

        Returns:
            FilterResponse: The page plus paging metadata

        Raises:
            ValidationError: For an inverted date range or unknown sort names
        """
        if params.date_from and params.date_to and params.date_from > params.date_to:
            mssg = "date_from cannot be after date_to"
            raise ValidationError(mssg)
        if params.popularity_sort and params.popularity_sort not in SORT_COLUMNS:
            mssg = "invalid popularity_sort value. Valid values: views, likes, dislikes, engagement"
            raise ValidationError(mssg)
        if params.sort_order and params.sort_order not in SORT_ORDERS:
            mssg = "invalid sort_order value. Valid values: asc, desc"
            raise ValidationError(mssg)
        _check_paging(params.limit, params.skip)

        limit = effective_limit(params.limit)
        blogs, total = await self.blog_repo.filter(
            tags=params.tags,
            created_from=_start_of(params.date_from) if params.date_from else None,
            created_before=(
                _start_of(params.date_to) + timedelta(days=1) if params.date_to else None
            ),
            sort_column=SORT_COLUMNS.get(params.popularity_sort or ""),
            descending=params.sort_order != "asc",
            skip=params.skip,
            limit=limit,
        )

        page = params.skip // limit + 1
        return FilterResponse(
            blogs=[BlogResponse.model_validate(blog) for blog in blogs],
            count=len(blogs),
            total_count=total,
            page=page,
            limit=limit,
        )

    async def search_blogs(self, params: SearchParams) -> SearchResponse:
        """
        Search blogs by title and/or author username.

        Both terms are case-insensitive substrings; when both are given a
        blog must match both. Results are newest first.

        Args:
            params: Parsed search inputs

        Returns:
            SearchResponse: Matches with author names and the echoed query

        Raises:
            ValidationError: If neither term is given or paging is negative
        """
        title = (params.title or "").strip() or None
        author = (params.author or "").strip() or None
        if not title and not author:
            mssg = "at least one search parameter (title or author) must be provided"
            raise ValidationError(mssg)
        _check_paging(params.limit, params.skip)

        limit = effective_limit(params.limit)
        rows, total = await self.blog_repo.search(
            title=title,
            author=author,
            skip=params.skip,
            limit=limit,
        )
        logger.debug("Blog search", title=title, author=author, total=total)

        blogs = [
            BlogWithAuthor(**BlogResponse.model_validate(blog).model_dump(), author_name=name)
            for blog, name in rows
        ]
        return SearchResponse(
            blogs=blogs,
            count=len(blogs),
            total_count=total,
            query=SearchQuery(title=title, author=author, limit=limit, skip=params.skip),
        )
