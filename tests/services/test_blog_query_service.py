# tests/services/test_blog_query_service.py
"""Tests for blog filtering and searching."""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from blogapi.errors import ValidationError
from blogapi.schemas.query import FilterParams, SearchParams
from blogapi.services.blog_query import BlogQueryService, effective_limit, page_to_skip


@pytest.fixture
def mock_blog_repo() -> MagicMock:
    mock = MagicMock()
    mock.filter = AsyncMock(return_value=([], 0))
    mock.search = AsyncMock(return_value=([], 0))
    return mock


@pytest.fixture
def service(mock_blog_repo: MagicMock) -> BlogQueryService:
    return BlogQueryService(mock_blog_repo)


class TestPaging:
    """Tests for paging helpers."""

    def test_effective_limit_defaults_zero(self) -> None:
        assert effective_limit(0) == 20
        assert effective_limit(7) == 7

    @pytest.mark.parametrize(
        ("page", "limit", "skip"),
        [(1, 10, 0), (3, 10, 20), (2, 0, 20), (4, 5, 15)],
    )
    def test_page_to_skip(self, page: int, limit: int, skip: int) -> None:
        assert page_to_skip(page, limit) == skip


class TestFilterBlogs:
    """Tests for BlogQueryService.filter_blogs."""

    async def test_defaults(self, service, mock_blog_repo) -> None:
        result = await service.filter_blogs(FilterParams())

        kwargs = mock_blog_repo.filter.await_args.kwargs
        assert kwargs["tags"] == []
        assert kwargs["created_from"] is None
        assert kwargs["created_before"] is None
        assert kwargs["sort_column"] is None
        assert kwargs["limit"] == 20
        assert kwargs["skip"] == 0
        assert result.page == 1
        assert result.limit == 20
        assert result.count == 0

    async def test_date_to_includes_whole_day(self, service, mock_blog_repo) -> None:
        await service.filter_blogs(
            FilterParams(date_from=date(2025, 1, 1), date_to=date(2025, 1, 31)),
        )

        kwargs = mock_blog_repo.filter.await_args.kwargs
        assert kwargs["created_from"] == datetime(2025, 1, 1, tzinfo=UTC)
        assert kwargs["created_before"] == datetime(2025, 2, 1, tzinfo=UTC)

    async def test_same_day_range_is_allowed(self, service, mock_blog_repo) -> None:
        day = date(2025, 3, 3)

        await service.filter_blogs(FilterParams(date_from=day, date_to=day))

        mock_blog_repo.filter.assert_awaited_once()

    async def test_inverted_range_is_rejected(self, service, mock_blog_repo) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await service.filter_blogs(
                FilterParams(date_from=date(2025, 2, 1), date_to=date(2025, 1, 1)),
            )

        assert exc_info.value.detail == "date_from cannot be after date_to"
        mock_blog_repo.filter.assert_not_awaited()

    @pytest.mark.parametrize(
        ("sort", "column"),
        [
            ("views", "view_count"),
            ("likes", "like_count"),
            ("dislikes", "dislike_count"),
            ("engagement", "like_count"),
        ],
    )
    async def test_popularity_sort_columns(self, service, mock_blog_repo, sort, column) -> None:
        await service.filter_blogs(FilterParams(popularity_sort=sort))

        kwargs = mock_blog_repo.filter.await_args.kwargs
        assert kwargs["sort_column"] == column
        assert kwargs["descending"] is True

    async def test_ascending_order(self, service, mock_blog_repo) -> None:
        await service.filter_blogs(FilterParams(popularity_sort="views", sort_order="asc"))

        assert mock_blog_repo.filter.await_args.kwargs["descending"] is False

    async def test_unknown_sort_is_rejected(self, service) -> None:
        with pytest.raises(ValidationError, match="invalid popularity_sort value"):
            await service.filter_blogs(FilterParams(popularity_sort="comments"))

    async def test_unknown_order_is_rejected(self, service) -> None:
        with pytest.raises(ValidationError, match="invalid sort_order value"):
            await service.filter_blogs(FilterParams(sort_order="sideways"))

    async def test_negative_paging_is_rejected(self, service) -> None:
        with pytest.raises(ValidationError):
            await service.filter_blogs(FilterParams(limit=-1))
        with pytest.raises(ValidationError):
            await service.filter_blogs(FilterParams(skip=-5))

    async def test_page_reflects_skip(self, service, mock_blog_repo) -> None:
        mock_blog_repo.filter.return_value = ([], 45)

        result = await service.filter_blogs(FilterParams(limit=10, skip=20))

        assert result.page == 3
        assert result.total_count == 45


class TestSearchBlogs:
    """Tests for BlogQueryService.search_blogs."""

    async def test_requires_a_term(self, service, mock_blog_repo) -> None:
        with pytest.raises(ValidationError) as exc_info:
            await service.search_blogs(SearchParams(title="   ", author=""))

        assert "at least one search parameter" in exc_info.value.detail
        mock_blog_repo.search.assert_not_awaited()

    async def test_terms_are_trimmed_and_echoed(self, service, mock_blog_repo) -> None:
        result = await service.search_blogs(SearchParams(title="  python ", limit=5, skip=10))

        kwargs = mock_blog_repo.search.await_args.kwargs
        assert kwargs == {"title": "python", "author": None, "skip": 10, "limit": 5}
        assert result.query.title == "python"
        assert result.query.author is None
        assert result.query.limit == 5
        assert result.query.skip == 10

    async def test_default_limit_is_echoed(self, service) -> None:
        result = await service.search_blogs(SearchParams(author="ann"))

        assert result.query.limit == 20

    async def test_negative_limit_is_rejected(self, service) -> None:
        with pytest.raises(ValidationError):
            await service.search_blogs(SearchParams(title="x", limit=-2))


class TestAgainstRepository:
    """Filter and search wired to the in-memory repository."""

    async def test_filter_by_tags_matches_any(self, blog_repo, sample_user) -> None:
        blog_repo.add_blog(sample_user.id, title="py", tags=["python"])
        blog_repo.add_blog(sample_user.id, title="go", tags=["go"])
        blog_repo.add_blog(sample_user.id, title="rust", tags=["rust"])

        result = await BlogQueryService(blog_repo).filter_blogs(
            FilterParams(tags=["python", "go"]),
        )

        assert sorted(blog.title for blog in result.blogs) == ["go", "py"]
        assert result.total_count == 2

    async def test_search_by_author(self, blog_repo, sample_user, other_user) -> None:
        blog_repo.add_blog(sample_user.id, title="mine")
        blog_repo.add_blog(other_user.id, title="theirs")

        result = await BlogQueryService(blog_repo).search_blogs(SearchParams(author="OTHER"))

        assert [blog.title for blog in result.blogs] == ["theirs"]
        assert result.blogs[0].author_name == other_user.username

    async def test_search_without_owner_reports_unknown_author(self, blog_repo) -> None:
        blog_repo.add_blog(uuid4(), title="orphan post")

        result = await BlogQueryService(blog_repo).search_blogs(SearchParams(title="orphan"))

        assert [blog.author_name for blog in result.blogs] == ["Unknown Author"]
