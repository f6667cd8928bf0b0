# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read at import time, so the test environment must be in place
# before anything from blogapi is imported
os.environ["MAIL_ENABLED"] = "false"
os.environ["GEMINI_API_KEY"] = ""
os.environ["GOOGLE_CLIENT_ID"] = ""
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-pytest-only")

from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID, uuid4

from pytest import fixture

from blogapi.errors import RecordNotFoundError
from blogapi.models import (
    BlogDB,
    BlogInteractionDB,
    CommentDB,
    PasswordResetTokenDB,
    RefreshTokenDB,
    UserDB,
)
from blogapi.models.interaction import InteractionType
from blogapi.repositories.blog import UNKNOWN_AUTHOR
from blogapi.schemas.blog import BlogCreate

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


class FakeUserRepository:
    """In-memory stand-in for UserRepository."""

    def __init__(self, users: Iterable[UserDB] = ()) -> None:
        self.users: dict[UUID, UserDB] = {user.id: user for user in users}

    async def create(self, user: UserDB) -> UserDB:
        self.users[user.id] = user
        return user

    async def get_by_id(self, user_id: UUID) -> UserDB | None:
        return self.users.get(user_id)

    async def get_by_email(self, email: str) -> UserDB | None:
        return next((u for u in self.users.values() if u.email == email), None)

    async def get_by_username(self, username: str) -> UserDB | None:
        return next((u for u in self.users.values() if u.username == username), None)

    async def get_by_verification_token(self, token: str) -> UserDB | None:
        return next((u for u in self.users.values() if u.verification_token == token), None)

    async def get_by_provider(self, provider: str, provider_id: str) -> UserDB | None:
        return next(
            (
                u
                for u in self.users.values()
                if u.auth_provider == provider and u.provider_id == provider_id
            ),
            None,
        )

    async def email_exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def username_exists(self, username: str, exclude_id: UUID | None = None) -> bool:
        user = await self.get_by_username(username)
        return user is not None and user.id != exclude_id

    async def update_fields(self, user_id: UUID, changes: dict[str, Any]) -> UserDB | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        for key, value in changes.items():
            setattr(user, key, value)
        return user


class FakeBlogRepository:
    """In-memory stand-in for BlogRepository."""

    def __init__(self, users: FakeUserRepository | None = None) -> None:
        self.blogs: dict[UUID, BlogDB] = {}
        self.users = users or FakeUserRepository()
        self.counter_calls: list[dict[str, int]] = []

    def add_blog(
        self,
        user_id: UUID,
        title: str = "A blog",
        content: str = "Some content",
        tags: list[str] | None = None,
        created_at: datetime = NOW,
        **counters: int,
    ) -> BlogDB:
        blog = BlogDB(
            user_id=user_id,
            title=title,
            content=content,
            tags=tags or [],
            like_count=counters.get("like_count", 0),
            dislike_count=counters.get("dislike_count", 0),
            view_count=counters.get("view_count", 0),
            created_at=created_at,
            updated_at=created_at,
        )
        self.blogs[blog.id] = blog
        return blog

    async def create(self, data: BlogCreate, user_id: UUID) -> BlogDB:
        now = datetime.now(tz=UTC)
        return self.add_blog(user_id, data.title, data.content, data.tags, created_at=now)

    async def exists(self, blog_id: UUID) -> bool:
        return blog_id in self.blogs

    async def get_by_id(self, blog_id: UUID) -> BlogDB | None:
        return self.blogs.get(blog_id)

    async def get_or_raise(self, blog_id: UUID, detail: str | None = None) -> BlogDB:
        blog = self.blogs.get(blog_id)
        if blog is None:
            raise RecordNotFoundError(detail=detail or "Blog not found")
        return blog

    async def adjust_counters(
        self,
        blog_id: UUID,
        likes: int = 0,
        dislikes: int = 0,
        views: int = 0,
    ) -> bool:
        blog = self.blogs.get(blog_id)
        if blog is None:
            return False
        self.counter_calls.append({"likes": likes, "dislikes": dislikes, "views": views})
        blog.like_count += likes
        blog.dislike_count += dislikes
        blog.view_count += views
        return True

    async def update_fields(self, blog_id: UUID, changes: dict[str, Any]) -> BlogDB | None:
        blog = self.blogs.get(blog_id)
        if blog is None:
            return None
        for key, value in changes.items():
            setattr(blog, key, value)
        return blog

    async def delete(self, blog_id: UUID) -> bool:
        return self.blogs.pop(blog_id, None) is not None

    def _newest_first(self, blogs: Iterable[BlogDB]) -> list[BlogDB]:
        return sorted(blogs, key=lambda b: b.created_at, reverse=True)

    async def list_by_user(self, user_id: UUID, skip: int = 0, limit: int = 5) -> list[BlogDB]:
        owned = self._newest_first(b for b in self.blogs.values() if b.user_id == user_id)
        return owned[skip : skip + limit]

    async def list_all(self) -> list[BlogDB]:
        return sorted(self.blogs.values(), key=lambda b: b.created_at)

    async def filter(
        self,
        *,
        tags: list[str],
        created_from: datetime | None,
        created_before: datetime | None,
        sort_column: str | None,
        descending: bool,
        skip: int,
        limit: int,
    ) -> tuple[list[BlogDB], int]:
        matches = [
            b
            for b in self.blogs.values()
            if (not tags or set(tags) & set(b.tags))
            and (created_from is None or b.created_at >= created_from)
            and (created_before is None or b.created_at < created_before)
        ]
        matches = self._newest_first(matches)
        if sort_column:
            matches.sort(key=lambda b: getattr(b, sort_column), reverse=descending)
        return matches[skip : skip + limit], len(matches)

    async def search(
        self,
        *,
        title: str | None,
        author: str | None,
        skip: int,
        limit: int,
    ) -> tuple[list[tuple[BlogDB, str]], int]:
        rows = []
        for blog in self._newest_first(self.blogs.values()):
            owner = self.users.users.get(blog.user_id)
            name = owner.username if owner else UNKNOWN_AUTHOR
            if title and title.lower() not in blog.title.lower():
                continue
            if author and author.lower() not in name.lower():
                continue
            rows.append((blog, name))
        return rows[skip : skip + limit], len(rows)


class FakeInteractionRepository:
    """In-memory stand-in for InteractionRepository."""

    def __init__(self) -> None:
        self.rows: list[BlogInteractionDB] = []

    def of_type(self, kind: InteractionType) -> list[BlogInteractionDB]:
        return [row for row in self.rows if row.type == kind]

    async def find_reaction(
        self,
        blog_id: UUID,
        user_id: str,
        kind: InteractionType,
    ) -> BlogInteractionDB | None:
        return next(
            (
                row
                for row in self.rows
                if row.blog_id == blog_id and row.user_id == user_id and row.type == kind
            ),
            None,
        )

    async def find_active_view(
        self,
        blog_id: UUID,
        user_id: str,
        ip_address: str | None,
        user_agent: str | None,
        now: datetime,
    ) -> BlogInteractionDB | None:
        for row in self.of_type(InteractionType.VIEW):
            if row.blog_id != blog_id or row.user_id != user_id:
                continue
            if row.expires_at is None or row.expires_at <= now:
                continue
            if ip_address is not None and row.ip_address != ip_address:
                continue
            if user_agent is not None and row.user_agent != user_agent:
                continue
            return row
        return None

    async def add(
        self,
        blog_id: UUID,
        user_id: str,
        kind: InteractionType,
        *,
        ip_address: str | None = None,
        user_agent: str | None = None,
        expires_at: datetime | None = None,
    ) -> BlogInteractionDB:
        row = BlogInteractionDB(
            blog_id=blog_id,
            user_id=user_id,
            type=kind,
            ip_address=ip_address,
            user_agent=user_agent,
            expires_at=expires_at,
        )
        self.rows.append(row)
        return row

    async def remove(self, interaction: BlogInteractionDB) -> bool:
        self.rows.remove(interaction)
        return True


class FakeCommentRepository:
    """In-memory stand-in for CommentRepository."""

    def __init__(self) -> None:
        self.comments: dict[UUID, CommentDB] = {}

    async def create(self, blog_id: UUID, user_id: UUID, content: str) -> CommentDB:
        comment = CommentDB(blog_id=blog_id, user_id=user_id, content=content)
        self.comments[comment.id] = comment
        return comment

    async def list_by_blog(self, blog_id: UUID) -> list[CommentDB]:
        return sorted(
            (c for c in self.comments.values() if c.blog_id == blog_id),
            key=lambda c: c.created_at,
        )

    async def count_by_blog_ids(self, blog_ids: list[UUID]) -> dict[UUID, int]:
        counts: dict[UUID, int] = {}
        for comment in self.comments.values():
            if comment.blog_id in blog_ids:
                counts[comment.blog_id] = counts.get(comment.blog_id, 0) + 1
        return counts

    async def get_or_raise(self, comment_id: UUID, detail: str | None = None) -> CommentDB:
        comment = self.comments.get(comment_id)
        if comment is None:
            raise RecordNotFoundError(detail=detail or "Comment not found")
        return comment

    async def update_fields(self, comment_id: UUID, changes: dict[str, Any]) -> CommentDB | None:
        comment = self.comments.get(comment_id)
        if comment is None:
            return None
        for key, value in changes.items():
            setattr(comment, key, value)
        return comment

    async def delete(self, comment_id: UUID) -> bool:
        return self.comments.pop(comment_id, None) is not None


class FakeTokenRepository:
    """In-memory stand-in for the refresh and reset token repositories."""

    def __init__(self, model: type[RefreshTokenDB] | type[PasswordResetTokenDB]) -> None:
        self.model = model
        self.rows: list[Any] = []

    async def store(self, user_id: UUID, token: str, expires_at: datetime) -> Any:  # noqa: ANN401
        row = self.model(user_id=user_id, token=token, expires_at=expires_at)
        self.rows.append(row)
        return row

    async def find_valid(self, token: str, now: datetime) -> Any:  # noqa: ANN401
        return next((r for r in self.rows if r.token == token and r.expires_at > now), None)

    async def delete_for_user(self, user_id: UUID) -> int:
        before = len(self.rows)
        self.rows = [r for r in self.rows if r.user_id != user_id]
        return before - len(self.rows)


def make_user(
    username: str = "testuser",
    email: str = "test@example.com",
    role: str = "user",
    *,
    is_verified: bool = True,
    password_hash: str | None = None,
) -> UserDB:
    return UserDB(
        id=uuid4(),
        username=username,
        email=email,
        role=role,
        is_verified=is_verified,
        password_hash=password_hash,
    )


@fixture
def sample_user() -> UserDB:
    """Create a sample verified user."""
    return make_user()


@fixture
def other_user() -> UserDB:
    """Create a second user who owns nothing of sample_user's."""
    return make_user("otheruser", "other@example.com")


@fixture
def admin_user() -> UserDB:
    """Create an admin user."""
    return make_user("adminuser", "admin@example.com", role="admin")


@fixture
def user_repo(sample_user: UserDB, other_user: UserDB, admin_user: UserDB) -> FakeUserRepository:
    return FakeUserRepository([sample_user, other_user, admin_user])


@fixture
def blog_repo(user_repo: FakeUserRepository) -> FakeBlogRepository:
    return FakeBlogRepository(user_repo)


@fixture
def interaction_repo() -> FakeInteractionRepository:
    return FakeInteractionRepository()


@fixture
def comment_repo() -> FakeCommentRepository:
    return FakeCommentRepository()


@fixture
def refresh_repo() -> FakeTokenRepository:
    return FakeTokenRepository(RefreshTokenDB)


@fixture
def reset_repo() -> FakeTokenRepository:
    return FakeTokenRepository(PasswordResetTokenDB)


@fixture
def mail_service() -> MagicMock:
    """Mail service double that records what would have been sent."""
    mock = MagicMock()
    mock.send_verification_email = AsyncMock(return_value=True)
    mock.send_password_reset_email = AsyncMock(return_value=True)
    return mock


@fixture
def clock() -> MagicMock:
    """Adjustable clock starting at NOW; call ``advance`` to move it."""
    state = {"now": NOW}
    mock = MagicMock(side_effect=lambda: state["now"])

    def advance(delta: timedelta) -> None:
        state["now"] = state["now"] + delta

    mock.advance = advance
    return mock


@fixture
def user_factory() -> Any:  # noqa: ANN401
    """Expose ``make_user`` to tests that need extra accounts."""
    return make_user
