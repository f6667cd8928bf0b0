"""Comment repository."""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import asc, func, select

from blogapi.models.comment import CommentDB
from blogapi.repositories.base import BaseRepository


class CommentRepository(BaseRepository[CommentDB]):
    """Repository for Comment database operations."""

    model = CommentDB

    async def create(self, blog_id: UUID, user_id: UUID, content: str) -> CommentDB:
        """
        Add a comment to a blog.

        Args:
            blog_id: Commented blog
            user_id: Comment author
            content: Comment text

        Returns:
            CommentDB: Created comment
        """
        now = datetime.now(tz=UTC)
        comment = CommentDB(
            blog_id=blog_id,
            user_id=user_id,
            content=content,
            created_at=now,
            updated_at=now,
        )
        return await self._add_and_refresh(comment)

    async def list_by_blog(self, blog_id: UUID) -> list[CommentDB]:
        """Return a blog's comments, oldest first."""
        statement = (
            select(CommentDB)
            .where(CommentDB.blog_id == blog_id)  # pyrefly: ignore [bad-argument-type]
            .order_by(asc(CommentDB.created_at))
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count_by_blog_ids(self, blog_ids: list[UUID]) -> dict[UUID, int]:
        """
        Count comments for many blogs with one grouped query.

        Args:
            blog_ids: Blogs to count for

        Returns:
            dict[UUID, int]: Comment count per blog; blogs without comments
            are absent
        """
        if not blog_ids:
            return {}
        statement = (
            select(CommentDB.blog_id, func.count())
            .where(CommentDB.blog_id.in_(blog_ids))  # pyrefly: ignore [missing-attribute]
            .group_by(CommentDB.blog_id)
        )
        result = await self.session.execute(statement)
        return {blog_id: count for blog_id, count in result.all()}
