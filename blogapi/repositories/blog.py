"""Blog repository for database operations."""

from datetime import UTC, datetime
from logging import getLogger
from uuid import UUID

from sqlalchemy import String, asc, desc, func, select, update
from sqlalchemy.dialects.postgresql import array
from sqlalchemy.sql.expression import ColumnElement

from blogapi.configs import file_logger
from blogapi.models.blog import BlogDB
from blogapi.models.user import UserDB
from blogapi.repositories.base import BaseRepository
from blogapi.schemas.blog import BlogCreate

logger = file_logger(getLogger(__name__))

UNKNOWN_AUTHOR = "Unknown Author"


class BlogRepository(BaseRepository[BlogDB]):
    """
    Repository for Blog database operations.

    Counter columns are only ever touched through ``adjust_counters`` so
    concurrent interactions never overwrite each other.
    """

    model = BlogDB

    async def create(self, blog: BlogCreate, user_id: UUID) -> BlogDB:
        """
        Create a new blog post.

        Args:
            blog: Validated creation body
            user_id: Owner of the new blog

        Returns:
            BlogDB: Created blog
        """
        now = datetime.now(tz=UTC)
        db_blog = BlogDB(
            user_id=user_id,
            title=blog.title,
            content=blog.content,
            tags=blog.tags,
            created_at=now,
            updated_at=now,
        )
        return await self._add_and_refresh(db_blog)

    async def adjust_counters(
        self,
        blog_id: UUID,
        likes: int = 0,
        dislikes: int = 0,
        views: int = 0,
    ) -> bool:
        """
        Apply relative changes to the interaction counters in one statement.

        Args:
            blog_id: Blog UUID
            likes: Delta for ``like_count``
            dislikes: Delta for ``dislike_count``
            views: Delta for ``view_count``

        Returns:
            bool: False when no blog matched ``blog_id``
        """
        values = {}
        if likes:
            values["like_count"] = BlogDB.like_count + likes
        if dislikes:
            values["dislike_count"] = BlogDB.dislike_count + dislikes
        if views:
            values["view_count"] = BlogDB.view_count + views
        if not values:
            return await self.exists(blog_id)

        statement = (
            update(BlogDB)
            .where(BlogDB.id == blog_id)  # pyrefly: ignore [bad-argument-type]
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self._execute(statement)
        return bool(result.rowcount)

    async def list_by_user(self, user_id: UUID, skip: int = 0, limit: int = 5) -> list[BlogDB]:
        """
        Get a page of one user's blogs, newest first.

        Args:
            user_id: Owner UUID
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            list[BlogDB]: Blogs owned by the user
        """
        query = (
            select(BlogDB)
            .where(BlogDB.user_id == user_id)  # pyrefly: ignore [bad-argument-type]
            .order_by(desc(BlogDB.created_at))
            .offset(skip)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_all(self) -> list[BlogDB]:
        """Return every blog, oldest first."""
        query = select(BlogDB).order_by(asc(BlogDB.created_at), asc(BlogDB.id))
        result = await self.session.execute(query)
        return list(result.scalars().all())

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
        """
        Filter blogs by tags and creation window.

        Tags are OR-matched with the JSONB ``?|`` operator, which the GIN index
        on ``tags`` serves. Without a ``sort_column`` results are newest
        first.

        Args:
            tags: Blogs must carry at least one of these (ignored when empty)
            created_from: Inclusive lower bound on ``created_at``
            created_before: Exclusive upper bound on ``created_at``
            sort_column: Counter column to order by
            descending: Direction for ``sort_column``
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            tuple[list[BlogDB], int]: The page and the total match count
        """
        conditions: list[ColumnElement[bool]] = []
        if tags:
            # pyrefly: ignore [missing-attribute]
            conditions.append(BlogDB.tags.has_any(array(tags)))
        if created_from is not None:
            conditions.append(BlogDB.created_at >= created_from)  # pyrefly: ignore [bad-argument-type]
        if created_before is not None:
            conditions.append(BlogDB.created_at < created_before)  # pyrefly: ignore [bad-argument-type]

        if sort_column:
            column = getattr(BlogDB, sort_column)
            order = [desc(column) if descending else asc(column), desc(BlogDB.created_at)]
        else:
            order = [desc(BlogDB.created_at)]

        query = select(BlogDB).where(*conditions).order_by(*order).offset(skip).limit(limit)
        count_query = select(func.count()).select_from(BlogDB).where(*conditions)

        total = (await self.session.execute(count_query)).scalar() or 0
        result = await self.session.execute(query)
        blogs = list(result.scalars().all())
        logger.info(f"Filter matched {total} blogs, returning {len(blogs)}")
        return blogs, total

    async def search(
        self,
        *,
        title: str | None,
        author: str | None,
        skip: int,
        limit: int,
    ) -> tuple[list[tuple[BlogDB, str]], int]:
        """
        Case-insensitive substring search on title and author username.

        Args:
            title: Substring of the title
            author: Substring of the author's username
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            tuple: ``(blog, author_name)`` pairs, newest first, and the total
            number of matches before paging
        """
        conditions: list[ColumnElement[bool]] = []
        if title:
            # pyrefly: ignore [missing-attribute]
            conditions.append(BlogDB.title.icontains(title, autoescape=True))
        if author:
            # pyrefly: ignore [missing-attribute]
            conditions.append(UserDB.username.icontains(author, autoescape=True))

        author_name = func.coalesce(UserDB.username, UNKNOWN_AUTHOR, type_=String).label("author_name")
        joined = select(BlogDB, author_name).outerjoin(UserDB, UserDB.id == BlogDB.user_id)
        query = joined.where(*conditions).order_by(desc(BlogDB.created_at)).offset(skip).limit(limit)
        count_query = (
            select(func.count())
            .select_from(BlogDB)
            .outerjoin(UserDB, UserDB.id == BlogDB.user_id)
            .where(*conditions)
        )

        total = (await self.session.execute(count_query)).scalar() or 0
        result = await self.session.execute(query)
        rows = [(blog, name) for blog, name in result.all()]
        return rows, total
