"""Blog CRUD with ownership checks."""

from uuid import UUID

from blogapi.configs.settings import DEFAULT_USER_BLOGS_LIMIT, MAX_USER_BLOGS_LIMIT
from blogapi.errors import PermissionDeniedError, RecordNotFoundError
from blogapi.models.blog import BlogDB
from blogapi.monitoring import get_logger
from blogapi.repositories.blog import BlogRepository
from blogapi.schemas.blog import BlogCreate, BlogUpdate
from blogapi.utils.helpers import utc_now

logger = get_logger(__name__)

BLOG_NOT_FOUND = "Blog not found"
NOT_BLOG_OWNER = "You can only modify your own blogs"


class BlogService:
    """Create, read, update and delete blogs."""

    def __init__(self, blog_repo: BlogRepository) -> None:
        self.blog_repo = blog_repo

    async def create_blog(self, data: BlogCreate, user_id: UUID) -> BlogDB:
        blog = await self.blog_repo.create(data, user_id)
        logger.info("Blog created", blog_id=str(blog.id), user_id=str(user_id))
        return blog

    async def get_blog(self, blog_id: UUID) -> BlogDB:
        return await self.blog_repo.get_or_raise(blog_id, BLOG_NOT_FOUND)

    async def list_user_blogs(
        self,
        user_id: UUID,
        page: int = 1,
        limit: int = DEFAULT_USER_BLOGS_LIMIT,
    ) -> tuple[list[BlogDB], int, int]:
        """
        Get one page of a user's blogs.

        Out-of-range paging values are clamped rather than rejected: page is
        at least 1 and limit lies in ``1..MAX_USER_BLOGS_LIMIT``.

        Returns:
            tuple: The blogs, the page used and the limit used
        """
        page = max(page, 1)
        if limit <= 0:
            limit = DEFAULT_USER_BLOGS_LIMIT
        limit = min(limit, MAX_USER_BLOGS_LIMIT)
        blogs = await self.blog_repo.list_by_user(user_id, skip=(page - 1) * limit, limit=limit)
        return blogs, page, limit

    async def _owned_blog(self, blog_id: UUID, user_id: UUID) -> BlogDB:
        blog = await self.blog_repo.get_or_raise(blog_id, BLOG_NOT_FOUND)
        if blog.user_id != user_id:
            raise PermissionDeniedError(NOT_BLOG_OWNER)
        return blog

    async def update_blog(self, blog_id: UUID, data: BlogUpdate, user_id: UUID) -> BlogDB:
        """
        Apply a partial update.

        Only the columns present in ``data`` are written, plus
        ``updated_at``; interaction counters are never part of the update.

        Raises:
            RecordNotFoundError: If the blog does not exist
            PermissionDeniedError: If the caller does not own the blog
        """
        await self._owned_blog(blog_id, user_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        changes["updated_at"] = utc_now()
        blog = await self.blog_repo.update_fields(blog_id, changes)
        if blog is None:
            raise RecordNotFoundError(BLOG_NOT_FOUND)
        return blog

    async def delete_blog(self, blog_id: UUID, user_id: UUID) -> None:
        await self._owned_blog(blog_id, user_id)
        await self.blog_repo.delete(blog_id)
        logger.info("Blog deleted", blog_id=str(blog_id), user_id=str(user_id))
