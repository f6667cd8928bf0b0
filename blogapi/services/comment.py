from uuid import UUID

from blogapi.errors import PermissionDeniedError, RecordNotFoundError
from blogapi.models.comment import CommentDB
from blogapi.repositories.blog import BlogRepository
from blogapi.repositories.comment import CommentRepository
from blogapi.utils.helpers import utc_now

COMMENT_NOT_FOUND = "Comment not found"
BLOG_NOT_FOUND = "Blog not found"


class CommentService:
    """Comments on blogs; only the author may edit or delete a comment."""

    def __init__(self, comment_repo: CommentRepository, blog_repo: BlogRepository) -> None:
        self.comment_repo = comment_repo
        self.blog_repo = blog_repo

    async def _require_blog(self, blog_id: UUID) -> None:
        if not await self.blog_repo.exists(blog_id):
            raise RecordNotFoundError(BLOG_NOT_FOUND)

    async def list_comments(self, blog_id: UUID) -> list[CommentDB]:
        await self._require_blog(blog_id)
        return await self.comment_repo.list_by_blog(blog_id)

    async def add_comment(self, blog_id: UUID, user_id: UUID, content: str) -> CommentDB:
        await self._require_blog(blog_id)
        return await self.comment_repo.create(blog_id, user_id, content)

    async def get_comment(self, comment_id: UUID) -> CommentDB:
        return await self.comment_repo.get_or_raise(comment_id, COMMENT_NOT_FOUND)

    async def update_comment(self, comment_id: UUID, user_id: UUID, content: str) -> CommentDB:
        """
        Replace a comment's text.

        Raises:
            RecordNotFoundError: If the comment does not exist
            PermissionDeniedError: If the caller is not the author
        """
        comment = await self.get_comment(comment_id)
        if comment.user_id != user_id:
            mssg = "You can only modify your own comments"
            raise PermissionDeniedError(mssg)
        updated = await self.comment_repo.update_fields(
            comment_id,
            {"content": content, "updated_at": utc_now()},
        )
        if updated is None:
            raise RecordNotFoundError(COMMENT_NOT_FOUND)
        return updated

    async def delete_comment(self, comment_id: UUID, user_id: UUID) -> None:
        comment = await self.get_comment(comment_id)
        if comment.user_id != user_id:
            mssg = "You can only delete your own comments"
            raise PermissionDeniedError(mssg)
        await self.comment_repo.delete(comment_id)
