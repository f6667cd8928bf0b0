"""Interaction log repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select

from blogapi.models.interaction import BlogInteractionDB, InteractionType
from blogapi.repositories.base import BaseRepository


class InteractionRepository(BaseRepository[BlogInteractionDB]):
    """Reads and writes rows of the like/dislike/view log."""

    model = BlogInteractionDB

    async def find_reaction(
        self,
        blog_id: UUID,
        user_id: str,
        kind: InteractionType,
    ) -> BlogInteractionDB | None:
        """
        Get the user's like or dislike on a blog.

        Args:
            blog_id: Blog UUID
            user_id: Acting user
            kind: ``LIKE`` or ``DISLIKE``

        Returns:
            BlogInteractionDB | None: The row if the user has reacted that way
        """
        statement = select(BlogInteractionDB).where(
            BlogInteractionDB.blog_id == blog_id,  # pyrefly: ignore [bad-argument-type]
            BlogInteractionDB.user_id == user_id,  # pyrefly: ignore [bad-argument-type]
            BlogInteractionDB.type == kind,  # pyrefly: ignore [bad-argument-type]
        )
        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none()

    async def find_active_view(
        self,
        blog_id: UUID,
        user_id: str,
        ip_address: str | None,
        user_agent: str | None,
        now: datetime,
    ) -> BlogInteractionDB | None:
        """
        Get an unexpired view for this identity.

        Anonymous viewers are told apart by IP and User-Agent, so both take
        part in the match whenever they are given.
        """
        statement = select(BlogInteractionDB).where(
            BlogInteractionDB.blog_id == blog_id,  # pyrefly: ignore [bad-argument-type]
            BlogInteractionDB.user_id == user_id,  # pyrefly: ignore [bad-argument-type]
            BlogInteractionDB.type == InteractionType.VIEW,  # pyrefly: ignore [bad-argument-type]
            BlogInteractionDB.expires_at > now,  # pyrefly: ignore [bad-argument-type]
        )
        if ip_address is not None:
            statement = statement.where(BlogInteractionDB.ip_address == ip_address)  # pyrefly: ignore [bad-argument-type]
        if user_agent is not None:
            statement = statement.where(BlogInteractionDB.user_agent == user_agent)  # pyrefly: ignore [bad-argument-type]
        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none()

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
        """Insert one interaction row."""
        row = BlogInteractionDB(
            blog_id=blog_id,
            user_id=user_id,
            type=kind,
            ip_address=ip_address,
            user_agent=user_agent,
            expires_at=expires_at,
        )
        return await self._add_and_refresh(row)

    async def remove(self, interaction: BlogInteractionDB) -> bool:
        """Delete a previously loaded interaction row."""
        return await self.delete(interaction.id)
