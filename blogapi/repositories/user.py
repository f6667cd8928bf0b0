"""User repository for database operations."""

from typing import cast
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.sql.expression import ColumnElement

from blogapi.models.user import UserDB
from blogapi.repositories.base import BaseRepository


class UserRepository(BaseRepository[UserDB]):
    """
    Repository for User database operations.

    Emails are stored lower-cased; callers normalise before looking up.
    """

    model = UserDB

    async def create(self, user: UserDB) -> UserDB:
        """
        Persist a new user.

        Args:
            user: Fully populated user row

        Returns:
            UserDB: Created user

        Raises:
            DuplicateEntryError: If username or email already exists
        """
        return await self._add_and_refresh(user)

    async def get_by_username(self, username: str) -> UserDB | None:
        result = await self.session.execute(
            select(UserDB).where(cast(ColumnElement[bool], UserDB.username == username)),
        )
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> UserDB | None:
        result = await self.session.execute(
            select(UserDB).where(cast(ColumnElement[bool], UserDB.email == email)),
        )
        return result.scalar_one_or_none()

    async def get_by_verification_token(self, token: str) -> UserDB | None:
        return await self.get_by_field("verification_token", token)

    async def get_by_provider(self, provider: str, provider_id: str) -> UserDB | None:
        """
        Get a user linked to an external identity provider.

        Args:
            provider: Provider name, e.g. ``google``
            provider_id: Subject identifier issued by the provider

        Returns:
            UserDB | None: The linked user, if any
        """
        result = await self.session.execute(
            select(UserDB).where(
                cast(ColumnElement[bool], UserDB.auth_provider == provider),
                cast(ColumnElement[bool], UserDB.provider_id == provider_id),
            ),
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        return await self._check_exists_by_field("email", email)

    async def username_exists(self, username: str, exclude_id: UUID | None = None) -> bool:
        return await self._check_exists_by_field("username", username, exclude_id)
