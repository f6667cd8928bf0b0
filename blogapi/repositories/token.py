"""Refresh token and password reset token storage."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select

from blogapi.models.token import PasswordResetTokenDB, RefreshTokenDB
from blogapi.repositories.base import BaseRepository


class RefreshTokenRepository(BaseRepository[RefreshTokenDB]):
    """Issued refresh tokens. A refresh is only honoured for stored tokens."""

    model = RefreshTokenDB

    async def store(self, user_id: UUID, token: str, expires_at: datetime) -> RefreshTokenDB:
        return await self._add_and_refresh(
            RefreshTokenDB(user_id=user_id, token=token, expires_at=expires_at),
        )

    async def find_valid(self, token: str, now: datetime) -> RefreshTokenDB | None:
        statement = select(RefreshTokenDB).where(
            RefreshTokenDB.token == token,  # pyrefly: ignore [bad-argument-type]
            RefreshTokenDB.expires_at > now,  # pyrefly: ignore [bad-argument-type]
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def delete_for_user(self, user_id: UUID) -> int:
        """Delete every refresh token of a user and return how many were removed."""
        statement = delete(RefreshTokenDB).where(
            RefreshTokenDB.user_id == user_id,  # pyrefly: ignore [bad-argument-type]
        )
        result = await self._execute(statement)
        return result.rowcount or 0


class PasswordResetTokenRepository(BaseRepository[PasswordResetTokenDB]):
    """Single-use password reset tokens."""

    model = PasswordResetTokenDB

    async def store(self, user_id: UUID, token: str, expires_at: datetime) -> PasswordResetTokenDB:
        return await self._add_and_refresh(
            PasswordResetTokenDB(user_id=user_id, token=token, expires_at=expires_at),
        )

    async def find_valid(self, token: str, now: datetime) -> PasswordResetTokenDB | None:
        statement = select(PasswordResetTokenDB).where(
            PasswordResetTokenDB.token == token,  # pyrefly: ignore [bad-argument-type]
            PasswordResetTokenDB.expires_at > now,  # pyrefly: ignore [bad-argument-type]
        )
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def delete_for_user(self, user_id: UUID) -> int:
        statement = delete(PasswordResetTokenDB).where(
            PasswordResetTokenDB.user_id == user_id,  # pyrefly: ignore [bad-argument-type]
        )
        result = await self._execute(statement)
        return result.rowcount or 0
