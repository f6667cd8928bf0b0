"""User database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import UUID, uuid4

from pydantic import ConfigDict
from sqlalchemy import DateTime
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String


class UserDB(SQLModel, table=True):
    """
    User database model for PostgreSQL.

    Password users carry a hash and must verify their email before logging
    in; OAuth users have no password and are created verified.
    """

    __tablename__ = cast("declared_attr[str]", "users")

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
        description="User ID",
    )

    username: str = Field(
        sa_column=Column(String(50), unique=True, nullable=False, index=True),
        description="Username (unique)",
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, nullable=False, index=True),
        description="Email address (unique, lower-cased)",
    )
    password_hash: str | None = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Hashed password (null for OAuth users)",
    )
    auth_provider: str = Field(
        default="email",
        sa_column=Column(String(50), nullable=False, server_default="email"),
        description="Auth provider (email, google)",
    )
    provider_id: str | None = Field(
        default=None,
        sa_column=Column(String(255), nullable=True, index=True),
        description="Provider specific ID",
    )

    bio: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="User bio",
    )
    profile_picture: str | None = Field(
        default=None,
        sa_column=Column(String(500)),
        description="Profile picture path",
    )

    is_verified: bool = Field(
        default=False,
        nullable=False,
        description="Whether the user has verified their email",
    )
    verification_token: str | None = Field(
        default=None,
        sa_column=Column(String(64), nullable=True, index=True),
        description="Pending email verification token",
    )

    role: str = Field(
        default="user",
        sa_column=Column(String(20), nullable=False, server_default="user", index=True),
        description="User role (user, admin)",
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True)),
        description="Last update timestamp",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "username": "johndoe",
                "email": "johndoe@gmail.com",
                "is_verified": True,
                "role": "user",
            },
        },
    )
