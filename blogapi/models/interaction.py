"""Blog interaction log (likes, dislikes and views)."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import cast
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Index, text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, ForeignKey, SQLModel, String


class InteractionType(StrEnum):
    LIKE = "like"
    DISLIKE = "dislike"
    VIEW = "view"


class BlogInteractionDB(SQLModel, table=True):
    """
    One row per like, dislike or view.

    ``user_id`` is a string so anonymous viewers can be logged under the
    ``"anonymous"`` sentinel together with their IP and User-Agent.
    """

    __tablename__ = cast("declared_attr[str]", "blog_interactions")

    __table_args__ = (
        # A user holds at most one like and one dislike per blog
        Index(
            "uq_blog_interactions_reaction",
            "blog_id",
            "user_id",
            "type",
            unique=True,
            postgresql_where=text("type IN ('like', 'dislike')"),
        ),
        Index("ix_blog_interactions_view_lookup", "blog_id", "user_id", "type", "expires_at"),
    )

    id: UUID = Field(
        default_factory=uuid4,
        primary_key=True,
        nullable=False,
    )
    blog_id: UUID = Field(
        sa_column=Column(
            "blog_id",
            ForeignKey("blogs.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
    )
    user_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="User ID or 'anonymous'",
    )
    ip_address: str | None = Field(
        default=None,
        sa_column=Column(String(64), nullable=True),
    )
    user_agent: str | None = Field(
        default=None,
        sa_column=Column(String(512), nullable=True),
    )
    type: InteractionType = Field(
        sa_column=Column(String(10), nullable=False),
    )
    expires_at: datetime | None = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=True),
        description="Only set for views",
    )
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(tz=UTC),
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
