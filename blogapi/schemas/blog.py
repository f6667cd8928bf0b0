"""
Blog schemas.

Request bodies for creating and editing blogs, and the response shapes
returned by the CRUD and popularity endpoints.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_tags(tags: list[str]) -> list[str]:
    seen: list[str] = []
    for tag in tags:
        cleaned = tag.strip()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


class BlogCreate(BaseModel):
    """Blog creation body."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Getting started with async Python",
                "content": "asyncio lets a single thread juggle many sockets...",
                "tags": ["python", "asyncio"],
            },
        },
    )

    title: str = Field(..., min_length=1, max_length=200, description="Blog title")
    content: str = Field(..., min_length=1, description="Blog content")
    tags: list[str] = Field(default=[], max_length=20, description="Blog tags")

    @field_validator("title", "content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            mssg = "must not be blank"
            raise ValueError(mssg)
        return v.strip()

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v)


class BlogUpdate(BaseModel):
    """Partial blog update; omitted fields are left untouched."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    content: str | None = Field(default=None, min_length=1)
    tags: list[str] | None = Field(default=None, max_length=20)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str] | None) -> list[str] | None:
        return None if v is None else _clean_tags(v)


class BlogResponse(BaseModel):
    """Blog as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    title: str
    content: str
    tags: list[str] = []
    like_count: int = 0
    dislike_count: int = 0
    view_count: int = 0
    created_at: datetime
    updated_at: datetime


class BlogListResponse(BaseModel):
    message: str = "Blogs retrieved successfully"
    data: list[BlogResponse]
    page: int
    limit: int


class BlogWithPopularity(BaseModel):
    """Blog enriched with its comment count and popularity score."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    content: str
    user_id: UUID
    like_count: int
    dislike_count: int
    view_count: int
    comment_count: int
    popularity_score: float
    created_at: datetime
    updated_at: datetime


class PopularBlogsResponse(BaseModel):
    message: str = "Popular blogs retrieved successfully"
    data: list[BlogWithPopularity]
    count: int
