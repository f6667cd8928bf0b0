from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommentCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000, examples=["Great write-up!"])

    @field_validator("content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            mssg = "must not be blank"
            raise ValueError(mssg)
        return v.strip()


class CommentUpdate(CommentCreate):
    pass


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    blog_id: UUID
    user_id: UUID
    content: str
    created_at: datetime
    updated_at: datetime
