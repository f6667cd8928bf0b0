"""Profile schemas.

Profile bodies use camelCase keys (``userId``, ``profilePicture``) on the
wire; Python code uses the snake_case field names.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProfileResponse(BaseModel):
    """Public view of the caller's own profile."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    user_id: UUID = Field(alias="userId")
    role: str
    username: str
    email: str
    bio: str | None = None
    profile_picture: str | None = Field(default=None, alias="profilePicture")


class ProfileUpdate(BaseModel):
    """Partial profile update; blank values are ignored."""

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = Field(default=None, max_length=50)
    bio: str | None = Field(default=None, max_length=500)
    profile_picture: str | None = Field(default=None, alias="profilePicture", max_length=500)

    def changes(self) -> dict[str, str]:
        """Return only the fields that carry a non-blank value."""
        return {
            key: value.strip()
            for key, value in self.model_dump(exclude_none=True).items()
            if value.strip()
        }


class PictureUploadResponse(BaseModel):
    message: str = "Profile picture uploaded successfully"
    path: str
