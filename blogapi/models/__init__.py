"""Database models for the application."""

from blogapi.models.blog import BlogDB
from blogapi.models.comment import CommentDB
from blogapi.models.interaction import BlogInteractionDB, InteractionType
from blogapi.models.token import PasswordResetTokenDB, RefreshTokenDB
from blogapi.models.user import UserDB

__all__ = [
    "BlogDB",
    "BlogInteractionDB",
    "CommentDB",
    "InteractionType",
    "PasswordResetTokenDB",
    "RefreshTokenDB",
    "UserDB",
]
