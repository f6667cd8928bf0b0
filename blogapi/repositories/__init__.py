"""Repository layer: typed data access, no business rules."""

from blogapi.repositories.base import BaseRepository
from blogapi.repositories.blog import BlogRepository
from blogapi.repositories.comment import CommentRepository
from blogapi.repositories.interaction import InteractionRepository
from blogapi.repositories.token import PasswordResetTokenRepository, RefreshTokenRepository
from blogapi.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "BlogRepository",
    "CommentRepository",
    "InteractionRepository",
    "PasswordResetTokenRepository",
    "RefreshTokenRepository",
    "UserRepository",
]
