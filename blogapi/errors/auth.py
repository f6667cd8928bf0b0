"""Authentication and authorization errors."""

from logging import getLogger

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
)

from blogapi.configs import file_logger
from blogapi.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class NotAuthenticatedError(UserAuthenticationError):
    """Raised when a protected route is called without a usable token."""

    def __init__(self) -> None:
        super().__init__("User not authenticated", HTTP_401_UNAUTHORIZED)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when credentials are invalid."""

    def __init__(self) -> None:
        super().__init__("invalid credentials", HTTP_401_UNAUTHORIZED)


class EmailNotVerifiedError(UserAuthenticationError):
    """Raised when an unverified account tries to log in."""

    def __init__(self) -> None:
        super().__init__("please verify your email before login", HTTP_401_UNAUTHORIZED)


class InvalidRefreshTokenError(UserAuthenticationError):
    """Raised when a refresh token is malformed, expired or not on record."""

    def __init__(self) -> None:
        super().__init__("invalid refresh token", HTTP_401_UNAUTHORIZED)


class InvalidVerificationTokenError(UserAuthenticationError):
    """Raised when an email verification token matches no user."""

    def __init__(self) -> None:
        super().__init__("invalid verification token", HTTP_400_BAD_REQUEST)


class InvalidResetTokenError(UserAuthenticationError):
    """Raised when a password reset token is unknown or expired."""

    def __init__(self) -> None:
        super().__init__("invalid or expired token", HTTP_400_BAD_REQUEST)


class RegistrationError(UserAuthenticationError):
    """Raised when registration input conflicts with existing accounts."""

    def __init__(self, detail: str = "registration failed") -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class UserNotFoundError(UserAuthenticationError):
    """Raised when the referenced user does not exist."""

    def __init__(self) -> None:
        super().__init__("User not found", HTTP_404_NOT_FOUND)


class OAuthError(UserAuthenticationError):
    """Raised when OAuth authentication fails."""

    def __init__(self, message: str = "OAuth authentication failed") -> None:
        super().__init__(message, HTTP_400_BAD_REQUEST)


class PermissionDeniedError(BaseAppError):
    """Raised when the caller is authenticated but not allowed to act."""

    def __init__(self, detail: str = "Permission denied") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


auth_exception_handler = create_exception_handler(logger)
