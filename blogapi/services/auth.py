"""Authentication service handling password and OAuth flows."""

import secrets
from collections.abc import Callable
from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from blogapi.configs.settings import RESET_TOKEN_TTL
from blogapi.errors.auth import (
    EmailNotVerifiedError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidResetTokenError,
    InvalidVerificationTokenError,
    OAuthError,
    RegistrationError,
    UserNotFoundError,
)
from blogapi.managers.password_manager import hash_password, verify_password
from blogapi.managers.token_manager import (
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
)
from blogapi.models.user import UserDB
from blogapi.monitoring import get_logger
from blogapi.repositories.token import PasswordResetTokenRepository, RefreshTokenRepository
from blogapi.repositories.user import UserRepository
from blogapi.schemas.auth import LoginResponse, RegisterRequest, Token
from blogapi.services.mail import MailService
from blogapi.utils.helpers import utc_now

logger = get_logger(__name__)


class AuthService:
    """Service for registration, login, token refresh and account recovery."""

    def __init__(
        self,
        user_repo: UserRepository,
        refresh_repo: RefreshTokenRepository,
        reset_repo: PasswordResetTokenRepository,
        mail: MailService,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """
        Initialize the auth service.

        Args:
            user_repo: User repository for database operations
            refresh_repo: Storage for issued refresh tokens
            reset_repo: Storage for password reset tokens
            mail: Sender for verification and reset emails
            clock: Source of the current time
        """
        self.user_repo = user_repo
        self.refresh_repo = refresh_repo
        self.reset_repo = reset_repo
        self.mail = mail
        self._clock = clock

    async def register(self, data: RegisterRequest) -> UserDB:
        """
        Create an unverified account and email its verification link.

        Args:
            data: Validated registration body

        Returns:
            UserDB: The created user

        Raises:
            RegistrationError: If the email or username is taken
        """
        if await self.user_repo.email_exists(data.email):
            mssg = "email already registered"
            raise RegistrationError(mssg)
        if await self.user_repo.username_exists(data.username):
            mssg = "username already taken"
            raise RegistrationError(mssg)

        user = UserDB(
            username=data.username,
            email=data.email,
            password_hash=await hash_password(data.password),
            role="user",
            is_verified=False,
            verification_token=uuid4().hex,
        )
        user = await self.user_repo.create(user)
        await self.mail.send_verification_email(user.email, user.verification_token or "")
        logger.info("User registered", user_id=str(user.id))
        return user

    async def _issue_tokens(self, user: UserDB) -> LoginResponse:
        access_token, expires_at = create_access_token(user.id, user.username, user.role)
        refresh_token, refresh_expires_at = create_refresh_token(user.id, user.username, user.role)
        await self.refresh_repo.store(user.id, refresh_token, refresh_expires_at)
        return LoginResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_at=expires_at,
        )

    async def login(self, email: str, password: str) -> LoginResponse:
        """
        Authenticate with email and password.

        The password is checked before the verification flag so an
        unverified account is only revealed to its owner.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
            EmailNotVerifiedError: Correct password but unverified email
        """
        user = await self.user_repo.get_by_email(email)
        password_hash = user.password_hash if user else None
        if not await verify_password(password, password_hash) or user is None:
            raise InvalidCredentialsError
        if not user.is_verified:
            raise EmailNotVerifiedError

        logger.info("User logged in", user_id=str(user.id))
        return await self._issue_tokens(user)

    async def refresh(self, refresh_token: str) -> Token:
        """
        Exchange a stored refresh token for a new access token.

        Raises:
            InvalidRefreshTokenError: If the token is malformed, expired or not stored
        """
        token_data = decode_refresh_token(refresh_token)
        if not token_data or not token_data.user_id:
            raise InvalidRefreshTokenError
        if not await self.refresh_repo.find_valid(refresh_token, self._clock()):
            raise InvalidRefreshTokenError

        user = await self.user_repo.get_by_id(UUID(token_data.user_id))
        if user is None:
            raise InvalidRefreshTokenError

        access_token, expires_at = create_access_token(user.id, user.username, user.role)
        return Token(access_token=access_token, expires_at=expires_at)

    async def logout(self, user_id: UUID) -> int:
        removed = await self.refresh_repo.delete_for_user(user_id)
        logger.info("User logged out", user_id=str(user_id), revoked=removed)
        return removed

    async def verify_email(self, token: str) -> UserDB:
        user = await self.user_repo.get_by_verification_token(token)
        if user is None:
            raise InvalidVerificationTokenError
        verified = await self.user_repo.update_fields(
            user.id,
            {"is_verified": True, "verification_token": None, "updated_at": self._clock()},
        )
        if verified is None:
            raise InvalidVerificationTokenError
        return verified

    async def resend_verification(self, email: str) -> None:
        """
        Issue a fresh verification token and email it again.

        Raises:
            UserNotFoundError: If no account uses the email
            RegistrationError: If the account is already verified
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            raise UserNotFoundError
        if user.is_verified:
            mssg = "user already verified"
            raise RegistrationError(mssg)

        token = uuid4().hex
        await self.user_repo.update_fields(
            user.id,
            {"verification_token": token, "updated_at": self._clock()},
        )
        await self.mail.send_verification_email(user.email, token)

    async def forgot_password(self, email: str) -> None:
        """Store and mail a reset token; unknown emails are silently ignored."""
        user = await self.user_repo.get_by_email(email)
        if user is None:
            logger.info("Password reset requested for unknown email")
            return

        token = secrets.token_urlsafe(32)
        await self.reset_repo.store(user.id, token, self._clock() + RESET_TOKEN_TTL)
        await self.mail.send_password_reset_email(user.email, token)

    async def reset_password(self, token: str, new_password: str) -> None:
        reset = await self.reset_repo.find_valid(token, self._clock())
        if reset is None:
            raise InvalidResetTokenError

        await self.user_repo.update_fields(
            reset.user_id,
            {"password_hash": await hash_password(new_password), "updated_at": self._clock()},
        )
        # consume every outstanding reset token of the user
        await self.reset_repo.delete_for_user(reset.user_id)
        logger.info("Password reset", user_id=str(reset.user_id))

    async def oauth_login(self, user_info: dict[str, Any], provider: str) -> LoginResponse:
        """
        Log in with identity-provider claims, creating the user on first login.

        Args:
            user_info: OIDC claims (``sub``, ``email``, ...)
            provider: Provider name, e.g. ``google``

        Returns:
            LoginResponse: Tokens for the local account

        Raises:
            OAuthError: If the provider returned no email
        """
        email = (user_info.get("email") or "").strip().lower()
        if not email:
            mssg = "Email required from identity provider"
            raise OAuthError(mssg)

        subject = user_info.get("sub")
        user = await self.user_repo.get_by_provider(provider, subject) if subject else None
        if user is None:
            user = await self.user_repo.get_by_email(email)
        if user is None:
            user = await self.user_repo.create(
                UserDB(
                    username=f"{email.split('@')[0]}_{str(uuid4())[:4]}",
                    email=email,
                    auth_provider=provider,
                    provider_id=subject,
                    profile_picture=user_info.get("picture"),
                    is_verified=True,
                ),
            )
            logger.info("OAuth user created", user_id=str(user.id), provider=provider)

        return await self._issue_tokens(user)
