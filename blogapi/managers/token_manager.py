"""JWT creation and validation (python-jose, HS256)."""

from datetime import UTC, datetime, timedelta
from typing import Literal
from uuid import UUID, uuid4

from jose import JWTError, jwt

from blogapi.configs import settings
from blogapi.schemas.auth import TokenData

type TokenType = Literal["access", "refresh"]


def _create_token(
    user_id: UUID,
    username: str,
    role: str,
    token_type: TokenType,
    expires_delta: timedelta,
) -> tuple[str, datetime]:
    now = datetime.now(UTC)
    expire = now + expires_delta
    to_encode = {
        "sub": username,
        "user_id": str(user_id),
        "role": role,
        "jti": str(uuid4()),
        "iat": now,
        "exp": expire,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "type": token_type,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM), expire


def create_access_token(
    user_id: UUID,
    username: str,
    role: str = "user",
    expires_delta: timedelta | None = None,
) -> tuple[str, datetime]:
    """
    Create a signed access token.

    Args:
        user_id: User's UUID
        username: User's username (``sub`` claim)
        role: User's role, checked by admin-only routes
        expires_delta: Optional lifetime override

    Returns:
        tuple[str, datetime]: Encoded token and its expiry
    """
    return _create_token(
        user_id,
        username,
        role,
        "access",
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
    )


def create_refresh_token(
    user_id: UUID,
    username: str,
    role: str = "user",
    expires_delta: timedelta | None = None,
) -> tuple[str, datetime]:
    """
    Create a signed refresh token.

    Returns:
        tuple[str, datetime]: Encoded token and its expiry
    """
    return _create_token(
        user_id,
        username,
        role,
        "refresh",
        expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
    )


def _decode_token(token: str, expected_type: TokenType) -> TokenData | None:
    """
    Decode and validate a JWT.

    Signature, expiry, issuer and audience are verified; the ``type``
    claim must match ``expected_type``.

    Returns:
        TokenData | None: Decoded claims, or None if the token is unusable
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError:
        return None

    username: str | None = payload.get("sub")
    user_id: str | None = payload.get("user_id")
    jti: str | None = payload.get("jti")
    token_type: str | None = payload.get("type")

    if not username or not user_id or not jti or token_type != expected_type:
        return None

    return TokenData(
        username=username,
        user_id=user_id,
        role=payload.get("role", "user"),
        jti=jti,
        token_type=token_type,
    )


def decode_access_token(token: str) -> TokenData | None:
    return _decode_token(token, "access")


def decode_refresh_token(token: str) -> TokenData | None:
    return _decode_token(token, "refresh")
