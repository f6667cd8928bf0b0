"""Authentication routes for registration, login, tokens and account recovery."""

from typing import Annotated

from authlib.integrations.starlette_client import OAuth
from authlib.integrations.starlette_client import OAuthError as AuthlibOAuthError
from fastapi import APIRouter, Header, Query, Request
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException
from starlette.responses import RedirectResponse, Response
from starlette.status import HTTP_201_CREATED, HTTP_404_NOT_FOUND

from blogapi.configs import settings
from blogapi.decorators import timed
from blogapi.dependencies import AuthServiceDep
from blogapi.errors import OAuthError, ValidationError
from blogapi.managers import limiter
from blogapi.monitoring import get_logger
from blogapi.schemas import (
    EmailRequest,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    Token,
)

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])

logger = get_logger(__name__)

GOOGLE = "google"

# OAuth Configuration
oauth = OAuth()

if settings.GOOGLE_CLIENT_ID:
    oauth.register(
        name=GOOGLE,
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=(
            settings.GOOGLE_CLIENT_SECRET.get_secret_value()
            if settings.GOOGLE_CLIENT_SECRET
            else None
        ),
        server_metadata_url="https://accounts.google.com/.well-known/openid-configuration",
        client_kwargs={"scope": "openid email profile"},
    )

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"error": "Rate limit exceeded"}}},
}


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    status_code=HTTP_201_CREATED,
    summary="Register a new user",
    description="Create an account and email a verification link.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {"message": "Registration successful. Please verify your email."},
                },
            },
        },
        400: {
            "description": "Bad Request",
            "content": {"application/json": {"example": {"error": "email already registered"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="auth_register",
)
@timed("/auth/register")
@limiter.limit("5/hour")
async def register_user(
    request: Request,
    response: Response,
    body: RegisterRequest,
    auth_service: AuthServiceDep,
) -> MessageResponse:
    """
    Register a new user.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    body : RegisterRequest
        Username, email and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    MessageResponse
        Confirmation message.

    Raises
    ------
    RegistrationError
        If the email or username is already taken.
    """
    await auth_service.register(body)
    return MessageResponse(message="Registration successful. Please verify your email.")


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=LoginResponse,
    summary="Login for access token",
    description="Authenticate with email and password to obtain access and refresh tokens.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "message": "Login successful",
                        "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "refresh_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                        "token_type": "bearer",
                        "expires_at": "2025-01-01T00:30:00Z",
                    },
                },
            },
        },
        401: {
            "description": "Unauthorized",
            "content": {"application/json": {"example": {"error": "invalid credentials"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="auth_login",
)
@timed("/auth/login")
@limiter.limit("5/minute")
async def login_for_access_token(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    auth_service: AuthServiceDep,
) -> LoginResponse:
    """
    Login with email and password.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    credentials : LoginRequest
        Email and password.
    auth_service : AuthService
        Authentication service dependency.

    Returns
    -------
    LoginResponse
        Access and refresh tokens.

    Raises
    ------
    InvalidCredentialsError
        If authentication fails.
    EmailNotVerifiedError
        If the account's email is not verified yet.
    """
    return await auth_service.login(credentials.email, credentials.password)


def _bearer_token(authorization: str | None) -> str:
    if not authorization:
        mssg = "Authorization header missing"
        raise ValidationError(mssg)
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        mssg = "Invalid Authorization header format"
        raise ValidationError(mssg)
    return token.strip()


@router.post(
    "/refresh",
    response_class=ORJSONResponse,
    response_model=Token,
    summary="Refresh access token",
    description="Exchange a refresh token sent as `Authorization: Bearer <token>`.",
    responses={
        400: {
            "description": "Bad Request",
            "content": {
                "application/json": {"example": {"error": "Authorization header missing"}},
            },
        },
        401: {
            "description": "Unauthorized",
            "content": {"application/json": {"example": {"error": "invalid refresh token"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="auth_refresh",
)
@timed("/auth/refresh")
@limiter.limit("10/minute")
async def refresh_token(
    request: Request,
    response: Response,
    auth_service: AuthServiceDep,
    authorization: Annotated[str | None, Header()] = None,
) -> Token:
    return await auth_service.refresh(_bearer_token(authorization))


@router.get(
    "/verify",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Verify email",
    responses={
        400: {
            "description": "Bad Request",
            "content": {
                "application/json": {"example": {"error": "invalid verification token"}},
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="auth_verify_email",
)
@timed("/auth/verify")
@limiter.limit("10/minute")
async def verify_email(
    request: Request,
    response: Response,
    auth_service: AuthServiceDep,
    token: Annotated[str | None, Query(description="Verification token from the email")] = None,
) -> MessageResponse:
    if not token:
        mssg = "Missing verification token"
        raise ValidationError(mssg)
    await auth_service.verify_email(token)
    return MessageResponse(message="Email verified successfully")


@router.post(
    "/resend-verification",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Resend verification email",
    responses={
        400: {
            "description": "Bad Request",
            "content": {"application/json": {"example": {"error": "user already verified"}}},
        },
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"error": "User not found"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="auth_resend_verification",
)
@timed("/auth/resend-verification")
@limiter.limit("3/hour")
async def resend_verification(
    request: Request,
    response: Response,
    body: EmailRequest,
    auth_service: AuthServiceDep,
) -> MessageResponse:
    await auth_service.resend_verification(body.email)
    return MessageResponse(message="Verification email resent")


@router.post(
    "/forgot-password",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Request a password reset",
    description="Always succeeds, so callers cannot discover which emails are registered.",
    responses={429: RATE_LIMIT_RESPONSE},
    operation_id="auth_forgot_password",
)
@timed("/auth/forgot-password")
@limiter.limit("3/hour")
async def forgot_password(
    request: Request,
    response: Response,
    body: EmailRequest,
    auth_service: AuthServiceDep,
) -> MessageResponse:
    await auth_service.forgot_password(body.email)
    return MessageResponse(message="If the email exists, a reset link has been sent")


@router.post(
    "/reset-password",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Reset password",
    responses={
        400: {
            "description": "Bad Request",
            "content": {"application/json": {"example": {"error": "invalid or expired token"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="auth_reset_password",
)
@timed("/auth/reset-password")
@limiter.limit("5/hour")
async def reset_password(
    request: Request,
    response: Response,
    body: ResetPasswordRequest,
    auth_service: AuthServiceDep,
) -> MessageResponse:
    await auth_service.reset_password(body.token, body.new_password)
    return MessageResponse(message="Password reset successfully")


@router.get(
    "/google/login",
    summary="Initiate Google login",
    description="Redirect the user to Google's consent page.",
    responses={
        307: {"description": "Redirect to provider"},
        404: {
            "description": "Provider not configured",
            "content": {
                "application/json": {"example": {"error": "Provider google not configured"}},
            },
        },
    },
    operation_id="auth_google_login",
)
@timed("/auth/google/login")
async def google_login(request: Request, response: Response) -> RedirectResponse:
    """
    Initiate the Google OAuth flow.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.

    Returns
    -------
    RedirectResponse
        Redirect to Google's consent page.

    Raises
    ------
    HTTPException
        If Google OAuth is not configured.
    """
    client = oauth.create_client(GOOGLE)
    if not client:
        raise HTTPException(
            status_code=HTTP_404_NOT_FOUND,
            detail=f"Provider {GOOGLE} not configured",
        )

    redirect_uri = request.url_for("google_callback")
    return await client.authorize_redirect(request, str(redirect_uri))


@router.get(
    "/google/callback",
    name="google_callback",
    response_class=ORJSONResponse,
    response_model=LoginResponse,
    include_in_schema=False,
    summary="Google OAuth callback",
)
@timed("/auth/google/callback")
async def google_callback(
    request: Request,
    response: Response,
    auth_service: AuthServiceDep,
) -> LoginResponse:
    """
    Handle the Google redirect and exchange it for local tokens.

    Raises
    ------
    HTTPException
        If Google OAuth is not configured.
    OAuthError
        If the code exchange fails or returns no identity.
    """
    client = oauth.create_client(GOOGLE)
    if not client:
        raise HTTPException(
            status_code=HTTP_404_NOT_FOUND,
            detail=f"Provider {GOOGLE} not configured",
        )

    try:
        token = await client.authorize_access_token(request)
    except AuthlibOAuthError as e:
        logger.warning("Google OAuth exchange failed", error=e.error)
        mssg = f"OAuth failed: {e.description or e.error}"
        raise OAuthError(mssg) from e

    user_info = token.get("userinfo") or await client.userinfo(token=token)
    if not user_info:
        mssg = "OAuth failed: no user info returned"
        raise OAuthError(mssg)

    return await auth_service.oauth_login(dict(user_info), GOOGLE)
