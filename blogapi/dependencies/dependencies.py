# blogapi/dependencies/dependencies.py

"""Request-scoped dependencies: sessions, repositories, services and auth."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from blogapi.clients.ai_client import AiClient
from blogapi.configs.settings import DEFAULT_POPULAR_LIMIT
from blogapi.db import get_session
from blogapi.errors import NotAuthenticatedError, PermissionDeniedError, ValidationError
from blogapi.managers.token_manager import decode_access_token
from blogapi.models import UserDB
from blogapi.repositories import (
    BlogRepository,
    CommentRepository,
    InteractionRepository,
    PasswordResetTokenRepository,
    RefreshTokenRepository,
    UserRepository,
)
from blogapi.schemas.query import FilterParams, SearchParams
from blogapi.services import (
    AuthService,
    BlogQueryService,
    BlogService,
    CommentService,
    InteractionService,
    MailService,
    PopularityService,
    ProfileService,
)
from blogapi.services.blog_query import page_to_skip

bearer_scheme = HTTPBearer(auto_error=False)

SessionDep = Annotated[AsyncSession, Depends(get_session)]
CredentialsDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def get_user_repository(session: SessionDep) -> UserRepository:
    """
    Resolve the `UserRepository` dependency.

    Parameters
    ----------
    session : AsyncSession
        Database session.

    Returns
    -------
    UserRepository
        Repository instance bound to the session.
    """
    return UserRepository(session)


def get_blog_repository(session: SessionDep) -> BlogRepository:
    return BlogRepository(session)


def get_comment_repository(session: SessionDep) -> CommentRepository:
    return CommentRepository(session)


def get_interaction_repository(session: SessionDep) -> InteractionRepository:
    return InteractionRepository(session)


def get_refresh_token_repository(session: SessionDep) -> RefreshTokenRepository:
    return RefreshTokenRepository(session)


def get_reset_token_repository(session: SessionDep) -> PasswordResetTokenRepository:
    return PasswordResetTokenRepository(session)


UserRepoDep = Annotated[UserRepository, Depends(get_user_repository)]
BlogRepoDep = Annotated[BlogRepository, Depends(get_blog_repository)]
CommentRepoDep = Annotated[CommentRepository, Depends(get_comment_repository)]
InteractionRepoDep = Annotated[InteractionRepository, Depends(get_interaction_repository)]
RefreshTokenRepoDep = Annotated[RefreshTokenRepository, Depends(get_refresh_token_repository)]
ResetTokenRepoDep = Annotated[PasswordResetTokenRepository, Depends(get_reset_token_repository)]


async def _user_from_credentials(
    credentials: HTTPAuthorizationCredentials | None,
    repo: UserRepository,
) -> UserDB | None:
    if credentials is None or credentials.scheme.lower() != "bearer":
        return None
    token_data = decode_access_token(credentials.credentials)
    if not token_data or not token_data.user_id:
        return None
    try:
        user_id = UUID(token_data.user_id)
    except ValueError:
        return None
    return await repo.get_by_id(user_id)


async def get_current_user(credentials: CredentialsDep, repo: UserRepoDep) -> UserDB:
    """
    Get current authenticated user using user_id from token claims.

    Parameters
    ----------
    credentials : HTTPAuthorizationCredentials | None
        Bearer credentials, if any were sent.
    repo : UserRepository
        User repository dependency.

    Returns
    -------
    UserDB
        Current authenticated user.

    Raises
    ------
    NotAuthenticatedError
        If the token is missing, invalid or names an unknown user.
    """
    user = await _user_from_credentials(credentials, repo)
    if user is None:
        raise NotAuthenticatedError
    return user


async def get_optional_user(credentials: CredentialsDep, repo: UserRepoDep) -> UserDB | None:
    """Resolve the caller when a valid token is present, otherwise None."""
    return await _user_from_credentials(credentials, repo)


async def require_admin(user: Annotated[UserDB, Depends(get_current_user)]) -> UserDB:
    if user.role != "admin":
        mssg = "Admin access required"
        raise PermissionDeniedError(mssg)
    return user


UserDBDep = Annotated[UserDB, Depends(get_current_user)]
OptionalUserDep = Annotated[UserDB | None, Depends(get_optional_user)]
AdminDep = Annotated[UserDB, Depends(require_admin)]


def get_mail_service() -> MailService:
    return MailService()


MailDep = Annotated[MailService, Depends(get_mail_service)]


def get_ai_client_state(request: Request) -> AiClient:
    return request.app.state.ai_client


AiDep = Annotated[AiClient, Depends(get_ai_client_state)]


def get_auth_service(
    user_repo: UserRepoDep,
    refresh_repo: RefreshTokenRepoDep,
    reset_repo: ResetTokenRepoDep,
    mail: MailDep,
) -> AuthService:
    return AuthService(user_repo, refresh_repo, reset_repo, mail)


def get_profile_service(user_repo: UserRepoDep) -> ProfileService:
    return ProfileService(user_repo)


def get_blog_service(blog_repo: BlogRepoDep) -> BlogService:
    return BlogService(blog_repo)


def get_comment_service(comment_repo: CommentRepoDep, blog_repo: BlogRepoDep) -> CommentService:
    return CommentService(comment_repo, blog_repo)


def get_interaction_service(
    blog_repo: BlogRepoDep,
    interaction_repo: InteractionRepoDep,
) -> InteractionService:
    return InteractionService(blog_repo, interaction_repo)


def get_popularity_service(
    blog_repo: BlogRepoDep,
    comment_repo: CommentRepoDep,
) -> PopularityService:
    return PopularityService(blog_repo, comment_repo)


def get_blog_query_service(blog_repo: BlogRepoDep) -> BlogQueryService:
    return BlogQueryService(blog_repo)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
BlogServiceDep = Annotated[BlogService, Depends(get_blog_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
InteractionServiceDep = Annotated[InteractionService, Depends(get_interaction_service)]
PopularityServiceDep = Annotated[PopularityService, Depends(get_popularity_service)]
BlogQueryServiceDep = Annotated[BlogQueryService, Depends(get_blog_query_service)]


def _lenient_int(value: str | None) -> int | None:
    """Parse an optional integer query value, returning None when it is not one."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _parse_day(value: str | None, name: str) -> date | None:
    if not value:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()  # noqa: DTZ007
    except ValueError as e:
        mssg = f"Invalid {name} format. Use YYYY-MM-DD"
        raise ValidationError(mssg) from e


def _parse_int(value: str | None, name: str) -> int | None:
    if value is None or value == "":
        return None
    parsed = _lenient_int(value)
    if parsed is None:
        mssg = f"Invalid {name} parameter"
        raise ValidationError(mssg)
    return parsed


def get_filter_params(
    tags: Annotated[list[str] | None, Query(description="Tags to match (any)")] = None,
    date_from: Annotated[str | None, Query(description="YYYY-MM-DD")] = None,
    date_to: Annotated[str | None, Query(description="YYYY-MM-DD, inclusive")] = None,
    popularity_sort: Annotated[
        str | None,
        Query(description="views, likes, dislikes or engagement"),
    ] = None,
    sort_order: Annotated[str | None, Query(description="asc or desc")] = None,
    limit: Annotated[str | None, Query(description="Page size (default 20)")] = None,
    skip: Annotated[str | None, Query(description="Records to skip")] = None,
    page: Annotated[str | None, Query(description="1-based page, overrides skip")] = None,
) -> FilterParams:
    """
    Build `FilterParams` from raw query strings.

    Returns
    -------
    FilterParams
        Parsed filter inputs.

    Raises
    ------
    ValidationError
        For malformed dates, a non-positive limit or a negative skip.
    """
    parsed_limit = _parse_int(limit, "limit")
    if parsed_limit is not None and parsed_limit <= 0:
        mssg = "Invalid limit parameter"
        raise ValidationError(mssg)
    parsed_skip = _parse_int(skip, "skip")
    if parsed_skip is not None and parsed_skip < 0:
        mssg = "Invalid skip parameter"
        raise ValidationError(mssg)

    params = FilterParams(
        tags=[tag for tag in (tags or []) if tag.strip()],
        date_from=_parse_day(date_from, "date_from"),
        date_to=_parse_day(date_to, "date_to"),
        popularity_sort=popularity_sort or None,
        sort_order=sort_order or None,
        limit=parsed_limit or 0,
        skip=parsed_skip or 0,
    )
    page_number = _lenient_int(page)
    if page_number is not None and page_number > 0:
        params.skip = page_to_skip(page_number, params.limit)
    return params


def get_search_params(
    title: Annotated[str | None, Query(description="Title substring")] = None,
    author: Annotated[str | None, Query(description="Author username substring")] = None,
    limit: Annotated[str | None, Query(description="Page size (default 20)")] = None,
    skip: Annotated[str | None, Query(description="Records to skip")] = None,
    page: Annotated[str | None, Query(description="1-based page, overrides skip")] = None,
) -> SearchParams:
    """Build `SearchParams`; the sign of limit/skip is checked by the query service."""
    params = SearchParams(
        title=title,
        author=author,
        limit=_parse_int(limit, "limit") or 0,
        skip=_parse_int(skip, "skip") or 0,
    )
    page_number = _lenient_int(page)
    if page_number is not None and page_number > 0:
        params.skip = page_to_skip(page_number, max(params.limit, 0))
    return params


def get_popular_limit(
    limit: Annotated[str | None, Query(description="Number of blogs (default 10)")] = None,
) -> int:
    parsed = _lenient_int(limit)
    if parsed is None or parsed <= 0:
        return DEFAULT_POPULAR_LIMIT
    return parsed


FilterParamsDep = Annotated[FilterParams, Depends(get_filter_params)]
SearchParamsDep = Annotated[SearchParams, Depends(get_search_params)]
PopularLimitDep = Annotated[int, Depends(get_popular_limit)]


@dataclass(frozen=True)
class UserBlogsQuery:
    """
    Query container for listing one user's blogs.

    Parameters
    ----------
    user_id : str | None
        Raw author identifier; None means the caller.
    page : int
        1-based page, 1 when missing or unparseable.
    limit : int
        Page size, 0 when missing or unparseable (the service applies its default).
    """

    user_id: str | None = None
    page: int = 1
    limit: int = 0


def get_user_blogs_query(
    user_id: Annotated[str | None, Query(description="Author ID (defaults to caller)")] = None,
    page: Annotated[str | None, Query(description="1-based page (default 1)")] = None,
    limit: Annotated[str | None, Query(description="Page size, 1 to 5 (default 5)")] = None,
) -> UserBlogsQuery:
    return UserBlogsQuery(
        user_id=user_id or None,
        page=_lenient_int(page) or 1,
        limit=_lenient_int(limit) or 0,
    )


UserBlogsQueryDep = Annotated[UserBlogsQuery, Depends(get_user_blogs_query)]
