# blogapi/routes/interaction.py

"""
Blog interaction routes: like, dislike and view.

Likes and dislikes require authentication and toggle; a view is recorded at
most once per viewer per 24 hours and is open to anonymous callers, who are
identified by client IP and User-Agent.
"""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response

from blogapi.configs.settings import API_PREFIX
from blogapi.decorators import timed
from blogapi.dependencies import InteractionServiceDep, OptionalUserDep, UserDBDep
from blogapi.managers import limiter, tiered_limit
from blogapi.schemas import ErrorResponse, MessageResponse
from blogapi.utils.helpers import host, user_agent
from blogapi.utils.identifiers import parse_uuid

router = APIRouter(prefix=f"{API_PREFIX}/blogs", tags=["👍 Interactions"])

INVALID_BLOG_ID = "Invalid blog ID"

ERROR_RESPONSES = {
    400: {
        "description": "Bad request",
        "model": ErrorResponse,
        "content": {"application/json": {"example": {"error": INVALID_BLOG_ID}}},
    },
    404: {
        "description": "Not found",
        "model": ErrorResponse,
        "content": {"application/json": {"example": {"error": "Blog not found"}}},
    },
    429: {
        "description": "Rate limit exceeded",
        "model": ErrorResponse,
        "content": {"application/json": {"example": {"error": "Rate limit exceeded"}}},
    },
}
UNAUTHORIZED_RESPONSE = {
    "description": "Unauthorized",
    "model": ErrorResponse,
    "content": {"application/json": {"example": {"error": "User not authenticated"}}},
}


@router.post(
    "/{blog_id}/like",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Like a blog",
    description=(
        "Toggle the caller's like. Liking again removes the like; liking a "
        "disliked blog replaces the dislike."
    ),
    responses={
        200: {
            "content": {"application/json": {"example": {"message": "Blog liked successfully"}}},
        },
        401: UNAUTHORIZED_RESPONSE,
        **ERROR_RESPONSES,
    },
    operation_id="blogs_like",
)
@timed("/blogs/like")
@limiter.limit(tiered_limit(30))
async def like_blog(
    request: Request,
    response: Response,
    blog_id: str,
    user: UserDBDep,
    service: InteractionServiceDep,
) -> MessageResponse:
    """
    Like a blog.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : str
        Blog identifier.
    user : UserDB
        Authenticated caller.
    service : InteractionService
        Interaction engine dependency.

    Returns
    -------
    MessageResponse
        Confirmation message, whatever the toggle outcome.
    """
    await service.like(parse_uuid(blog_id, INVALID_BLOG_ID), str(user.id))
    return MessageResponse(message="Blog liked successfully")


@router.post(
    "/{blog_id}/dislike",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Dislike a blog",
    description="Toggle the caller's dislike; symmetric to like.",
    responses={
        200: {
            "content": {
                "application/json": {"example": {"message": "Blog disliked successfully"}},
            },
        },
        401: UNAUTHORIZED_RESPONSE,
        **ERROR_RESPONSES,
    },
    operation_id="blogs_dislike",
)
@timed("/blogs/dislike")
@limiter.limit(tiered_limit(30))
async def dislike_blog(
    request: Request,
    response: Response,
    blog_id: str,
    user: UserDBDep,
    service: InteractionServiceDep,
) -> MessageResponse:
    await service.dislike(parse_uuid(blog_id, INVALID_BLOG_ID), str(user.id))
    return MessageResponse(message="Blog disliked successfully")


@router.post(
    "/{blog_id}/view",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Record a blog view",
    description=(
        "Count a view at most once per viewer per 24 hours. Authentication is optional."
    ),
    responses={
        200: {"content": {"application/json": {"example": {"message": "Blog view recorded"}}}},
        **ERROR_RESPONSES,
    },
    operation_id="blogs_view",
)
@timed("/blogs/view")
@limiter.limit(tiered_limit(60))
async def view_blog(
    request: Request,
    response: Response,
    blog_id: str,
    user: OptionalUserDep,
    service: InteractionServiceDep,
) -> MessageResponse:
    """
    Record a view.

    The response is the same whether or not the view was counted.
    """
    await service.view(
        parse_uuid(blog_id, INVALID_BLOG_ID),
        str(user.id) if user else None,
        host(request),
        user_agent(request),
    )
    return MessageResponse(message="Blog view recorded")
