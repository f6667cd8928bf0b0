# blogapi/routes/comment.py

"""
Comment Routes.

Comments are listed and read publicly; creating requires authentication and
editing or deleting is reserved to the comment's author.
"""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from blogapi.configs.settings import API_PREFIX
from blogapi.decorators import timed
from blogapi.dependencies import CommentServiceDep, UserDBDep
from blogapi.managers import limiter, tiered_limit
from blogapi.schemas import CommentCreate, CommentResponse, CommentUpdate
from blogapi.utils.identifiers import parse_uuid

router = APIRouter(prefix=API_PREFIX, tags=["💬 Comments"])

INVALID_BLOG_ID = "Invalid blog ID"
INVALID_COMMENT_ID = "Invalid comment ID"

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"error": "Rate limit exceeded"}}},
}
COMMENT_NOT_FOUND_RESPONSE = {
    "description": "Not found",
    "content": {"application/json": {"example": {"error": "Comment not found"}}},
}


@router.get(
    "/blogs/{blog_id}/comments",
    response_class=ORJSONResponse,
    response_model=list[CommentResponse],
    summary="List comments of a blog",
    description="List a blog's comments, oldest first.",
    responses={
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"error": "Blog not found"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="comments_list_by_blog",
)
@timed("/blogs/comments/list")
@limiter.limit(tiered_limit(60))
async def list_comments(
    request: Request,
    response: Response,
    blog_id: str,
    service: CommentServiceDep,
) -> list[CommentResponse]:
    comments = await service.list_comments(parse_uuid(blog_id, INVALID_BLOG_ID))
    return [CommentResponse.model_validate(comment) for comment in comments]


@router.post(
    "/blogs/{blog_id}/comments",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    status_code=HTTP_201_CREATED,
    summary="Comment on a blog",
    responses={
        401: {
            "description": "Unauthorized",
            "content": {"application/json": {"example": {"error": "User not authenticated"}}},
        },
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"error": "Blog not found"}}},
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="comments_create",
)
@timed("/blogs/comments/create")
@limiter.limit(tiered_limit(10))
async def create_comment(
    request: Request,
    response: Response,
    blog_id: str,
    comment: CommentCreate,
    user: UserDBDep,
    service: CommentServiceDep,
) -> CommentResponse:
    """
    Add a comment to a blog.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : str
        Blog identifier.
    comment : CommentCreate
        Comment body.
    user : UserDB
        Authenticated author.
    service : CommentService
        Comment service dependency.

    Returns
    -------
    CommentResponse
        The stored comment.
    """
    created = await service.add_comment(
        parse_uuid(blog_id, INVALID_BLOG_ID),
        user.id,
        comment.content,
    )
    return CommentResponse.model_validate(created)


@router.get(
    "/comments/{comment_id}",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    summary="Get comment by ID",
    responses={404: COMMENT_NOT_FOUND_RESPONSE, 429: RATE_LIMIT_RESPONSE},
    operation_id="comments_get_by_id",
)
@timed("/comments/by-id")
@limiter.limit(tiered_limit(60))
async def get_comment(
    request: Request,
    response: Response,
    comment_id: str,
    service: CommentServiceDep,
) -> CommentResponse:
    comment = await service.get_comment(parse_uuid(comment_id, INVALID_COMMENT_ID))
    return CommentResponse.model_validate(comment)


@router.put(
    "/comments/{comment_id}",
    response_class=ORJSONResponse,
    response_model=CommentResponse,
    summary="Edit a comment",
    description="Replace the text of a comment. Author only.",
    responses={
        403: {
            "description": "Forbidden",
            "content": {
                "application/json": {
                    "example": {"error": "You can only modify your own comments"},
                },
            },
        },
        404: COMMENT_NOT_FOUND_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="comments_update",
)
@timed("/comments/update")
@limiter.limit(tiered_limit(10))
async def update_comment(
    request: Request,
    response: Response,
    comment_id: str,
    comment: CommentUpdate,
    user: UserDBDep,
    service: CommentServiceDep,
) -> CommentResponse:
    updated = await service.update_comment(
        parse_uuid(comment_id, INVALID_COMMENT_ID),
        user.id,
        comment.content,
    )
    return CommentResponse.model_validate(updated)


@router.delete(
    "/comments/{comment_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete a comment",
    description="Delete a comment. Author only.",
    responses={
        403: {
            "description": "Forbidden",
            "content": {
                "application/json": {
                    "example": {"error": "You can only delete your own comments"},
                },
            },
        },
        404: COMMENT_NOT_FOUND_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="comments_delete",
)
@timed("/comments/delete")
@limiter.limit(tiered_limit(10))
async def delete_comment(
    request: Request,
    response: Response,
    comment_id: str,
    user: UserDBDep,
    service: CommentServiceDep,
) -> Response:
    await service.delete_comment(parse_uuid(comment_id, INVALID_COMMENT_ID), user.id)
    return Response(status_code=HTTP_204_NO_CONTENT)
