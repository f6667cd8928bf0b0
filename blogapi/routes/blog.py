# blogapi/routes/blog.py

"""
Blog Routes.

Provides CRUD, popularity, filter and search endpoints for blogs.

Summary
-------
Endpoints include:
  - Popular blogs (ranked by the popularity engine)
  - Filter blogs by tags, dates and popularity counters
  - Search blogs by title and author
  - Create, get, list, update and delete blogs

Ordering
--------
The static paths (``/popular``, ``/filter``, ``/search``) are declared
before ``/{blog_id}`` so they are never captured as identifiers.

Rate Limiting
-------------
All endpoints define explicit limits. Tiered limits apply when `X-API-Key`
is present, offering higher throughput for identified clients.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from blogapi.configs.settings import API_PREFIX
from blogapi.decorators import timed
from blogapi.dependencies import (
    BlogQueryServiceDep,
    BlogServiceDep,
    FilterParamsDep,
    PopularityServiceDep,
    PopularLimitDep,
    SearchParamsDep,
    UserBlogsQueryDep,
    UserDBDep,
)
from blogapi.managers import limiter, tiered_limit
from blogapi.schemas import (
    BlogCreate,
    BlogListResponse,
    BlogResponse,
    BlogUpdate,
    FilterEnvelope,
    PopularBlogsResponse,
    SearchEnvelope,
)
from blogapi.utils.identifiers import parse_uuid

router = APIRouter(prefix=f"{API_PREFIX}/blogs", tags=["📝 Blogs"])

INVALID_BLOG_ID = "Invalid blog ID"

RATE_LIMIT_RESPONSE = {
    "description": "Rate limit exceeded",
    "content": {"application/json": {"example": {"error": "Rate limit exceeded"}}},
}
UNAUTHORIZED_RESPONSE = {
    "description": "Unauthorized",
    "content": {"application/json": {"example": {"error": "User not authenticated"}}},
}

NOT_FOUND_RESPONSE = {
    "description": "Not found",
    "content": {"application/json": {"example": {"error": "Blog not found"}}},
}


@router.get(
    "/popular",
    response_class=ORJSONResponse,
    response_model=PopularBlogsResponse,
    summary="Get popular blogs",
    description=(
        "Rank every blog by likes, comments, views, dislikes and recency, most popular first."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "message": "Popular blogs retrieved successfully",
                        "data": [
                            {
                                "id": "123e4567-e89b-12d3-a456-426614174000",
                                "title": "Getting started with async Python",
                                "like_count": 10,
                                "dislike_count": 1,
                                "view_count": 100,
                                "comment_count": 2,
                                "popularity_score": 98.0,
                            },
                        ],
                        "count": 1,
                    },
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_popular",
)
@timed("/blogs/popular")
@limiter.limit(tiered_limit(30))
async def popular_blogs(
    request: Request,
    response: Response,
    limit: PopularLimitDep,
    service: PopularityServiceDep,
) -> PopularBlogsResponse:
    """
    Get the most popular blogs.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    limit : int
        Maximum number of blogs; non-numeric or non-positive values mean 10.
    service : PopularityService
        Popularity engine dependency.

    Returns
    -------
    PopularBlogsResponse
        Ranked blogs with their scores.
    """
    blogs = await service.popular_blogs(limit)
    return PopularBlogsResponse(data=blogs, count=len(blogs))


@router.get(
    "/filter",
    response_class=ORJSONResponse,
    response_model=FilterEnvelope,
    summary="Filter blogs",
    description=(
        "Filter blogs by tags (any match) and creation date range, optionally "
        "sorted by views, likes, dislikes or engagement."
    ),
    responses={
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {
                    "example": {"error": "Invalid date_from format. Use YYYY-MM-DD"},
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_filter",
)
@timed("/blogs/filter")
@limiter.limit(tiered_limit(30))
async def filter_blogs(
    request: Request,
    response: Response,
    params: FilterParamsDep,
    service: BlogQueryServiceDep,
) -> FilterEnvelope:
    """
    Filter blogs.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    params : FilterParams
        Parsed query parameters (``tags``, ``date_from``, ``date_to``,
        ``popularity_sort``, ``sort_order``, ``limit``, ``skip``, ``page``).
    service : BlogQueryService
        Filter/search engine dependency.

    Returns
    -------
    FilterEnvelope
        ``{"message": ..., "data": {blogs, count, total_count, page, limit}}``.

    Raises
    ------
    ValidationError
        For malformed or contradictory parameters.
    """
    return FilterEnvelope(data=await service.filter_blogs(params))


@router.get(
    "/search",
    response_class=ORJSONResponse,
    response_model=SearchEnvelope,
    summary="Search blogs",
    description="Case-insensitive search on blog title and/or author username.",
    responses={
        400: {
            "description": "Bad request",
            "content": {
                "application/json": {
                    "example": {
                        "error": "at least one search parameter (title or author) must be provided",
                    },
                },
            },
        },
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_search",
)
@timed("/blogs/search")
@limiter.limit(tiered_limit(30))
async def search_blogs(
    request: Request,
    response: Response,
    params: SearchParamsDep,
    service: BlogQueryServiceDep,
) -> SearchEnvelope:
    """
    Search blogs by title and author.

    Returns
    -------
    SearchEnvelope
        Matches with author names plus the echoed query.
    """
    return SearchEnvelope(data=await service.search_blogs(params))


@router.post(
    "",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a new blog post",
    description="Create a blog owned by the authenticated user.",
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "id": "123e4567-e89b-12d3-a456-426614174000",
                        "user_id": "123e4567-e89b-12d3-a456-426614174111",
                        "title": "Getting started with async Python",
                        "content": "...",
                        "tags": ["python", "asyncio"],
                        "like_count": 0,
                        "dislike_count": 0,
                        "view_count": 0,
                        "created_at": "2025-01-01T00:00:00Z",
                        "updated_at": "2025-01-01T00:00:00Z",
                    },
                },
            },
        },
        401: UNAUTHORIZED_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_create",
)
@timed("/blogs/create")
@limiter.limit(tiered_limit(10))
async def create_blog(
    request: Request,
    response: Response,
    blog: Annotated[
        BlogCreate,
        Body(
            examples=[
                {
                    "title": "Getting started with async Python",
                    "content": "asyncio lets a single thread juggle many sockets...",
                    "tags": ["python", "asyncio"],
                },
            ],
        ),
    ],
    user: UserDBDep,
    service: BlogServiceDep,
) -> BlogResponse:
    """
    Create a new blog post.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog : BlogCreate
        Blog input payload.
    user : UserDB
        Authenticated author.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogResponse
        Created blog data.
    """
    created = await service.create_blog(blog, user.id)
    return BlogResponse.model_validate(created)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=BlogListResponse,
    summary="List a user's blogs",
    description=(
        "List blogs of `user_id` (defaults to the caller), newest first. "
        "At most 5 blogs per page."
    ),
    responses={401: UNAUTHORIZED_RESPONSE, 429: RATE_LIMIT_RESPONSE},
    operation_id="blogs_list_by_user",
)
@timed("/blogs/list")
@limiter.limit(tiered_limit(30))
async def list_user_blogs(
    request: Request,
    response: Response,
    user: UserDBDep,
    service: BlogServiceDep,
    query: UserBlogsQueryDep,
) -> BlogListResponse:
    """
    List one page of a user's blogs.

    Unparseable ``page`` and ``limit`` values fall back to their defaults.
    """
    target = parse_uuid(query.user_id, "Invalid user ID") if query.user_id else user.id
    blogs, used_page, used_limit = await service.list_user_blogs(
        target,
        page=query.page,
        limit=query.limit,
    )
    return BlogListResponse(
        data=[BlogResponse.model_validate(blog) for blog in blogs],
        page=used_page,
        limit=used_limit,
    )


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Get blog by ID",
    description="Retrieve a blog post by its UUID.",
    responses={
        400: {
            "description": "Bad request",
            "content": {"application/json": {"example": {"error": INVALID_BLOG_ID}}},
        },
        404: NOT_FOUND_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_get_by_id",
)
@timed("/blogs/by-id")
@limiter.limit(tiered_limit(60))
async def get_blog(
    request: Request,
    response: Response,
    blog_id: str,
    service: BlogServiceDep,
) -> BlogResponse:
    """
    Get blog by ID.

    Parameters
    ----------
    request : Request
        Current request context.
    response : Response
        Response object for middleware/decorators.
    blog_id : str
        Blog identifier.
    service : BlogService
        Blog service dependency.

    Returns
    -------
    BlogResponse
        Blog data.

    Raises
    ------
    InvalidIdentifierError
        If ``blog_id`` is not a UUID.
    RecordNotFoundError
        If the blog does not exist.
    """
    blog = await service.get_blog(parse_uuid(blog_id, INVALID_BLOG_ID))
    return BlogResponse.model_validate(blog)


@router.put(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=BlogResponse,
    summary="Update blog",
    description="Partially update title, content and/or tags. Owner only.",
    responses={
        401: UNAUTHORIZED_RESPONSE,
        403: {
            "description": "Forbidden",
            "content": {
                "application/json": {"example": {"error": "You can only modify your own blogs"}},
            },
        },
        404: NOT_FOUND_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_update",
)
@timed("/blogs/update")
@limiter.limit(tiered_limit(10))
async def update_blog(
    request: Request,
    response: Response,
    blog_id: str,
    blog_update: BlogUpdate,
    user: UserDBDep,
    service: BlogServiceDep,
) -> BlogResponse:
    blog = await service.update_blog(parse_uuid(blog_id, INVALID_BLOG_ID), blog_update, user.id)
    return BlogResponse.model_validate(blog)


@router.delete(
    "/{blog_id}",
    status_code=HTTP_204_NO_CONTENT,
    summary="Delete blog",
    description="Delete a blog with its comments and interactions. Owner only.",
    responses={
        401: UNAUTHORIZED_RESPONSE,
        403: {
            "description": "Forbidden",
            "content": {
                "application/json": {"example": {"error": "You can only modify your own blogs"}},
            },
        },
        404: NOT_FOUND_RESPONSE,
        429: RATE_LIMIT_RESPONSE,
    },
    operation_id="blogs_delete",
)
@timed("/blogs/delete")
@limiter.limit(tiered_limit(10))
async def delete_blog(
    request: Request,
    response: Response,
    blog_id: str,
    user: UserDBDep,
    service: BlogServiceDep,
) -> Response:
    await service.delete_blog(parse_uuid(blog_id, INVALID_BLOG_ID), user.id)
    return Response(status_code=HTTP_204_NO_CONTENT)
