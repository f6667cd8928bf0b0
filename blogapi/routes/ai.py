from logging import getLogger

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.responses import Response

from blogapi.configs import file_logger
from blogapi.decorators import timed
from blogapi.dependencies import AiDep, UserDBDep
from blogapi.managers import limiter
from blogapi.schemas import SuggestionRequest, SuggestionResponse
from blogapi.services.blog_writer import generate_blog
from blogapi.utils import host

logger = file_logger(getLogger(__name__))

router = APIRouter(prefix="/ai", tags=["🤖 AI"])


@router.post(
    "/suggestion",
    response_class=ORJSONResponse,
    response_model=SuggestionResponse,
    summary="Generate a blog suggestion",
    description="Draft a blog post (title and paragraphs) from a short prompt.",
    responses={
        400: {
            "description": "Bad request",
            "content": {"application/json": {"example": {"error": "prompt cannot be empty"}}},
        },
        401: {
            "description": "Unauthorized",
            "content": {"application/json": {"example": {"error": "User not authenticated"}}},
        },
        500: {
            "description": "Generation failed",
            "content": {"application/json": {"example": {"error": "AI generation failed"}}},
        },
    },
    operation_id="ai_suggestion",
)
@timed("/ai/suggestion")
@limiter.limit("10/minute")
async def blog_suggestion(
    request: Request,
    response: Response,
    body: SuggestionRequest,
    user: UserDBDep,
    ai_client: AiDep,
) -> SuggestionResponse:
    """Generate a blog draft."""
    logger.info(f"Generating blog suggestion for user {user.id} from ip {host(request)}")
    blog = await generate_blog(body.prompt, ai_client)
    return SuggestionResponse(blog=blog)
