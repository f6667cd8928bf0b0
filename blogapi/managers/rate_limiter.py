"""Rate limiter configuration using slowapi."""

from collections.abc import Callable
from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from blogapi.configs import LimiterConfig, file_logger
from blogapi.managers.metrics import metrics_manager

logger = file_logger(getLogger(__name__))


def get_identifier(request: Request) -> str:
    """
    Key requests by API key when present, otherwise by client IP.

    Args:
        request: FastAPI request object.

    Returns:
        Unique identifier string.
    """
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return f"apikey:{api_key}"
    return f"ip:{get_remote_address(request)}"


def tiered_limit(base: int) -> Callable[[str], str]:
    """
    Build a per-minute limit that is tripled for API key holders.

    Args:
        base: Requests per minute allowed for anonymous IP-keyed callers.

    Returns:
        A callable slowapi evaluates with the request key.
    """
    return lambda key: f"{base * 3}/minute" if key.startswith("apikey:") else f"{base}/minute"


limiter = Limiter(**LimiterConfig().model_dump(), key_func=get_identifier)


async def rate_limit_exceeded_handler(request: Request, exc: Exception) -> ORJSONResponse:
    """
    Handle rate limit exceeded exceptions.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.

    Returns:
        429 response with an ``error`` body.
    """
    http_exc = cast(RateLimitExceeded, exc)
    metrics_manager.record_rate_limit_hit()
    logger.warning(f"Rate limit exceeded for {get_identifier(request)} on {request.url.path}")
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={
            "error": "Rate limit exceeded",
            "allowed_requests": http_exc.detail,
        },
    )
