from collections.abc import Awaitable, Callable
from logging import Logger

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from blogapi.utils.helpers import host


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def create_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Every response body carries the message under ``error``; any extra
    attributes set on the exception are merged in next to it.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = HTTP_500_INTERNAL_SERVER_ERROR
        detail = "Internal Server Error"

        if hasattr(exc, "status_code"):
            status_code = exc.status_code
        if hasattr(exc, "detail"):
            detail = exc.detail

        logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        content = {"error": detail}
        content.update(
            {k: v for k, v in exc.__dict__.items() if k not in ("status_code", "detail")},
        )

        return ORJSONResponse(content=content, status_code=status_code)

    return handler


def create_http_exception_handler(
    logger: Logger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a handler that renders Starlette/FastAPI HTTP exceptions as ``{"error": ...}``.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler preserving the exception's headers.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        http_exc = (
            exc
            if isinstance(exc, StarletteHTTPException)
            else StarletteHTTPException(HTTP_500_INTERNAL_SERVER_ERROR)
        )
        logger.warning(
            f"{http_exc.detail} for ip: {host(request)} for endpoint {request.url.path}",
        )
        return ORJSONResponse(
            content={"error": http_exc.detail},
            status_code=http_exc.status_code,
            headers=http_exc.headers,
        )

    return handler
