# blogapi/middleware/middleware.py
"""
Middleware components for the blog platform API.

This module contains middleware for request logging, request deadlines,
security headers and CORS, plus the lifespan handler that initializes
and releases the database and the AI client.
"""

from asyncio import wait_for
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.status import HTTP_504_GATEWAY_TIMEOUT
from starlette.types import ASGIApp

from blogapi.clients.ai_client import AiClient
from blogapi.configs import settings
from blogapi.db import close_db, init_db
from blogapi.monitoring import bind_request_id, clear_context, configure_logging, get_logger
from blogapi.utils.helpers import get_summary, host

configure_logging()
logger = get_logger("blogapi")

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Manage application startup and shutdown events with service initialization."""
    # Startup
    logger.info(f"Starting {app.title}...")

    try:
        if settings.LOG_TO_FILE:
            logger.info("Logging to file enabled.")

        await init_db()

        ai_client = AiClient()
        app.state.ai_client = ai_client
        if ai_client.configured:
            logger.info("AI client initialized successfully.")
        else:
            logger.warning("GEMINI_API_KEY not set, AI suggestions are disabled.")

        logger.info("Services initialized successfully")
        logger.info("  - API Documentation: http://localhost:8000/docs")
        logger.info("  - Health Check: http://localhost:8000/health")
        logger.info("  - Metrics: http://localhost:8000/metrics")

    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    # Shutdown
    logger.info(f"Shutting down {app.title}...")

    try:
        if ai_client := getattr(app.state, "ai_client", None):
            await ai_client.close()
        await close_db()
        logger.info("Services cleaned up successfully")

    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the application."""
    allowed_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    if frontend_url := settings.PRODUCTION_FRONTEND_URL:
        allowed_origins.append(frontend_url)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information under a request id."""

        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        bind_request_id(request_id)
        start_time = perf_counter()
        summary = get_summary(request)

        route_info = summary or f"{request.method} {request.url.path}"
        logger.info(f"Request: {route_info}", ip=host(request))

        try:
            response = await call_next(request)
            duration = perf_counter() - start_time
            logger.info(
                f"Response: {response.status_code} for {request.method} {request.url.path}",
                duration=f"{duration:.3f}s",
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()


class TimeoutMiddleware(BaseHTTPMiddleware):
    """Abort requests that run past the configured deadline with a 504."""

    def __init__(self, app: ASGIApp, timeout: float | None = None) -> None:
        super().__init__(app)
        self.timeout = settings.REQUEST_TIMEOUT_SECONDS if timeout is None else timeout

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        try:
            return await wait_for(call_next(request), timeout=self.timeout)
        except TimeoutError:
            logger.warning(
                f"Request timed out after {self.timeout}s",
                method=request.method,
                path=request.url.path,
            )
            return ORJSONResponse(
                content={"error": "Request timed out"},
                status_code=HTTP_504_GATEWAY_TIMEOUT,
            )


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Add security headers to all responses."""

        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response
