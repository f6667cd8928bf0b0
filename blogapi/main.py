# blogapi/main.py

"""Blog Platform Backend - blogs, interactions, comments and accounts on FastAPI."""

from logging import getLogger

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse, Response
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import JSONResponse
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from blogapi.configs import file_logger, settings
from blogapi.errors import (
    AiError,
    CircuitBreakerError,
    DatabaseError,
    EmailServiceError,
    PasswordHashingError,
    PermissionDeniedError,
    UploadError,
    UserAuthenticationError,
    ValidationError,
    ai_exception_handler,
    auth_exception_handler,
    circuit_breaker_exception_handler,
    create_http_exception_handler,
    database_exception_handler,
    email_client_exception_handler,
    password_hashing_exception_handler,
    request_validation_exception_handler,
    upload_exception_handler,
    validation_exception_handler,
)
from blogapi.managers import (
    ai_circuit_breaker,
    email_circuit_breaker,
    get_system_metrics,
    limiter,
    metrics_manager,
    rate_limit_exceeded_handler,
)
from blogapi.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
    configure_cors,
    lifespan,
)
from blogapi.routes import (
    ai_router,
    auth_router,
    blog_router,
    comment_router,
    interaction_router,
    user_router,
)
from blogapi.schemas import CircuitBreakerStatus, HealthCheckResponse, ServicesStatus
from blogapi.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog Platform Backend API",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(TimeoutMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
# Authlib keeps the OAuth state in the session cookie
app.add_middleware(SessionMiddleware, secret_key=settings.SESSION_SECRET_KEY)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")


routes = [
    auth_router,
    user_router,
    interaction_router,
    blog_router,
    comment_router,
    ai_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (ValidationError, validation_exception_handler),
    (UserAuthenticationError, auth_exception_handler),
    (PermissionDeniedError, auth_exception_handler),
    (UploadError, upload_exception_handler),
    (EmailServiceError, email_client_exception_handler),
    (CircuitBreakerError, circuit_breaker_exception_handler),
    (PasswordHashingError, password_hashing_exception_handler),
    (DatabaseError, database_exception_handler),
    (AiError, ai_exception_handler),
    (RequestValidationError, request_validation_exception_handler),
    (StarletteHTTPException, create_http_exception_handler(file_logger(getLogger(__name__)))),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter
limiter: Limiter = app.state.limiter


def _ai_client_status(request: Request) -> str:
    ai_client = getattr(request.app.state, "ai_client", None)
    if ai_client is None:
        return "not_initialized"
    return "configured" if ai_client.configured else "disabled"


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01 00:00:00",
                        "services": {
                            "ai_client": "configured",
                            "mail": "disabled",
                            "ai_circuit_breaker": {
                                "name": "gemini_ai",
                                "state": "closed",
                                "failure_count": 0,
                                "failure_threshold": 5,
                                "time_until_reset": 0.0,
                            },
                            "email_circuit_breaker": {
                                "name": "email_service",
                                "state": "closed",
                                "failure_count": 0,
                                "failure_threshold": 3,
                                "time_until_reset": 0.0,
                            },
                        },
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> ORJSONResponse:
    """
    Health check endpoint with service status.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Version, date and the state of the AI client, mail delivery and
        both circuit breakers.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"version": "1.0.0", "status": "ok", "timestamp": "2025-01-01 00:00:00", "services": { ... }}
    """
    services = ServicesStatus(
        ai_client=_ai_client_status(request),
        mail="enabled" if settings.MAIL_ENABLED else "disabled",
        ai_circuit_breaker=CircuitBreakerStatus(**ai_circuit_breaker.get_state()),
        email_circuit_breaker=CircuitBreakerStatus(**email_circuit_breaker.get_state()),
    )

    response_data = HealthCheckResponse(
        version=app.version,
        status="ok",
        timestamp=today_str(),
        services=services,
    )

    return ORJSONResponse(response_data.model_dump())


@app.get(
    "/metrics",
    tags=["📈 Metrics"],
    response_class=ORJSONResponse,
    summary="Get metrics",
    description="Get API performance metrics.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "timestamp": "2025-01-01 00:00:00",
                        "api_metrics": {"requests": 100, "latency_ms_avg": 12.3},
                        "system_metrics": {"cpu": 0.42, "mem": 0.58},
                    },
                },
            },
        },
        429: {
            "description": "Rate limit exceeded",
            "content": {"application/json": {"example": {"error": "Rate limit exceeded"}}},
        },
    },
    operation_id="get_metrics",
)
@limiter.limit("5/minute")
async def get_metrics(request: Request, response: Response) -> ORJSONResponse:
    """
    Get API performance metrics.

    Notes
    -----
    Rate limited to 5 requests per minute.
    """
    api_metrics = metrics_manager.get_metrics()
    system_metrics = await get_system_metrics()

    return ORJSONResponse(
        content={
            "timestamp": today_str(),
            "api_metrics": api_metrics,
            "system_metrics": system_metrics,
        },
    )


@app.get(
    "/",
    tags=["🏠 Root"],
    summary="Root access",
    response_model=dict[str, str],
    response_class=JSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"message": "Welcome to Blog Platform Backend"},
                },
            },
        },
    },
    operation_id="root_access",
)
@limiter.limit("5/minute")
async def root(request: Request, response: Response) -> JSONResponse:
    response.headers["X-Frame-Options"] = "DENY"
    return JSONResponse(content={"message": f"Welcome to {settings.APP_NAME}"})
