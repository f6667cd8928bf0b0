from blogapi.middleware.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    TimeoutMiddleware,
    configure_cors,
    lifespan,
)

__all__ = [
    "LoggingMiddleware",
    "SecurityHeadersMiddleware",
    "TimeoutMiddleware",
    "configure_cors",
    "lifespan",
]
