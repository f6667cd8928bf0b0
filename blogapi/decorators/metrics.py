from collections.abc import Awaitable, Callable
from functools import wraps
from typing import ParamSpec, TypeVar

from blogapi.managers.metrics import MetricsManager, RequestTimer

P = ParamSpec("P")
R = TypeVar("R")


def timed(
    endpoint: str | None = None,
    metrics: MetricsManager | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Time an async route handler and record it in the metrics manager.

    Args:
        endpoint: Label recorded for the route (defaults to function name).
        metrics: Optional metrics manager (defaults to global instance).

    Returns:
        Decorated function with timing instrumentation.

    Example:
        @timed("/blogs/popular")
        async def popular_blogs(...) -> PopularBlogsResponse:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        label = endpoint or func.__name__

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            async with RequestTimer(label, metrics):
                return await func(*args, **kwargs)

        return wrapper

    return decorator
