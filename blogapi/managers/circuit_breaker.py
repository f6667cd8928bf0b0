"""
Circuit breaker guarding calls to external services (Gemini, Gmail).

After ``failure_threshold`` consecutive failures the circuit opens and calls
fail fast with ``CircuitBreakerError`` until ``recovery_timeout`` elapses.
The next call is then let through in HALF_OPEN; a success closes the
circuit again and a failure re-opens it.
"""

from asyncio import Lock
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from logging import getLogger
from time import monotonic
from typing import Any, TypeVar

from blogapi.configs import file_logger
from blogapi.errors import CircuitBreakerError, EmailServiceError
from blogapi.managers.metrics import MetricsManager, metrics_manager

logger = file_logger(getLogger(__name__))

T = TypeVar("T")


class CircuitState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


@dataclass
class CircuitBreakerConfig:
    """Configuration for CircuitBreaker."""

    name: str = "default"
    failure_threshold: int = 5
    recovery_timeout: float = 60.0
    expected_exceptions: type[Exception] | tuple[type[Exception], ...] = Exception
    success_threshold: int = 1
    metrics_manager: MetricsManager | None = None


class CircuitBreaker:
    """Async circuit breaker; state changes are serialised by an asyncio.Lock."""

    __slots__ = (
        "_clock",
        "_failure_count",
        "_half_open_successes",
        "_last_failure_time",
        "_lock",
        "_metrics_manager",
        "_state",
        "expected_exceptions",
        "failure_threshold",
        "name",
        "recovery_timeout",
        "success_threshold",
    )

    def __init__(
        self,
        config: CircuitBreakerConfig,
        clock: Callable[[], float] = monotonic,
    ) -> None:
        self.name = config.name
        self.failure_threshold = config.failure_threshold
        self.recovery_timeout = config.recovery_timeout
        self.expected_exceptions = config.expected_exceptions
        self.success_threshold = config.success_threshold
        self._metrics_manager = config.metrics_manager
        self._clock = clock

        self._failure_count: int = 0
        self._half_open_successes: int = 0
        self._last_failure_time: float | None = None
        self._state: CircuitState = CircuitState.CLOSED
        self._lock: Lock = Lock()

    @property
    def state(self) -> CircuitState:
        return self._state

    @property
    def failure_count(self) -> int:
        return self._failure_count

    async def call(
        self,
        func: Callable[..., Awaitable[T]],
        *args: Any,  # noqa: ANN401
        **kwargs: Any,  # noqa: ANN401
    ) -> T:
        """
        Execute an async function with circuit breaker protection.

        Args:
            func: Async function to execute.
            *args: Positional arguments for the function.
            **kwargs: Keyword arguments for the function.

        Returns:
            Result from the function call.

        Raises:
            CircuitBreakerError: If the circuit is OPEN.
            Exception: Original exception if the function fails.
        """
        async with self._lock:
            self._check_state()

        try:
            result = await func(*args, **kwargs)
        except self.expected_exceptions:
            await self._on_failure()
            raise
        await self._on_success()
        return result

    def _check_state(self) -> None:
        if self._state != CircuitState.OPEN:
            return
        retry_after = self._time_until_reset()
        if retry_after <= 0:
            self._state = CircuitState.HALF_OPEN
            self._half_open_successes = 0
            logger.info(f"Circuit breaker '{self.name}' entering HALF_OPEN state")
            return
        logger.warning(f"Circuit breaker '{self.name}' is OPEN. Retry in {retry_after:.1f}s")
        raise CircuitBreakerError(
            detail=f"Service '{self.name}' temporarily unavailable",
            retry_after=retry_after,
            circuit_name=self.name,
        )

    def _time_until_reset(self) -> float:
        if self._last_failure_time is None:
            return 0.0
        elapsed = self._clock() - self._last_failure_time
        return max(0.0, self.recovery_timeout - elapsed)

    async def _on_success(self) -> None:
        async with self._lock:
            if self._state == CircuitState.HALF_OPEN:
                self._half_open_successes += 1
                if self._half_open_successes >= self.success_threshold:
                    self._state = CircuitState.CLOSED
                    self._failure_count = 0
                    logger.info(f"Circuit breaker '{self.name}' recovered, now CLOSED")
            else:
                self._failure_count = 0

    async def _on_failure(self) -> None:
        async with self._lock:
            self._failure_count += 1
            self._last_failure_time = self._clock()

            if self._state == CircuitState.HALF_OPEN:
                self._open(f"Circuit breaker '{self.name}' reopened after failure in HALF_OPEN")
            elif self._state == CircuitState.CLOSED and self._failure_count >= self.failure_threshold:
                self._open(
                    f"Circuit breaker '{self.name}' OPENED after "
                    f"{self._failure_count} consecutive failures",
                )

    def _open(self, message: str) -> None:
        self._state = CircuitState.OPEN
        self._half_open_successes = 0
        logger.error(message)
        if self._metrics_manager is not None:
            self._metrics_manager.record_circuit_breaker_open()

    async def reset(self) -> None:
        """Force the circuit back to CLOSED."""
        async with self._lock:
            self._failure_count = 0
            self._half_open_successes = 0
            self._last_failure_time = None
            self._state = CircuitState.CLOSED
        logger.info(f"Circuit breaker '{self.name}' manually reset")

    def get_state(self) -> dict[str, Any]:
        """Return a JSON-friendly snapshot for the health endpoint."""
        return {
            "name": self.name,
            "state": self._state.value,
            "failure_count": self._failure_count,
            "failure_threshold": self.failure_threshold,
            "time_until_reset": (
                self._time_until_reset() if self._state == CircuitState.OPEN else 0.0
            ),
        }


ai_circuit_breaker = CircuitBreaker(
    config=CircuitBreakerConfig(
        name="gemini_ai",
        failure_threshold=5,
        recovery_timeout=60.0,
        expected_exceptions=Exception,
        metrics_manager=metrics_manager,
    ),
)

email_circuit_breaker = CircuitBreaker(
    config=CircuitBreakerConfig(
        name="email_service",
        failure_threshold=3,
        recovery_timeout=30.0,
        expected_exceptions=EmailServiceError,
        metrics_manager=metrics_manager,
    ),
)
