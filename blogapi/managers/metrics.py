"""
In-process metrics for API performance and engagement tracking.

Request counts, error counts and response times are kept per endpoint;
interaction counters record how many likes, dislikes and views the
interaction engine has applied since start-up.
"""

from asyncio import to_thread
from collections import defaultdict, deque
from dataclasses import dataclass, field
from logging import getLogger
from threading import Lock
from time import perf_counter
from types import TracebackType
from typing import Any, Self

from psutil import cpu_percent as get_cpu_percent
from psutil import disk_usage, virtual_memory

from blogapi.configs import file_logger

logger = file_logger(getLogger(__name__))

_BYTES_PER_MB: int = 1024 * 1024
_MAX_RESPONSE_TIMES: int = 1000
_CPU_SAMPLE_INTERVAL: float = 0.1


@dataclass(slots=True)
class ResponseTimeStats:
    """Rolling window of response times with an O(1) running average."""

    times: deque[float] = field(default_factory=lambda: deque(maxlen=_MAX_RESPONSE_TIMES))
    _sum: float = field(default=0.0, repr=False)

    def add(self, duration: float) -> None:
        if len(self.times) == self.times.maxlen:
            # Oldest value is about to be evicted
            self._sum -= self.times[0]
        self.times.append(duration)
        self._sum += duration

    @property
    def average(self) -> float:
        return self._sum / len(self.times) if self.times else 0.0

    @property
    def count(self) -> int:
        return len(self.times)


class MetricsManager:
    """Thread-safe metrics collector."""

    __slots__ = (
        "_ai_request_counts",
        "_circuit_breaker_opens",
        "_error_counts",
        "_interaction_counts",
        "_lock",
        "_rate_limit_hits",
        "_request_counts",
        "_response_times",
    )

    def __init__(self) -> None:
        self._lock = Lock()
        self._request_counts: dict[str, int] = defaultdict(int)
        self._error_counts: dict[str, int] = defaultdict(int)
        self._response_times: dict[str, ResponseTimeStats] = defaultdict(ResponseTimeStats)
        self._interaction_counts: dict[str, int] = defaultdict(int)
        self._ai_request_counts: dict[str, int] = defaultdict(int)
        self._circuit_breaker_opens: int = 0
        self._rate_limit_hits: int = 0

    def record_request(self, endpoint: str) -> None:
        with self._lock:
            self._request_counts[endpoint] += 1

    def record_error(self, endpoint: str) -> None:
        with self._lock:
            self._error_counts[endpoint] += 1

    def record_response_time(self, endpoint: str, duration: float) -> None:
        """
        Record response time for an endpoint.

        Args:
            endpoint: API endpoint path.
            duration: Response time in seconds.
        """
        with self._lock:
            self._response_times[endpoint].add(duration)

    def record_interaction(self, outcome: str) -> None:
        """
        Record an applied interaction.

        Args:
            outcome: e.g. ``like_added``, ``dislike_removed``, ``view_recorded``.
        """
        with self._lock:
            self._interaction_counts[outcome] += 1

    def record_ai_request(self, request_type: str) -> None:
        with self._lock:
            self._ai_request_counts[request_type] += 1

    def record_circuit_breaker_open(self) -> None:
        with self._lock:
            self._circuit_breaker_opens += 1

    def record_rate_limit_hit(self) -> None:
        with self._lock:
            self._rate_limit_hits += 1

    def get_metrics(self) -> dict[str, Any]:
        """
        Get a consistent snapshot of all metrics.

        Returns:
            Dictionary containing all metrics with computed statistics.
        """
        with self._lock:
            avg_response_times = {
                endpoint: stats.average
                for endpoint, stats in self._response_times.items()
                if stats.count > 0
            }
            return {
                "request_counts": dict(self._request_counts),
                "error_counts": dict(self._error_counts),
                "avg_response_times": avg_response_times,
                "interaction_counts": dict(self._interaction_counts),
                "ai_request_counts": dict(self._ai_request_counts),
                "circuit_breaker_opens": self._circuit_breaker_opens,
                "rate_limit_hits": self._rate_limit_hits,
            }

    def reset_metrics(self) -> None:
        with self._lock:
            self._request_counts.clear()
            self._error_counts.clear()
            self._response_times.clear()
            self._interaction_counts.clear()
            self._ai_request_counts.clear()
            self._circuit_breaker_opens = 0
            self._rate_limit_hits = 0
        logger.info("Metrics reset")


metrics_manager = MetricsManager()


class RequestTimer:
    """
    Context manager timing a request and recording it on exit.

    Errors raised inside the block are counted against the endpoint.
    """

    __slots__ = ("_endpoint", "_metrics", "_start_time")

    def __init__(self, endpoint: str, metrics: MetricsManager | None = None) -> None:
        self._endpoint = endpoint
        self._start_time: float = 0.0
        self._metrics = metrics or metrics_manager

    def __enter__(self) -> Self:
        self._start_time = perf_counter()
        self._metrics.record_request(self._endpoint)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        _exc_val: BaseException | None,
        _exc_tb: TracebackType | None,
    ) -> None:
        duration = perf_counter() - self._start_time
        self._metrics.record_response_time(self._endpoint, duration)
        if exc_type is not None:
            self._metrics.record_error(self._endpoint)

    async def __aenter__(self) -> Self:
        return self.__enter__()

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.__exit__(exc_type, exc_val, exc_tb)


@dataclass(slots=True, frozen=True)
class SystemMetrics:
    """Host resource snapshot."""

    cpu_percent: float
    memory_percent: float
    memory_used_mb: float
    disk_percent: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "cpu_percent": self.cpu_percent,
            "memory": {"percent": self.memory_percent, "used_mb": self.memory_used_mb},
            "disk_percent": self.disk_percent,
        }


async def get_system_metrics() -> dict[str, Any]:
    """
    Collect host metrics without blocking the event loop.

    Returns:
        Dictionary containing system metrics or error information.
    """

    def _collect() -> SystemMetrics:
        memory = virtual_memory()
        return SystemMetrics(
            cpu_percent=get_cpu_percent(interval=_CPU_SAMPLE_INTERVAL),
            memory_percent=memory.percent,
            memory_used_mb=round(memory.used / _BYTES_PER_MB, 2),
            disk_percent=disk_usage("/").percent,
        )

    try:
        return (await to_thread(_collect)).to_dict()
    except OSError as e:
        logger.exception("Failed to get system metrics: OS error")
        return {"error": f"Failed to collect system metrics: {e}"}
