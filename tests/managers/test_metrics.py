# tests/managers/test_metrics.py
"""Tests for blogapi/managers/metrics.py module."""

from unittest.mock import patch

import pytest

from blogapi.managers.metrics import (
    _MAX_RESPONSE_TIMES,
    MetricsManager,
    RequestTimer,
    ResponseTimeStats,
    SystemMetrics,
    get_system_metrics,
)


class TestResponseTimeStats:
    """Tests for ResponseTimeStats dataclass."""

    def test_init_creates_empty_deque(self) -> None:
        stats = ResponseTimeStats()
        assert len(stats.times) == 0
        assert stats.times.maxlen == _MAX_RESPONSE_TIMES
        assert stats.average == 0.0

    def test_average(self) -> None:
        stats = ResponseTimeStats()
        stats.add(1.0)
        stats.add(2.0)
        assert stats.average == 1.5
        assert stats.count == 2

    def test_eviction_keeps_running_sum(self) -> None:
        """Test that evicted values leave the running average."""
        stats = ResponseTimeStats()
        for _ in range(_MAX_RESPONSE_TIMES):
            stats.add(1.0)
        stats.add(1.0 + _MAX_RESPONSE_TIMES)

        assert stats.count == _MAX_RESPONSE_TIMES
        assert stats.average == pytest.approx(2.0)


class TestMetricsManager:
    """Tests for MetricsManager class."""

    def test_snapshot(self) -> None:
        manager = MetricsManager()
        manager.record_request("/blogs")
        manager.record_request("/blogs")
        manager.record_error("/blogs")
        manager.record_response_time("/blogs", 0.5)
        manager.record_interaction("like_added")
        manager.record_ai_request("suggestion")
        manager.record_circuit_breaker_open()
        manager.record_rate_limit_hit()

        assert manager.get_metrics() == {
            "request_counts": {"/blogs": 2},
            "error_counts": {"/blogs": 1},
            "avg_response_times": {"/blogs": 0.5},
            "interaction_counts": {"like_added": 1},
            "ai_request_counts": {"suggestion": 1},
            "circuit_breaker_opens": 1,
            "rate_limit_hits": 1,
        }

    def test_reset_metrics(self) -> None:
        manager = MetricsManager()
        manager.record_request("/x")
        manager.record_interaction("view_recorded")

        manager.reset_metrics()

        metrics = manager.get_metrics()
        assert metrics["request_counts"] == {}
        assert metrics["interaction_counts"] == {}


class TestRequestTimer:
    """Tests for RequestTimer context manager."""

    def test_records_request_and_time(self) -> None:
        manager = MetricsManager()

        with RequestTimer("/timed", manager):
            pass

        metrics = manager.get_metrics()
        assert metrics["request_counts"] == {"/timed": 1}
        assert "/timed" in metrics["avg_response_times"]
        assert metrics["error_counts"] == {}

    async def test_records_error_on_exception(self) -> None:
        manager = MetricsManager()

        with pytest.raises(RuntimeError):
            async with RequestTimer("/failing", manager):
                raise RuntimeError

        assert manager.get_metrics()["error_counts"] == {"/failing": 1}


class TestSystemMetrics:
    """Tests for host metrics collection."""

    def test_to_dict(self) -> None:
        snapshot = SystemMetrics(
            cpu_percent=10.0,
            memory_percent=50.0,
            memory_used_mb=256.0,
            disk_percent=70.0,
        )
        assert snapshot.to_dict() == {
            "cpu_percent": 10.0,
            "memory": {"percent": 50.0, "used_mb": 256.0},
            "disk_percent": 70.0,
        }

    async def test_os_error_is_reported(self) -> None:
        with patch(
            "blogapi.managers.metrics.virtual_memory",
            side_effect=OSError("no proc"),
        ):
            result = await get_system_metrics()

        assert result == {"error": "Failed to collect system metrics: no proc"}
