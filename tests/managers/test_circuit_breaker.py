# tests/managers/test_circuit_breaker.py
"""Tests for blogapi/managers/circuit_breaker.py module."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from blogapi.errors import CircuitBreakerError
from blogapi.managers.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitState,
    ai_circuit_breaker,
    email_circuit_breaker,
)


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def breaker(clock: FakeClock) -> CircuitBreaker:
    return CircuitBreaker(
        config=CircuitBreakerConfig(
            name="test",
            failure_threshold=2,
            recovery_timeout=10.0,
            expected_exceptions=ValueError,
            metrics_manager=MagicMock(),
        ),
        clock=clock,
    )


async def _fail(breaker: CircuitBreaker) -> None:
    with pytest.raises(ValueError, match="boom"):
        await breaker.call(AsyncMock(side_effect=ValueError("boom")))


class TestCircuitBreakerInit:
    """Tests for CircuitBreaker initialization."""

    def test_default_values(self) -> None:
        """Test default initialization values."""
        cb = CircuitBreaker(config=CircuitBreakerConfig())
        assert cb.name == "default"
        assert cb.failure_threshold == 5
        assert cb.recovery_timeout == 60.0
        assert cb.success_threshold == 1
        assert cb.state == CircuitState.CLOSED
        assert cb.failure_count == 0

    def test_global_breakers(self) -> None:
        assert ai_circuit_breaker.name == "gemini_ai"
        assert email_circuit_breaker.name == "email_service"
        assert email_circuit_breaker.failure_threshold == 3


class TestCircuitBreakerCall:
    """Tests for state transitions driven by call()."""

    async def test_success_passes_result_through(self, breaker: CircuitBreaker) -> None:
        func = AsyncMock(return_value="ok")

        assert await breaker.call(func, 1, key="v") == "ok"
        func.assert_awaited_once_with(1, key="v")

    async def test_opens_after_threshold(self, breaker: CircuitBreaker) -> None:
        await _fail(breaker)
        assert breaker.state == CircuitState.CLOSED

        await _fail(breaker)

        assert breaker.state == CircuitState.OPEN
        assert breaker.failure_count == 2

    async def test_open_circuit_fails_fast(self, breaker: CircuitBreaker, clock) -> None:
        await _fail(breaker)
        await _fail(breaker)
        func = AsyncMock()
        clock.now += 4

        with pytest.raises(CircuitBreakerError) as exc_info:
            await breaker.call(func)

        func.assert_not_awaited()
        assert exc_info.value.status_code == 503
        assert exc_info.value.circuit_name == "test"
        assert exc_info.value.retry_after == pytest.approx(6.0)

    async def test_success_resets_failure_count(self, breaker: CircuitBreaker) -> None:
        await _fail(breaker)
        await breaker.call(AsyncMock(return_value=None))

        await _fail(breaker)

        assert breaker.state == CircuitState.CLOSED
        assert breaker.failure_count == 1

    async def test_unexpected_exceptions_do_not_count(self, breaker: CircuitBreaker) -> None:
        with pytest.raises(KeyError):
            await breaker.call(AsyncMock(side_effect=KeyError("x")))

        assert breaker.failure_count == 0

    async def test_half_open_success_closes(self, breaker: CircuitBreaker, clock) -> None:
        await _fail(breaker)
        await _fail(breaker)
        clock.now += 10

        assert await breaker.call(AsyncMock(return_value="back")) == "back"

        assert breaker.state == CircuitState.CLOSED
        assert breaker.failure_count == 0

    async def test_half_open_failure_reopens(self, breaker: CircuitBreaker, clock) -> None:
        await _fail(breaker)
        await _fail(breaker)
        clock.now += 11

        await _fail(breaker)

        assert breaker.state == CircuitState.OPEN

    async def test_opening_is_recorded(self, breaker: CircuitBreaker) -> None:
        await _fail(breaker)
        await _fail(breaker)

        breaker._metrics_manager.record_circuit_breaker_open.assert_called_once()


class TestCircuitBreakerState:
    """Tests for reset() and get_state()."""

    async def test_reset(self, breaker: CircuitBreaker) -> None:
        await _fail(breaker)
        await _fail(breaker)

        await breaker.reset()

        assert breaker.state == CircuitState.CLOSED
        assert breaker.failure_count == 0

    async def test_get_state_when_open(self, breaker: CircuitBreaker, clock) -> None:
        await _fail(breaker)
        await _fail(breaker)
        clock.now += 3

        assert breaker.get_state() == {
            "name": "test",
            "state": "open",
            "failure_count": 2,
            "failure_threshold": 2,
            "time_until_reset": pytest.approx(7.0),
        }

    def test_get_state_when_closed(self, breaker: CircuitBreaker) -> None:
        assert breaker.get_state()["time_until_reset"] == 0.0
