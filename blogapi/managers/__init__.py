from blogapi.managers.circuit_breaker import (
    CircuitBreaker,
    CircuitBreakerConfig,
    CircuitState,
    ai_circuit_breaker,
    email_circuit_breaker,
)
from blogapi.managers.metrics import RequestTimer, get_system_metrics, metrics_manager
from blogapi.managers.password_manager import hash_password, verify_password
from blogapi.managers.rate_limiter import limiter, rate_limit_exceeded_handler, tiered_limit
from blogapi.managers.token_manager import (
    create_access_token,
    create_refresh_token,
    decode_access_token,
    decode_refresh_token,
)

__all__ = [
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitState",
    "RequestTimer",
    "ai_circuit_breaker",
    "create_access_token",
    "create_refresh_token",
    "decode_access_token",
    "decode_refresh_token",
    "email_circuit_breaker",
    "get_system_metrics",
    "hash_password",
    "limiter",
    "metrics_manager",
    "rate_limit_exceeded_handler",
    "tiered_limit",
    "verify_password",
]
