# tests/services/test_mail_service.py
"""Tests for the account email sender."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from blogapi.errors import CircuitBreakerError, MailSendingError
from blogapi.managers.circuit_breaker import CircuitBreaker, CircuitBreakerConfig
from blogapi.services.mail import MailService


@pytest.fixture
def email_client() -> MagicMock:
    client = MagicMock()
    client.send_email = AsyncMock(return_value={"id": "msg"})
    return client


async def test_verification_email_contains_link(email_client) -> None:
    service = MailService(client=email_client, circuit_breaker=None, enabled=True)

    assert await service.send_verification_email("jane@example.com", "tok 1") is True

    to, subject, body = email_client.send_email.await_args.args
    assert to == "jane@example.com"
    assert subject == "Verify your email"
    assert "?token=tok+1" in body


async def test_reset_email(email_client) -> None:
    service = MailService(client=email_client, circuit_breaker=None, enabled=True)

    await service.send_password_reset_email("jane@example.com", "abc")

    _, subject, body = email_client.send_email.await_args.args
    assert subject == "Reset your password"
    assert "reset-password?token=abc" in body


async def test_disabled_mail_is_not_sent(email_client) -> None:
    service = MailService(client=email_client, circuit_breaker=None, enabled=False)

    assert await service.send_verification_email("jane@example.com", "abc") is False
    email_client.send_email.assert_not_awaited()


async def test_repeated_failures_open_the_circuit(email_client) -> None:
    email_client.send_email.side_effect = MailSendingError("refused")
    breaker = CircuitBreaker(
        config=CircuitBreakerConfig(
            name="mail_test",
            failure_threshold=2,
            expected_exceptions=MailSendingError,
        ),
    )
    service = MailService(client=email_client, circuit_breaker=breaker, enabled=True)

    for _ in range(2):
        with pytest.raises(MailSendingError):
            await service.send_verification_email("jane@example.com", "abc")

    with pytest.raises(CircuitBreakerError):
        await service.send_verification_email("jane@example.com", "abc")
    assert email_client.send_email.await_count == 2
