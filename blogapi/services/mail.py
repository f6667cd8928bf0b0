"""Transactional emails: account verification and password reset."""

from urllib.parse import urlencode

from blogapi.clients.email_client import EmailClient
from blogapi.configs import settings
from blogapi.managers.circuit_breaker import CircuitBreaker, email_circuit_breaker
from blogapi.monitoring import get_logger

logger = get_logger(__name__)


def _link(base: str, token: str) -> str:
    return f"{base}?{urlencode({'token': token})}"


class MailService:
    """
    Renders and sends account emails.

    When ``MAIL_ENABLED`` is off, messages are logged instead of sent so
    local setups work without Gmail credentials.
    """

    def __init__(
        self,
        client: EmailClient | None = None,
        circuit_breaker: CircuitBreaker | None = email_circuit_breaker,
        enabled: bool | None = None,
    ) -> None:
        self.client = client or EmailClient()
        self._circuit_breaker = circuit_breaker
        self.enabled = settings.MAIL_ENABLED if enabled is None else enabled

    async def _send(self, to: str, subject: str, body: str) -> bool:
        if not self.enabled:
            logger.info("Mail disabled, not sending", to=to, subject=subject)
            return False
        if self._circuit_breaker:
            await self._circuit_breaker.call(self.client.send_email, to, subject, body)
        else:
            await self.client.send_email(to, subject, body)
        return True

    async def send_verification_email(self, to: str, token: str) -> bool:
        link = _link(settings.FRONTEND_VERIFY_URL, token)
        body = (
            "Welcome!\n\n"
            f"Please confirm your email address by opening the link below:\n\n{link}\n\n"
            "If you did not create an account you can ignore this message."
        )
        return await self._send(to, "Verify your email", body)

    async def send_password_reset_email(self, to: str, token: str) -> bool:
        link = _link(settings.FRONTEND_RESET_URL, token)
        body = (
            "We received a request to reset your password.\n\n"
            f"Use the link below within 15 minutes to choose a new one:\n\n{link}\n\n"
            "If you did not ask for a reset you can ignore this message."
        )
        return await self._send(to, "Reset your password", body)
