"""Email client for Gmail API integration with OAuth2 authentication."""

from asyncio import get_running_loop
from base64 import urlsafe_b64encode
from email.message import EmailMessage
from email.utils import parseaddr
from logging import getLogger
from re import compile as re_compile
from threading import Lock
from typing import Any, cast

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import Resource, build
from googleapiclient.errors import HttpError

from blogapi.configs import file_logger, settings
from blogapi.errors import MailConfigurationError, MailSendingError

logger = file_logger(getLogger(__name__))

_HEADER_INJECTION_PATTERN = re_compile(r"[\r\n]")


class EmailClient:
    """
    Sends mail through the Gmail API using a stored OAuth2 token.

    The Gmail service is built lazily on first send; ``send_email`` runs the
    blocking Google client in the default executor.
    """

    def __init__(self) -> None:
        self._credentials: Credentials | None = None
        self._service: Resource | None = None
        self._service_lock: Lock = Lock()

    @staticmethod
    def _validate_email(email: str) -> str:
        """
        Validate an address and reject header injection attempts.

        Raises:
            ValueError: If email is invalid or contains newline characters.
        """
        # Gmail API alias for the authenticated account
        if email == "me":
            return email

        if _HEADER_INJECTION_PATTERN.search(email):
            mssg = "Email contains invalid characters (potential header injection)"
            raise ValueError(mssg)

        _, addr = parseaddr(email)
        if not addr or "@" not in addr:
            mssg = f"Invalid email address: {email}"
            raise ValueError(mssg)
        return addr

    @staticmethod
    def _sanitize_header(value: str) -> str:
        return _HEADER_INJECTION_PATTERN.sub("", value)

    def _get_credentials(self) -> Credentials:
        """
        Load and, if needed, refresh the stored OAuth2 credentials.

        Raises:
            MailConfigurationError: If the token file is missing, corrupt or
                can no longer be refreshed.
        """
        token_file = settings.GMAIL_TOKEN_FILE
        if not token_file.exists():
            mssg = f"Gmail token not found at {token_file}"
            raise MailConfigurationError(mssg)

        try:
            creds = Credentials.from_authorized_user_file(str(token_file), settings.GMAIL_SCOPES)
        except ValueError as e:
            logger.exception("Gmail token file is corrupt")
            mssg = "Gmail token file is corrupt"
            raise MailConfigurationError(mssg) from e

        if creds.valid:
            return creds
        if creds.expired and creds.refresh_token:
            logger.info("Refreshing expired Gmail access token.")
            try:
                creds.refresh(Request())
            except RefreshError as e:
                logger.exception("Token refresh failed.")
                mssg = "Gmail token expired and refresh failed"
                raise MailConfigurationError(mssg) from e
            return creds

        mssg = "Gmail token is invalid and cannot be refreshed"
        raise MailConfigurationError(mssg)

    @property
    def service(self) -> Resource:
        """Gmail API resource, built once per client (double-checked locking)."""
        if self._service is None:
            with self._service_lock:
                if self._service is None:
                    self._credentials = self._get_credentials()
                    self._service = build(
                        "gmail",
                        "v1",
                        credentials=self._credentials,
                        cache_discovery=False,
                    )
        return self._service

    def _create_message(self, to: str, subject: str, body: str) -> dict[str, str]:
        """
        Build a base64url-encoded MIME message for the Gmail API.

        Raises:
            ValueError: If an address is invalid.
        """
        message = EmailMessage()
        message.set_content(body)
        message["To"] = self._validate_email(to)
        message["From"] = self._validate_email(settings.MAIL_FROM)
        message["Subject"] = self._sanitize_header(subject)
        return {"raw": urlsafe_b64encode(message.as_bytes()).decode()}

    def send_sync(self, to: str, subject: str, body: str) -> dict[str, Any]:
        """
        Blocking send. Do not call from the event loop directly.

        Raises:
            MailConfigurationError: If Gmail credentials are unusable.
            MailSendingError: If the API rejects the message.
        """
        try:
            message_body = self._create_message(to, subject, body)
            # Resource methods are generated at runtime
            service = cast(Any, self.service)
            result = service.users().messages().send(userId="me", body=message_body).execute()
        except HttpError as error:
            logger.exception("Google API Error")
            mssg = f"Google API refused request: {error}"
            raise MailSendingError(mssg) from error
        except ValueError as error:
            mssg = f"Could not build message: {error}"
            raise MailSendingError(mssg) from error

        logger.info(f"Email sent. ID: {result.get('id')}")
        return result

    async def send_email(self, to: str, subject: str, body: str) -> dict[str, Any]:
        """Send without blocking the event loop."""
        loop = get_running_loop()
        return await loop.run_in_executor(None, self.send_sync, to, subject, body)
