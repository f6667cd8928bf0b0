from logging import getLogger

from starlette.status import (
    HTTP_500_INTERNAL_SERVER_ERROR,
    HTTP_502_BAD_GATEWAY,
    HTTP_503_SERVICE_UNAVAILABLE,
)

from blogapi.configs import file_logger
from blogapi.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class EmailServiceError(BaseAppError):
    """Base class for all email service related errors."""

    def __init__(self, detail: str = "Email service error") -> None:
        super().__init__(
            detail=detail,
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )


class MailConfigurationError(EmailServiceError):
    """Raised when the Gmail token file is missing or unusable."""

    def __init__(self, detail: str = "Email service configuration error") -> None:
        super().__init__(detail)
        self.status_code = HTTP_503_SERVICE_UNAVAILABLE


class MailSendingError(EmailServiceError):
    """Raised when the Gmail API refuses or fails to send a message."""

    def __init__(self, detail: str = "Email service sending error") -> None:
        super().__init__(detail)
        self.status_code = HTTP_502_BAD_GATEWAY


email_client_exception_handler = create_exception_handler(logger)
