from blogapi.errors.ai import (
    AIGenerationError,
    AiAuthenticationError,
    AiError,
    AiNetworkError,
    AiNotConfiguredError,
    AiQuotaExceededError,
    ai_exception_handler,
)
from blogapi.errors.auth import (
    EmailNotVerifiedError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidResetTokenError,
    InvalidVerificationTokenError,
    NotAuthenticatedError,
    OAuthError,
    PermissionDeniedError,
    RegistrationError,
    UserAuthenticationError,
    UserNotFoundError,
    auth_exception_handler,
)
from blogapi.errors.base import (
    BaseAppError,
    create_exception_handler,
    create_http_exception_handler,
)
from blogapi.errors.circuit_breaker import CircuitBreakerError, circuit_breaker_exception_handler
from blogapi.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
    TransactionError,
    database_exception_handler,
)
from blogapi.errors.email import (
    EmailServiceError,
    MailConfigurationError,
    MailSendingError,
    email_client_exception_handler,
)
from blogapi.errors.password_hasher import (
    PasswordHashingError,
    password_hashing_exception_handler,
)
from blogapi.errors.upload import (
    ImageTooLargeError,
    InvalidImageError,
    MissingUploadError,
    StorageError,
    UnsupportedImageTypeError,
    UploadError,
    upload_exception_handler,
)
from blogapi.errors.validation import (
    InvalidIdentifierError,
    ValidationError,
    request_validation_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "AIGenerationError",
    "AiAuthenticationError",
    "AiError",
    "AiNetworkError",
    "AiNotConfiguredError",
    "AiQuotaExceededError",
    "BaseAppError",
    "CircuitBreakerError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DuplicateEntryError",
    "EmailNotVerifiedError",
    "EmailServiceError",
    "ImageTooLargeError",
    "InvalidCredentialsError",
    "InvalidIdentifierError",
    "InvalidImageError",
    "InvalidRefreshTokenError",
    "InvalidResetTokenError",
    "InvalidVerificationTokenError",
    "MailConfigurationError",
    "MailSendingError",
    "MissingUploadError",
    "NotAuthenticatedError",
    "OAuthError",
    "PasswordHashingError",
    "PermissionDeniedError",
    "RecordNotFoundError",
    "RegistrationError",
    "StorageError",
    "TransactionError",
    "UnsupportedImageTypeError",
    "UploadError",
    "UserAuthenticationError",
    "UserNotFoundError",
    "ValidationError",
    "ai_exception_handler",
    "auth_exception_handler",
    "circuit_breaker_exception_handler",
    "create_exception_handler",
    "create_http_exception_handler",
    "database_exception_handler",
    "email_client_exception_handler",
    "password_hashing_exception_handler",
    "request_validation_exception_handler",
    "upload_exception_handler",
    "validation_exception_handler",
]
