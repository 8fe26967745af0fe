from voyage.core.exceptions.base import (
    AppException,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    SubscriptionExpiredError,
    NoAgencyError,
    DuplicateError,
    ConflictError,
    LimitReachedError,
    PdfGenerationUnavailableError,
)

__all__ = [
    "AppException",
    "NotFoundError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "SubscriptionExpiredError",
    "NoAgencyError",
    "DuplicateError",
    "ConflictError",
    "LimitReachedError",
    "PdfGenerationUnavailableError",
]
