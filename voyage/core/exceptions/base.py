from typing import Any


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found"
        if identifier is not None:
            message = f"{resource} with id={identifier} not found"
        super().__init__(message=message, status_code=404)


class ValidationError(AppException):
    """Validation error."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message=message, status_code=422, details=details)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message=message, status_code=401)


class AuthorizationError(AppException):
    """Not authorized to perform action."""

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message=message, status_code=403)


class SubscriptionExpiredError(AuthorizationError):
    """Agency has no running subscription."""

    def __init__(self, message: str = "Subscription expired"):
        super().__init__(message=message)


class NoAgencyError(AppException):
    """Authenticated user is not attached to an agency."""

    def __init__(self):
        super().__init__(message="User does not belong to any agency", status_code=404)


class DuplicateError(AppException):
    """Duplicate resource."""

    def __init__(self, resource: str, field: str, value: Any):
        message = f"{resource} with {field}={value} already exists"
        super().__init__(message=message, status_code=409, details={"field": field, "value": value})


class ConflictError(AppException):
    """Operation blocked by rows that still reference the resource."""

    def __init__(self, message: str):
        super().__init__(message=message, status_code=409)


class LimitReachedError(AppException):
    """Package limit (branches, users per branch) reached."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message=message, status_code=400, details=details)


class PdfGenerationUnavailableError(AppException):
    """WeasyPrint/system libraries not available (e.g. pango missing)."""

    def __init__(self, message: str | None = None):
        msg = message or (
            "PDF generation is not available on this system. "
            "Install pango and glib system libraries."
        )
        super().__init__(message=msg, status_code=503)
