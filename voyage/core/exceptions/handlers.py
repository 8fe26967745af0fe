import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from voyage.core.config import settings
from voyage.core.exceptions import AppException
from voyage.shared.schemas import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


def _error_response(
    status_code: int, message: str, errors: list[ErrorDetail] | None = None
) -> JSONResponse:
    """Every error leaves the API as ``{"message", "errors": [{field, message}]}``."""
    response = ErrorResponse(
        message=message,
        errors=errors if errors is not None else [ErrorDetail(field=None, message=message)],
    )
    return JSONResponse(status_code=status_code, content=response.model_dump())


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handle application exceptions; ``details["field"]`` names the offending input."""
    return _error_response(
        exc.status_code,
        exc.message,
        [ErrorDetail(field=exc.details.get("field"), message=exc.message)],
    )


def _format_validation_errors(errors: list[dict]) -> list[ErrorDetail]:
    details: list[ErrorDetail] = []
    for error in errors:
        # "body.details.0.city_id" -> "details.0.city_id"
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        details.append(
            ErrorDetail(field=".".join(loc) or None, message=error.get("msg", "Invalid value"))
        )
    return details


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request bodies and query strings rejected by pydantic answer 422."""
    return _error_response(422, "Validation error", _format_validation_errors(exc.errors()))


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail) if exc.detail else "HTTP error")


def _friendly_integrity_error(exc: IntegrityError) -> tuple[str, int]:
    """
    Convert constraint violations to a stable, user-facing message.

    Full driver messages are only exposed when debug is enabled.
    """
    raw = str(getattr(exc, "orig", exc))
    lower = raw.lower()

    if "insert or update on table" in lower and "foreign key" in lower:
        return ("Referenced record does not exist", 422)

    if "foreign key" in lower:
        return (
            "Cannot delete this record because it is referenced in related data. "
            "Please remove those first.",
            409,
        )

    if "unique" in lower or "duplicate key" in lower:
        return ("Record with the same value already exists", 409)

    if settings.debug:
        return (raw, 409)

    return ("Database constraint violated", 409)


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    message, status_code = _friendly_integrity_error(exc)
    logger.warning("Integrity error on %s %s: %s", request.method, request.url.path, exc.orig)
    return _error_response(status_code, message)
