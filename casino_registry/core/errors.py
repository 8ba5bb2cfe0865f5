"""
Domain exceptions and their mapping to HTTP responses.

Services raise these; the handlers registered by ``register_exception_handlers``
turn them into ``{"error": ..., "details": ...}`` JSON bodies so every route
reports failures the same way.
"""

from typing import Any, Optional, Sequence

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from casino_registry.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors that map to a client-facing HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"
    headers: Optional[dict[str, str]] = None

    def __init__(self, message: Optional[str] = None, **extra: Any) -> None:
        super().__init__(message or self.message)
        self.message = message or self.message
        self.extra = extra

    def to_body(self) -> dict[str, Any]:
        return {"error": self.message, **self.extra}


class ValidationFailed(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Validation error"

    def __init__(self, message: Optional[str] = None, details: Optional[list] = None) -> None:
        super().__init__(message, details=details or [])


class Unauthenticated(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class MissingToken(Unauthenticated):
    message = "Token not provided"


class InvalidToken(Unauthenticated):
    message = "Invalid token"


class TokenExpired(InvalidToken):
    message = "Token expired"


class InvalidTokenSignature(InvalidToken):
    message = "Invalid token"


class InvalidCredentials(Unauthenticated):
    message = "Invalid email or password"


class ExpiredOrRevoked(Unauthenticated):
    message = "Refresh token expired or not found"


class UnknownUser(Unauthenticated):
    message = "User not found"


class Forbidden(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


class AccountDisabled(Forbidden):
    message = "Account is inactive. Contact the administrator."


class NotFound(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class Conflict(AppError):
    status_code = status.HTTP_409_CONFLICT
    message = "Conflict"


def validation_details(errors: Sequence[dict[str, Any]]) -> list[dict[str, str]]:
    """
    Flatten pydantic error entries into ``[{field, message}]``.

    The request-part prefix FastAPI adds to locations ("body", "query", ...)
    is dropped so clients see plain field names.
    """
    details = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header", "cookie", "form"):
            loc = loc[1:]
        message = str(err.get("msg", "Invalid value"))
        # pydantic prefixes messages from custom validators with "Value error, "
        message = message.removeprefix("Value error, ")
        details.append({"field": ".".join(loc), "message": message})
    return details


def from_pydantic(exc: ValidationError) -> ValidationFailed:
    """Wrap a pydantic ValidationError raised while parsing a payload by hand."""
    return ValidationFailed(details=validation_details(exc.errors()))


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=jsonable_encoder(exc.to_body()),
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = validation_details(exc.errors())
    logger.info(f"Rejected invalid request to {request.url.path}: {details}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Validation error", "details": details},
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    logger.warning(f"Integrity error on {request.method} {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"error": "Operation conflicts with existing records"},
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error taxonomy on the application."""
    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)
