"""
Global exception handlers for the FastAPI application.

This module translates application exceptions into the JSON error envelope
shared by every endpoint::

    {"statusCode": 401, "message": "...", "success": false, "errors": []}

No stack trace or exception type ever reaches the client.
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette import status
from structlog import get_logger

from vidtube_auth.core.exceptions import (
    AssetDeleteError,
    AssetUploadError,
    AuthenticationError,
    DatabaseError,
    DuplicateUserError,
    InvalidRefreshTokenError,
    PolicyViolationError,
    UserNotFoundError,
    ValidationError,
    VidTubeError,
)

__all__ = [
    "error_response",
    "validation_error_handler",
    "request_validation_error_handler",
    "duplicate_user_error_handler",
    "authentication_error_handler",
    "user_not_found_error_handler",
    "policy_violation_error_handler",
    "asset_error_handler",
    "database_error_handler",
    "vidtube_error_handler",
    "unhandled_exception_handler",
    "register_exception_handlers",
]

logger = get_logger(__name__)


def error_response(status_code: int, message: str, errors: list[Any] | None = None) -> JSONResponse:
    """Builds the error envelope."""
    return JSONResponse(
        status_code=status_code,
        content={
            "statusCode": status_code,
            "message": message,
            "success": False,
            "errors": errors or [],
        },
    )


def _client_host(request: Request) -> str | None:
    return request.client.host if request.client else None


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    """Handles `ValidationError`, returning a `400 Bad Request`."""
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handles FastAPI's `RequestValidationError`, returning a `400 Bad Request`.

    Each pydantic error is flattened to ``{"field": ..., "message": ...}`` so
    the client can point at the offending input.
    """
    errors = [
        {
            "field": ".".join(str(part) for part in error.get("loc", ()) if part != "body"),
            "message": error.get("msg", "Invalid value"),
        }
        for error in exc.errors()
    ]
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request", errors)


async def duplicate_user_error_handler(request: Request, exc: DuplicateUserError) -> JSONResponse:
    """Handles `DuplicateUserError`, returning a `409 Conflict`."""
    return error_response(status.HTTP_409_CONFLICT, exc.message)


async def authentication_error_handler(request: Request, exc: AuthenticationError) -> JSONResponse:
    """Handles `AuthenticationError`, returning a `401 Unauthorized`.

    Refresh failures carry a diagnostic reason that is logged here and
    replaced by the generic message on the wire.
    """
    log_context = {
        "error": exc.code,
        "client_ip": _client_host(request),
        "path": request.url.path,
    }
    if isinstance(exc, InvalidRefreshTokenError):
        log_context["reason"] = exc.reason
    logger.warning("Authentication failure", **log_context)
    return error_response(status.HTTP_401_UNAUTHORIZED, exc.message)


async def user_not_found_error_handler(request: Request, exc: UserNotFoundError) -> JSONResponse:
    """Handles `UserNotFoundError`, returning a `404 Not Found`."""
    return error_response(status.HTTP_404_NOT_FOUND, exc.message)


async def policy_violation_error_handler(
    request: Request, exc: PolicyViolationError
) -> JSONResponse:
    """Handles `PolicyViolationError`, returning a `406 Not Acceptable`."""
    return error_response(status.HTTP_406_NOT_ACCEPTABLE, exc.message)


async def asset_error_handler(request: Request, exc: VidTubeError) -> JSONResponse:
    """Handles media host failures, returning a `400 Bad Request`."""
    logger.warning(
        "Media host operation failed",
        error=exc.code,
        error_message=exc.message,
        path=request.url.path,
    )
    return error_response(status.HTTP_400_BAD_REQUEST, exc.message)


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Handles `DatabaseError`, returning a `500 Internal Server Error`."""
    logger.critical(
        "A critical database error occurred",
        error_message=str(exc),
        path=request.url.path,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "A database error occurred.")


async def vidtube_error_handler(request: Request, exc: VidTubeError) -> JSONResponse:
    """Fallback for application errors without a more specific handler."""
    logger.error(
        "An unhandled application error occurred",
        error_code=exc.code,
        error_message=exc.message,
        path=request.url.path,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred.")


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception", path=request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "An unexpected error occurred.")


def register_exception_handlers(app: FastAPI) -> None:
    """Registers all exception handlers with the FastAPI application.

    Starlette resolves handlers along the exception's MRO, so subclasses such
    as `DatabaseError` win over their registered base classes.

    Args:
        app: The `FastAPI` application instance.
    """
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(DuplicateUserError, duplicate_user_error_handler)
    app.add_exception_handler(AuthenticationError, authentication_error_handler)
    app.add_exception_handler(UserNotFoundError, user_not_found_error_handler)
    app.add_exception_handler(PolicyViolationError, policy_violation_error_handler)
    app.add_exception_handler(AssetUploadError, asset_error_handler)
    app.add_exception_handler(AssetDeleteError, asset_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)
    app.add_exception_handler(VidTubeError, vidtube_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
