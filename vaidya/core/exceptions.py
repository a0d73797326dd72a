"""
Application errors and the handlers that turn them into JSON responses.

Every error leaves the API as ``{"error": <name>, "message": <text>}`` with
the status code carried by the exception class.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class VaidyaError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "InternalError"
    message: str = "An unexpected error occurred"
    headers: Optional[Dict[str, str]] = None

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(VaidyaError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "ValidationError"
    message = "Invalid request"


class DuplicateIdentity(VaidyaError):
    status_code = status.HTTP_409_CONFLICT
    error = "DuplicateIdentity"
    message = "Email already registered"


class InvalidCredentials(VaidyaError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "InvalidCredentials"
    message = "Invalid email or password"


class Unauthorized(VaidyaError):
    status_code = status.HTTP_401_UNAUTHORIZED
    error = "Unauthorized"
    message = "Not authenticated"
    headers = {"WWW-Authenticate": "Bearer"}


class TokenExpired(Unauthorized):
    error = "Expired"
    message = "Token has expired"


class InvalidSignature(Unauthorized):
    error = "InvalidSignature"
    message = "Token signature is invalid"


class MalformedToken(Unauthorized):
    error = "Malformed"
    message = "Token is malformed"


class Forbidden(VaidyaError):
    status_code = status.HTTP_403_FORBIDDEN
    error = "Forbidden"
    message = "Not enough permissions"


class NotFound(VaidyaError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "NotFound"
    message = "The requested resource was not found"


class InternalError(VaidyaError):
    pass


def _error_body(error: str, message: str, **extra: Any) -> Dict[str, Any]:
    body = {"error": error, "message": message}
    body.update(extra)
    return body


async def vaidya_error_handler(request: Request, exc: VaidyaError):
    if exc.status_code >= 500:
        logger.error(f"{exc.error} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.error} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error, exc.message),
        headers=exc.headers,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    logger.info(f"Validation error on {request.method} {request.url.path}: {errors}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(ValidationError.error, "Invalid request body", details=errors),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                NotFound.error,
                NotFound.message,
                path=str(request.url.path),
            ),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body("HTTPError", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=InternalError.status_code,
        content=_error_body(InternalError.error, InternalError.message),
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=InternalError.status_code,
        content=_error_body(InternalError.error, InternalError.message),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(VaidyaError, vaidya_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
