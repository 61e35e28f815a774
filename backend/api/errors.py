"""
Exception handlers.

Maps the backend's exception hierarchy onto HTTP status codes and the
standard response envelope. Route handlers never build error responses
themselves; they raise and let these handlers answer.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InventoryError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Validation failed"
INTERNAL_ERROR = "Internal server error"

# Checked in order; the first matching base class wins
STATUS_BY_ERROR: list[tuple[type[InventoryError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
]


def status_for(exc: InventoryError) -> int:
    """HTTP status code for an inventory exception."""
    for error_type, code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _failure(status_code: int, message: str, **extra: Any) -> JSONResponse:
    body = {"success": False, "message": message}
    body.update({k: v for k, v in extra.items() if v is not None})
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=body, headers=headers)


def _field_name(loc: tuple) -> str:
    # Drop the "body"/"query"/"path" source prefix
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def _error_message(error: dict[str, Any]) -> str:
    message = error.get("msg", "")
    # Messages raised from our own validators carry pydantic's prefix
    return message.removeprefix("Value error, ")


async def inventory_error_handler(request: Request, exc: InventoryError) -> JSONResponse:
    """Answer a domain exception with its mapped status code."""
    status_code = status_for(exc)

    if status_code >= 500:
        logger.error(
            "%s %s failed: %s (%s)",
            request.method, request.url.path, exc.message, exc.code,
            extra={"details": exc.details},
        )
        detail = exc.message if request.app.state.settings.is_development else None
        return _failure(status_code, INTERNAL_ERROR, error=detail)

    data = None
    if isinstance(exc, ConflictError) and exc.data is not None:
        data = jsonable_encoder(exc.data, by_alias=True)

    return _failure(status_code, exc.message, data=data)


async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Answer malformed input with 400 and one entry per failed field."""
    errors = [
        {"field": _field_name(tuple(e.get("loc", ()))), "message": _error_message(e)}
        for e in exc.errors()
    ]
    return _failure(status.HTTP_400_BAD_REQUEST, VALIDATION_FAILED, errors=errors)


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Wrap framework errors (unknown route, wrong method) in the envelope."""
    response = _failure(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the traceback and hide it outside development."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    detail = str(exc) if request.app.state.settings.is_development else None
    return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR, error=detail)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InventoryError, inventory_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
