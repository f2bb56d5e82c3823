"""Exception handlers rendering the ``{"error": ...}`` envelope."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog.core.errors import (
    BadRequest,
    CatalogError,
    EditConflict,
    InvalidCredentials,
    InvalidToken,
    NotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)

_SERVER_ERROR_MESSAGE = (
    "the server encountered a problem and could not process your request"
)

_STATUS_BY_ERROR: dict[type[CatalogError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    BadRequest: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    EditConflict: status.HTTP_409_CONFLICT,
    InvalidCredentials: status.HTTP_401_UNAUTHORIZED,
    InvalidToken: status.HTTP_401_UNAUTHORIZED,
}


def error_response(
    status_code: int, error: Any, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": error}, headers=headers
    )


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc.errors)
    if isinstance(exc, InvalidToken):
        return error_response(
            status.HTTP_401_UNAUTHORIZED,
            exc.message,
            headers={"WWW-Authenticate": "Bearer"},
        )
    status_code = _STATUS_BY_ERROR.get(type(exc))
    if status_code is None:
        return await server_error_handler(request, exc)
    return error_response(status_code, exc.message)


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error for %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, _SERVER_ERROR_MESSAGE)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message: Any = NotFound.message
    elif exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
        message = f"the {request.method} method is not supported for this resource"
    else:
        message = exc.detail
    return error_response(exc.status_code, message, headers=exc.headers)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, BadRequest.message)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler to ``app``."""
    app.add_exception_handler(CatalogError, catalog_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, server_error_handler)
