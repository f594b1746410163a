"""Translation of every request failure into the ``{"errors": ...}`` envelope."""

from __future__ import annotations

import logging
from typing import Tuple

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ...domain.errors import VALIDATION_ERROR_MESSAGE, ErrorKind, ServiceError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MSG = "Internal server error"


def normalize_error(exc: Exception) -> Tuple[int, str]:
    """Map any exception to the status code and message sent to the client."""
    if isinstance(exc, ServiceError):
        if exc.kind is ErrorKind.VALIDATION:
            return status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR_MESSAGE
        return exc.status_code, exc.message
    if isinstance(exc, RequestValidationError):
        return status.HTTP_400_BAD_REQUEST, VALIDATION_ERROR_MESSAGE
    if isinstance(exc, StarletteHTTPException):
        return exc.status_code, exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return ErrorKind.INTERNAL.status_code, str(exc) or INTERNAL_ERROR_MSG


def error_response(request: Request, exc: Exception) -> JSONResponse:
    status_code, message = normalize_error(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.exception(
            "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
        )
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, status_code, message)
    return JSONResponse(status_code=status_code, content={"errors": message})


async def catch_unexpected_errors(request: Request, call_next) -> Response:
    """Answer unexpected exceptions here so they never reach the server error middleware."""
    try:
        return await call_next(request)
    except Exception as exc:
        return error_response(request, exc)


def register_exception_handlers(app: FastAPI) -> None:
    for exc_class in (ServiceError, RequestValidationError, StarletteHTTPException):
        app.add_exception_handler(exc_class, error_response)
    app.middleware("http")(catch_unexpected_errors)
