"""
Centralized exception handlers.

Every ``AppError`` becomes ``{"error": message, "code": code}`` with the
status the error class declares.  Request-body binding failures answer 400
``VALIDATION_ERROR`` like the credential validators do.  Anything else is a
500 whose details stay in the log.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from utils.errors import AppError, InternalError

logger = logging.getLogger(__name__)


def _error_body(message: str, code: str, details: str | None = None) -> dict:
    body = {"error": message, "code": code}
    if details:
        body["details"] = details
    return body


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc,
            exc_info=exc.__cause__ or exc,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, exc.code),
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            "Validation failed", "VALIDATION_ERROR", _describe_validation(exc)
        ),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body("Internal server error", InternalError.code),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
