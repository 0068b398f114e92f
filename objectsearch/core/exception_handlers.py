"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Domain errors keep their
to_dict() body; the HTTP status comes from their error_code.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from objectsearch.core.config import get_settings
from objectsearch.domain.exceptions import ObjectSearchException
from objectsearch.shared.telemetry.tracing import get_trace_id

logger = logging.getLogger(__name__)

_ERROR_CODE_STATUS: dict[str, int] = {
    "INVALID_ARGUMENT": 400,
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "SERVICE_UNAVAILABLE": 503,
}


def _search_exception_handler(
    request: Request, exc: ObjectSearchException
) -> JSONResponse:
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    headers = {"WWW-Authenticate": "Bearer"} if status == 401 else None
    if status >= 500:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
    else:
        logger.info(
            "%s %s rejected (%s): %s",
            request.method,
            request.url.path,
            exc.error_code,
            exc.message,
        )
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Query parameters that fail FastAPI validation (e.g. page=0) answer 422."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Invalid search parameters",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; the exception text is exposed only in debug mode."""
    logger.exception(
        "Search request %s failed (trace_id=%s)", request.url.path, get_trace_id()
    )
    detail: Any = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register the search exception handlers on app."""
    app.add_exception_handler(ObjectSearchException, _search_exception_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
