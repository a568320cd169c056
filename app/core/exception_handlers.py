"""JSON error responses for the audit API.

Every error body has the shape ``{"error", "message", "details"?}``.
Domain exceptions pick their own status; framework errors are mapped here.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import AssetAuditException
from app.shared.telemetry.tracing import get_trace_id

logger = logging.getLogger(__name__)


def _domain_error(request: Request, exc: AssetAuditException) -> JSONResponse:
    if exc.http_status >= 500:
        logger.warning(
            "%s %s failed upstream: %s (%s)",
            request.method,
            request.url.path,
            exc.message,
            exc.details.get("remote_status"),
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


def _request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, wrong methods and other routing-level errors."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error on %s %s (trace_id=%s)",
        request.method,
        request.url.path,
        get_trace_id(),
    )
    message = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AssetAuditException, _domain_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(Exception, _unhandled_error)
