"""
Exception handlers translating service errors into HTTP responses.

Every error body has the shape::

    {"error": {"code", "message", "details", "timestamp"}, "request_id": ...}
"""

import time
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hotelms.core.logging import get_logger
from hotelms.core.middleware import get_request_id
from hotelms.services.common.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    TransactionError,
    ValidationError,
)

logger = get_logger(__name__)

# Most specific first: PermissionDenied is an AuthorizationError
ERROR_STATUS_MAP = (
    (NotFoundError, status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED, "AUTHENTICATION_ERROR"),
    (AuthorizationError, status.HTTP_403_FORBIDDEN, "FORBIDDEN"),
    (ConflictError, status.HTTP_409_CONFLICT, "CONFLICT"),
    (ValidationError, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR"),
    (TransactionError, status.HTTP_500_INTERNAL_SERVER_ERROR, "TRANSACTION_ERROR"),
)


def error_body(
    request: Request,
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "details": details or {},
            "timestamp": int(time.time()),
        },
        "request_id": get_request_id(request),
    }


def resolve_status(exc: ServiceError):
    for exc_type, status_code, code in ERROR_STATUS_MAP:
        if isinstance(exc, exc_type):
            return status_code, code
    return status.HTTP_400_BAD_REQUEST, "SERVICE_ERROR"


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code, code = resolve_status(exc)
    extra = {"error_code": code, "path": request.url.path, "method": request.method}

    if status_code >= 500:
        logger.error(f"Service error: {exc.message}", extra=extra, exc_info=exc)
        # Internal failures never leak their details
        body = error_body(request, code, "An internal error occurred")
    else:
        logger.warning(f"{code}: {exc.message}", extra=extra)
        details = {} if isinstance(exc, AuthorizationError) else exc.details
        body = error_body(request, code, exc.message, details)

    headers = None
    if isinstance(exc, AuthenticationError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=status_code, content=body, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Request body/query validation failures are reported as 400 with per-field messages."""
    field_errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field_path = ".".join(loc) or "request"
        field_errors[field_path] = {"message": error.get("msg"), "type": error.get("type")}

    logger.warning(
        f"Validation error: {len(field_errors)} field(s) failed validation",
        extra={"validation_errors": field_errors, "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            request,
            "VALIDATION_ERROR",
            "Request validation failed",
            {"field_errors": field_errors, "error_count": len(field_errors)},
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(request, f"HTTP_{exc.status_code}", str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception: {type(exc).__name__}",
        extra={"path": request.url.path, "method": request.method, "error_type": type(exc).__name__},
        exc_info=exc,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(request, "INTERNAL_SERVER_ERROR", "An unexpected error occurred"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
