"""Exception handlers: every error leaves the API as ``{"error", "message"[, "details"]}``.

Domain exceptions carry their own body (StudentsApiException.to_dict); the
status comes from the exception class. Cache failures never reach here.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import (
    DuplicateEmailException,
    ResourceNotFoundException,
    StudentsApiException,
    ValidationException,
)

logger = logging.getLogger(__name__)

_DOMAIN_STATUS: dict[type[StudentsApiException], int] = {
    ResourceNotFoundException: 404,
    DuplicateEmailException: 409,
    ValidationException: 400,
}


def _error_response(
    status_code: int, error: str, message: Any, details: Any = None
) -> JSONResponse:
    body: dict[str, Any] = {"error": error, "message": message}
    if details:
        body["details"] = details
    return JSONResponse(status_code=status_code, content=body)


def _domain_status(exc: StudentsApiException) -> int:
    for cls in type(exc).__mro__:
        if cls in _DOMAIN_STATUS:
            return _DOMAIN_STATUS[cls]
    return 400


def _handle_domain_error(request: Request, exc: StudentsApiException) -> JSONResponse:
    status_code = _domain_status(exc)
    logger.info("%s %s -> %s %s", request.method, request.url.path, status_code, exc.error_code)
    return JSONResponse(status_code=status_code, content=exc.to_dict())


def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    return _error_response(
        422, "VALIDATION_ERROR", "Request validation failed", jsonable_encoder(exc.errors())
    )


def _handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes (404) and wrong methods (405) keep their status."""
    return _error_response(exc.status_code, "HTTP_ERROR", exc.detail)


def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    """500; the exception text is exposed only in debug mode."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return _error_response(500, "INTERNAL_ERROR", message)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the JSON error handlers on app. Call once from create_app()."""
    app.add_exception_handler(StudentsApiException, _handle_domain_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, _handle_http_error)
    app.add_exception_handler(Exception, _handle_unexpected)
