"""JSON error responses for the API.

register_exception_handlers(app) installs one handler per family: back
office domain errors (status chosen by error_code), request validation,
Starlette HTTP errors, and a last-resort 500.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backoffice.core.config import get_settings
from backoffice.domain.exceptions import BackofficeException

logger = logging.getLogger(__name__)

# error_code -> HTTP status. Unlisted codes fall back to 400.
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "ELIGIBILITY_ERROR": 409,
    "STATE_ERROR": 409,
    "EXTERNAL_SYNC_ERROR": 502,
    "SERVICE_UNAVAILABLE": 503,
}


def _error_body(error: str, message: Any, details: Any = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": error, "message": message}
    if details is not None:
        body["details"] = details
    return body


def _on_backoffice_error(request: Request, exc: BackofficeException) -> JSONResponse:
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if status >= 500:
        logger.error("%s %s -> %s: %s", request.method, request.url.path, status, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _on_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content=_error_body("VALIDATION_ERROR", "Request body or parameters are invalid", exc.errors()),
    )


def _on_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body("HTTP_ERROR", exc.detail),
        headers=getattr(exc, "headers", None),
    )


def _on_unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    """500 with the exception text only in debug mode."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if get_settings().debug else "Internal server error"
    return JSONResponse(status_code=500, content=_error_body("INTERNAL_ERROR", message))


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers above on app; call once from create_app()."""
    app.add_exception_handler(BackofficeException, _on_backoffice_error)
    app.add_exception_handler(RequestValidationError, _on_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, _on_http_error)
    app.add_exception_handler(Exception, _on_unhandled_error)
