"""Global exception handlers.

Every failure leaves the API in the ``{"error": {"message", "details"}}``
envelope:

- UserManagementError -> its own status and message
- unmatched route or method -> 404 "Route not found"
- undecodable or non-object request body -> 400 "Invalid request body"
- anything else -> logged, 500 "Internal server error", no internal detail
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from users_api.middleware import get_cors_headers
from users_common.errors import InvalidRequestBodyError, RouteNotFoundError, UserManagementError
from users_common.models.envelope import FieldError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI, ui_url: str | None) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_http_error_handler(app)
    _register_request_validation_handler(app)
    _register_generic_error_handler(app, ui_url)


def _error_response(error: UserManagementError, status_code: int | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code or error.http_status, content=error.to_response())


def _register_domain_error_handler(app: FastAPI) -> None:
    @app.exception_handler(UserManagementError)
    async def domain_error_handler(request: Request, exc: UserManagementError) -> JSONResponse:
        logger.info("%s %s -> %d %s", request.method, request.url.path, exc.http_status, exc.message)
        return _error_response(exc)


def _register_http_error_handler(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Unmatched routes and unsupported methods both read as an unknown route."""
        if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
            return _error_response(RouteNotFoundError())
        return _error_response(UserManagementError(str(exc.detail)), status_code=exc.status_code)


def _register_request_validation_handler(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Invalid request body on %s: %s", request.url.path, exc.errors())
        return _error_response(InvalidRequestBodyError(details=_field_errors(exc)))


def _register_generic_error_handler(app: FastAPI, ui_url: str | None) -> None:
    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all; never leaks internal details."""
        logger.error("Unhandled exception on %s: %s", request.url.path, exc, exc_info=True)

        # This response bypasses the CORS middleware
        cors_headers = get_cors_headers(request.headers.get("origin"), ui_url)
        response = _error_response(UserManagementError(), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        response.headers.update(cors_headers)
        return response


def _field_errors(exc: RequestValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append(FieldError(field=".".join(location) or "body", message=error.get("msg", "Invalid value")))
    return errors
