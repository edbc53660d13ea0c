"""Error Handlers: global exception handlers for the users API.

Invariants:
    - MockUsersError → body in the error's ResponseShape (JSON or text/plain)
    - RequestValidationError (non-object body) → 400 problem payload
    - Exception (catch-all) → 500 "Internal Server Error", never leaks internal details

Design Decisions:
    - Three-layer handler: domain (MockUsersError), validation (FastAPI body), catch-all
    - Extracted from main.py to keep the app module small
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from fastapi.exceptions import RequestValidationError

from mock_users.config import get_settings
from mock_users.core.errors import (
    MockUsersError,
    ErrorSeverity,
    ResponseShape,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)

NON_OBJECT_BODY_DETAIL = "Request body must be a JSON object"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def render_error(exc: MockUsersError) -> Response:
    """Build the HTTP response for a domain error."""
    body = exc.to_response(get_settings().problem_type_uri)
    if exc.shape is ResponseShape.PLAIN_TEXT:
        return PlainTextResponse(body, status_code=exc.http_status)
    return JSONResponse(status_code=exc.http_status, content=body)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(MockUsersError)
    async def domain_error_handler(request: Request, exc: MockUsersError):
        """Handle all user-API domain/infrastructure errors."""
        log = logger.error if exc.severity is ErrorSeverity.CRITICAL else logger.info
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "user_id": exc.context.user_id,
                "operation": exc.context.operation,
            },
        )
        return render_error(exc)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Body could not be read as a JSON object."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        shape = (
            ResponseShape.ERROR_LIST if request.method == "PUT"
            else ResponseShape.PROBLEM_DETAILS
        )
        return render_error(ValidationFailedError([NON_OBJECT_BODY_DETAIL], shape))


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return PlainTextResponse(
            "Internal Server Error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
