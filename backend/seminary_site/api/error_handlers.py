"""Error Handlers — global exception handlers for the seminary site API.

Invariants:
    - SiteError → structured JSON with error code, message, severity and display_message
    - RequestValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (SiteError), validation (Pydantic), catch-all (Exception)
    - display_message comes from the error classifier so every client shows the same
      wording for network failures, empty results and referenced records
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from seminary_site.core.error_messages import GENERIC_MESSAGE, describe_error
from seminary_site.core.errors import ErrorSeverity, FormValidationError, SiteError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_site_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_site_error_handler(app: FastAPI) -> None:
    """Register seminary site domain/infrastructure error handler."""

    @app.exception_handler(SiteError)
    async def site_error_handler(request: Request, exc: SiteError):
        """Handle all seminary site domain/infrastructure errors."""
        logger.error(
            f"SiteError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        content = exc.to_response()
        content["error"]["display_message"] = describe_error(exc)
        if isinstance(exc, FormValidationError):
            content["error"]["field"] = exc.field
        return JSONResponse(status_code=exc.http_status, content=content)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": GENERIC_MESSAGE,
                    "display_message": GENERIC_MESSAGE,
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "display_message": "Please fill in all required fields",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
