"""Error Handlers — global exception handlers mapping failures to {error, code, details?}.

Invariants:
    - AppError → its own http_status and to_response() body; 500-level internals
      (e.g. the DatabaseError reason) are added as details only in development
    - RequestValidationError → 400 with field-level details
    - Exception (catch-all) → 500 "Internal server error"; details only in development

Design Decisions:
    - Three-layer handler: domain (AppError), validation (Pydantic), catch-all (Exception)
    - Extracted from main.py so tests can mount the same handlers on a bare app
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from app.config import get_settings
from app.core.errors import AppError, DatabaseError, ValidationFailedError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_app_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_app_error_handler(app: FastAPI) -> None:

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        """Handle all domain/infrastructure errors."""
        reason = exc.reason if isinstance(exc, DatabaseError) else exc.message
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"AppError: {reason}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        content = exc.to_response()
        if exc.http_status >= 500 and get_settings().is_development:
            content["details"] = reason
        return JSONResponse(status_code=exc.http_status, content=content)


def _register_validation_error_handler(app: FastAPI) -> None:

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
            content=ValidationFailedError(
                build_validation_details(exc),
            ).to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — internal details only leak in development."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        content = {"error": "Internal server error", "code": "INTERNAL_ERROR"}
        if get_settings().is_development:
            content["details"] = str(exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=content,
        )


def build_validation_details(exc: RequestValidationError) -> list[dict]:
    """Flatten Pydantic errors to {field, message, type}, dropping the 'body' prefix."""
    details = []
    for e in exc.errors():
        loc = [str(part) for part in e["loc"]]
        if loc and loc[0] == "body":
            loc = loc[1:]
        details.append({
            "field": ".".join(loc),
            "message": e["msg"],
            "type": e["type"],
        })
    return details
