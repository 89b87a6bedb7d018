"""Error Handlers — global exception handlers for the QuickRef API.

Invariants:
    - QuickRefError → structured JSON with code, message, severity (+ error headers)
    - RequestValidationError → 422 with field-level details
    - Exception (catch-all) → 500, never leaks internal details
    - HTTPException keeps FastAPI's default handler

Design Decisions:
    - Three-layer handler: domain (QuickRefError), validation (Pydantic), catch-all (Exception)
    - 422 for validation, matching the status FastAPI documents for request errors
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from quickref.core.errors import ErrorSeverity, QuickRefError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_quickref_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _register_quickref_error_handler(app: FastAPI) -> None:

    @app.exception_handler(QuickRefError)
    async def quickref_error_handler(request: Request, exc: QuickRefError):
        """Handle all QuickRef domain/infrastructure errors."""
        exc.context.request_id = exc.context.request_id or _request_id(request)
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"QuickRefError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status,
            content=exc.to_response(),
            headers=exc.headers,
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=422,
            content=jsonable_encoder(build_validation_error_response(exc)),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return internal_error_response()


def internal_error_response() -> JSONResponse:
    """500 envelope with no internal details; also used by the request middleware."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred",
                "category": "internal",
                "severity": ErrorSeverity.CRITICAL.value,
            },
        },
    )


def build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
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
