"""HTTP Middleware — CORS policy plus request id / timing around every request.

Invariants:
    - Every response carries X-Request-ID and X-Process-Time (seconds, float as str),
      including the 500 built here when the endpoint raises
    - A caller-supplied X-Request-ID is echoed back unchanged
    - request.state.request_id set before the endpoint runs (error handlers read it)
    - CORS origins, credentials, methods and headers come from settings

Design Decisions:
    - Function middleware via app.middleware("http"): smallest surface for a header hook
    - Unhandled exceptions answered inside this middleware: Starlette's outer
      ServerErrorMiddleware sits outside CORS and this hook, so its 500 carries neither
    - Timing uses perf_counter (monotonic)
"""

import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from quickref.api.error_handlers import internal_error_response
from quickref.config import Settings

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"


async def request_context(request: Request, call_next):
    request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
    request.state.request_id = request_id
    start = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception:
        logger.error(
            f"Unhandled exception on {request.method} {request.url.path}",
            exc_info=True,
            extra={
                "request_id": request_id, "method": request.method,
                "path": request.url.path, "error_code": "INTERNAL_ERROR",
            },
        )
        response = internal_error_response()
    elapsed = time.perf_counter() - start
    response.headers[REQUEST_ID_HEADER] = request_id
    response.headers[PROCESS_TIME_HEADER] = f"{elapsed:.6f}"
    logger.info(
        f"{request.method} {request.url.path} -> {response.status_code}",
        extra={
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(elapsed * 1000, 3),
        },
    )
    return response


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Install request-context and CORS middleware (CORS outermost)."""
    app.middleware("http")(request_context)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=[REQUEST_ID_HEADER, PROCESS_TIME_HEADER],
    )
