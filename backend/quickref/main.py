"""QuickRef API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly, one router per cheat sheet section
    - Global error handlers map QuickRefError → structured JSON responses
    - CORS and docs URLs configured from settings (not hardcoded)
    - Database initialized and tables created on startup via the lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory so tests can build an app with their own Settings;
      the module-level `app` uses get_settings()
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from quickref.api.error_handlers import register_error_handlers
from quickref.api.middleware import register_middleware
from quickref.api.routes import (
    background,
    cheatsheet,
    cookies_headers,
    dependencies,
    events,
    health,
    items,
    models_demo,
    routing,
    security,
    uploads,
    validation,
)
from quickref.config import Settings, get_settings
from quickref.core.event_log import lifecycle_log
from quickref.core.security import seed_users, user_store
from quickref.infrastructure.database import close_db, init_db
from quickref.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

TAGS_METADATA = [
    {"name": "health", "description": "Liveness and readiness probes."},
    {"name": "routing", "description": "Path and query parameterized handlers."},
    {"name": "request-response-models", "description": "Typed input/output shapes."},
    {"name": "validation", "description": "Constraints on inputs."},
    {"name": "dependencies", "description": "Reusable parameter resolution."},
    {"name": "security", "description": "Bearer-token and API-key extraction."},
    {"name": "uploads", "description": "Multipart and form input handling."},
    {"name": "cookies-headers", "description": "Header and cookie extraction."},
    {"name": "background-tasks", "description": "Deferred post-response work."},
    {"name": "middleware-events", "description": "Request hooks and lifecycle events."},
    {"name": "database", "description": "Table mapping and async session setup."},
    {"name": "docs-cors", "description": "The cheat sheet itself and its lint report."},
]

ROUTERS = (
    health.router,
    routing.router,
    models_demo.router,
    validation.router,
    dependencies.router,
    security.router,
    uploads.router,
    cookies_headers.router,
    background.router,
    events.router,
    items.router,
    cheatsheet.router,
)


def build_lifespan(settings: Settings):

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        await manager.create_tables()
        lifecycle_log.record("startup", "database ready")
        if not len(user_store):
            seed_users(user_store, settings.demo_users, settings.disabled_users)
        lifecycle_log.record("users_seeded", f"{len(user_store)} users")
        logger.info("QuickRef API started")
        yield
        await close_db()
        lifecycle_log.record("shutdown", "database disposed")
        logger.info("QuickRef API shutting down")

    return lifespan


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    application = FastAPI(
        title="QuickRef API",
        version="1.0.0",
        description="Runnable FastAPI cheat sheet: one router per section.",
        lifespan=build_lifespan(settings),
        docs_url=settings.docs_url,
        redoc_url=settings.redoc_url,
        openapi_url=settings.openapi_url,
        openapi_tags=TAGS_METADATA,
    )
    register_middleware(application, settings)
    register_error_handlers(application)
    for router in ROUTERS:
        application.include_router(router)
    return application


app = create_app()
