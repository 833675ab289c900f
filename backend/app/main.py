"""Sites API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly under settings.api_prefix (no auto-discovery)
    - Global error handlers map AppError → {error, code, details?} JSON responses
    - Sessions are signed cookies (SessionMiddleware); CORS configured from settings
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory plus module-level app: uvicorn imports `app.main:app`,
      tests can build isolated instances
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import auth, dashboard, health, sites
from app.config import Settings, get_settings
from app.infrastructure import database
from app.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Sites API started")
    yield
    if database.db_manager:
        await database.db_manager.close()
    logger.info("Sites API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Sites API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie=settings.session_cookie_name,
        max_age=settings.session_max_age_seconds,
        https_only=settings.session_https_only,
        same_site="lax",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(sites.router, prefix=settings.api_prefix)
    app.include_router(dashboard.router, prefix=settings.api_prefix)

    register_error_handlers(app)
    return app


app = create_app()


def run():
    """Run the server (uvicorn). Entry point for `sites-api`."""
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)
