"""Union API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UnionError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Registries are built once and stored on app.state; nothing is module-global
    - Every account is marked offline on orderly shutdown; a failed reset is
      logged and the engine is still disposed

Design Decisions:
    - create_app() factory: tests inject registries built on an in-memory
      engine, production builds them from settings inside the lifespan
    - Lifespan over @app.on_event: cleaner startup/shutdown pairing
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from union.api.error_handlers import register_error_handlers
from union.api.routes import health, invites, messages, servers, users
from union.config import Settings, get_settings
from union.core.errors import DatabaseError
from union.infrastructure.database import DatabaseSessionManager
from union.infrastructure.observability import setup_logging
from union.services.registries import Registries, build_registries

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)

    owns_registries = app.state.registries is None
    if owns_registries:
        db = DatabaseSessionManager.from_url(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        app.state.registries = build_registries(db, settings)
    logger.info("Union API started")
    yield
    logger.info("Union API shutting down")

    registries: Registries = app.state.registries
    try:
        if settings.reset_presence_on_shutdown:
            await registries.accounts.reset_all_presence()
    except (DatabaseError, OSError) as e:
        logger.warning(f"Presence reset skipped on shutdown: {e}")
    finally:
        if owns_registries:
            await registries.db.dispose()
            app.state.registries = None


def create_app(
    registries: Registries | None = None, settings: Settings | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title="Union API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.registries = registries

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routes — explicit registration
    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(servers.router)
    app.include_router(messages.router)
    app.include_router(invites.router)

    register_error_handlers(app)
    return app


app = create_app()
