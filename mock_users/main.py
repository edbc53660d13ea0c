"""Mock Users API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MockUsersError → shaped responses
    - User store loaded once on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; this module only assembles the app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from mock_users import __version__
from mock_users.api.error_handlers import register_error_handlers
from mock_users.api.routes import health, users
from mock_users.config import get_settings
from mock_users.infrastructure.observability import setup_logging
from mock_users.infrastructure.user_store import init_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = init_store(
        settings.users_file,
        rollback_on_failure=settings.rollback_on_persist_failure,
    )
    logger.info(
        f"Mock Users API started with {len(store)} user(s)",
        extra={"record_count": len(store)},
    )
    yield
    logger.info("Mock Users API shutting down")


def create_app() -> FastAPI:
    """Build the FastAPI application with routes and error handlers."""
    app = FastAPI(
        title="Mock Users API", version=__version__, lifespan=lifespan,
    )
    app.include_router(health.router)
    app.include_router(users.router)
    register_error_handlers(app)
    return app


app = create_app()
