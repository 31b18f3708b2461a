"""
Notes API Application

FastAPI application entrypoint with async lifespan management.
Waits for the store and bootstraps the schema before serving traffic.

Start locally:
    uvicorn notes_service.main:app --host 0.0.0.0 --port 5000 --reload

Or via the console script (reads HOST/PORT from the environment):
    notes-service
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notes_service.api.health import liveness_router, readiness_router
from notes_service.api.notes import router as notes_router
from notes_service.core.config import settings
from notes_service.core.database import Database
from notes_service.core.exceptions import register_exception_handlers
from notes_service.core.logging import setup_logging

# Initialize logging before any log statements
setup_logging()
logger = logging.getLogger(__name__)


def create_app(database: Database | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        database: Store to use instead of one built from settings
            (tests pass a fake here).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Application lifespan handler.

        Startup:
            - Waits for the database (required, blocks startup on failure)
            - Creates the notes table if it does not exist

        Shutdown:
            - Disposes the connection pool
        """
        logger.info("Starting %s v%s...", settings.PROJECT_NAME, settings.VERSION)
        logger.info("Log Level: %s", settings.LOG_LEVEL)

        db = database or Database(settings.DATABASE_URL, pool_size=settings.DB_POOL_SIZE)

        if not await db.wait_until_ready(
            retries=settings.DB_CONNECT_RETRIES,
            delay=settings.DB_CONNECT_RETRY_DELAY,
        ):
            logger.critical("Could not connect to Postgres. Shutting down.")
            await db.dispose()
            raise RuntimeError("Database connection failed")

        try:
            await db.create_schema()
        except Exception as e:
            logger.critical("Schema initialization failed: %s", e)
            await db.dispose()
            raise RuntimeError("Database schema initialization failed") from e

        app.state.database = db

        yield  # Application runs here

        logger.info("Shutting down %s...", settings.PROJECT_NAME)
        await db.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(liveness_router, tags=["Health"])
    app.include_router(readiness_router, prefix="/api", tags=["Health"])
    app.include_router(notes_router, prefix="/api", tags=["Notes"])

    register_exception_handlers(app)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on HOST:PORT."""
    logger.info("Health check: http://localhost:%d/health", settings.PORT)
    logger.info("API base URL: http://localhost:%d/api", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)
