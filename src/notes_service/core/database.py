"""
Database Layer

Async SQLAlchemy 2.0 setup with connection pooling and session management.
Uses asyncpg as the PostgreSQL driver for non-blocking I/O.

Design:
    - ``Database`` owns the engine and session factory. It is built once
      during application startup and stored on ``app.state``; nothing is
      created at import time.
    - get_database / get_db: FastAPI dependencies resolving the instance
      attached to the running application.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from notes_service.models.base import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Connection pool and session factory for the notes store.

    The engine is created lazily on first use, so constructing a
    ``Database`` performs no I/O.
    """

    def __init__(self, url: str, pool_size: int = 5):
        self.url = url
        self.pool_size = pool_size
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            # pool_pre_ping: recycle connections dropped by a restarted store
            self._engine = create_async_engine(
                self.url,
                echo=False,
                pool_size=self.pool_size,
                pool_pre_ping=True,
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        # expire_on_commit=False: prevents implicit I/O after commit when accessing attributes
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                self.engine, expire_on_commit=False
            )
        return self._session_factory

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Open a session that is closed on exit, including on exceptions."""
        async with self.session_factory() as session:
            yield session

    async def ping(self) -> None:
        """Run a trivial query. Raises the driver error if the store is down."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def wait_until_ready(self, retries: int = 10, delay: float = 1.0) -> bool:
        """
        Wait for PostgreSQL to become available.

        Useful in containerized environments where the database may start
        after the application. Implements retry logic with linear delay.

        Args:
            retries: Maximum connection attempts.
            delay: Seconds between attempts.

        Returns:
            True if connection established, False if all retries exhausted.
        """
        for i in range(retries):
            try:
                await self.ping()
                logger.info("Postgres connection established")
                return True
            except Exception as e:
                logger.warning(
                    "Waiting for Postgres (%d/%d)... Error: %s", i + 1, retries, e
                )
                await asyncio.sleep(delay)
        return False

    async def create_schema(self) -> None:
        """Create missing tables. Existing tables are left untouched."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
        logger.info("Database schema initialized")

    async def dispose(self) -> None:
        """Dispose the engine at application shutdown."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the Database attached at startup."""
    database: Database = request.app.state.database
    return database


async def get_db(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    Yields:
        AsyncSession: Scoped to the request lifecycle. Automatically closed
        after the request completes (including on exceptions).
    """
    async with database.session() as session:
        yield session


__all__ = ["Base", "Database", "get_database", "get_db"]
