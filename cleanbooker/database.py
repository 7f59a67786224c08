"""Database handle and declarative base.

The engine is owned by a :class:`Database` instance that is created by the
application lifespan (or a test fixture) and handed to request handlers via
``app.state.db``. Nothing connects at import time.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from cleanbooker.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


class Database:
    """Async engine plus session factory with an explicit open/close lifecycle."""

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        self.url = url
        self._engine_kwargs = engine_kwargs
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not connected")
        return self._engine

    def connect(self) -> None:
        """Create the engine and session factory."""
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.url, **self._engine_kwargs)
        self._sessionmaker = async_sessionmaker(
            self._engine,
            expire_on_commit=False,
            autoflush=False,
        )
        logger.info(f"Database engine created for {self._engine.url.render_as_string(hide_password=True)}")

    async def dispose(self) -> None:
        """Close all pooled connections."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        logger.info("Database engine disposed")

    async def create_all(self) -> None:
        """Create all tables (development and tests only)."""
        # Register every model on Base.metadata
        import cleanbooker.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        """Drop all tables."""
        import cleanbooker.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Transactional session scope: commit on success, rollback on error."""
        if self._sessionmaker is None:
            raise RuntimeError("Database is not connected")
        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


def create_database(url: str, echo: bool = False, **engine_kwargs: Any) -> Database:
    """Build a Database with pool settings appropriate for the URL's backend."""
    if not url.startswith("sqlite"):
        engine_kwargs.setdefault("pool_pre_ping", True)
        engine_kwargs.setdefault("pool_size", settings.db_pool_size)
        engine_kwargs.setdefault("max_overflow", settings.db_max_overflow)
    return Database(url, echo=echo, **engine_kwargs)
