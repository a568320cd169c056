"""Persistence: async engine, session factory, and Base for SQLAlchemy ORM.

Schema is managed by Alembic migrations (migrations/). For single-file
SQLite deployments, create_schema() can create missing tables at startup
(DATABASE_AUTO_CREATE).

Engine and session factory are created lazily on first use (get_db) so
import does not trigger Settings validation.
"""

import logging
from pathlib import Path
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import get_settings

logger = logging.getLogger(__name__)

# Set by _ensure_engine() on first use; avoids get_settings() at import time.
engine: Any = None
AsyncSessionLocal: async_sessionmaker[AsyncSession] | None = None


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy declarative models."""


def _ensure_sqlite_directory(database_url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    url = make_url(database_url)
    if not url.drivername.startswith("sqlite"):
        return
    database = url.database
    if not database or database == ":memory:":
        return
    Path(database).parent.mkdir(parents=True, exist_ok=True)


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create an async engine; SQLite gets check_same_thread disabled."""
    connect_args: dict[str, Any] = {}
    if database_url.startswith("sqlite"):
        _ensure_sqlite_directory(database_url)
        connect_args["check_same_thread"] = False
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


def _ensure_engine() -> None:
    """Create engine and AsyncSessionLocal on first use."""
    global engine, AsyncSessionLocal
    if AsyncSessionLocal is not None:
        return
    settings = get_settings()
    engine = build_engine(settings.database_url, echo=settings.database_echo)
    AsyncSessionLocal = build_sessionmaker(engine)


def get_engine() -> AsyncEngine:
    """Return the process engine, creating it on first use."""
    _ensure_engine()
    return engine


async def create_schema(bind: AsyncEngine | None = None) -> None:
    """Create missing tables from ORM metadata (no-op for existing tables)."""
    # Import models so they register on Base.metadata.
    from app.infrastructure.persistence import models  # noqa: F401

    target = bind if bind is not None else get_engine()
    async with target.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured")


async def dispose_engine() -> None:
    """Dispose the process engine and reset the session factory."""
    global engine, AsyncSessionLocal
    if engine is not None:
        await engine.dispose()
    engine = None
    AsyncSessionLocal = None


async def get_db():
    """Database session dependency.

    Does not open an outer transaction: every audit store write is a single
    statement committed by the repository, so a resolve batch persists each
    record as soon as its remote patch succeeds.
    Yields a session and closes it on exit.
    """
    _ensure_engine()
    async with AsyncSessionLocal() as session:
        yield session
