"""Database configuration and session management."""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from vocabnote.config import settings

# Wait this long for a competing writer's lock before SQLite gives up
SQLITE_BUSY_TIMEOUT_MS = 5000


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


def _set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
    """Let concurrent CLI processes queue on the write lock instead of failing."""
    cursor = dbapi_connection.cursor()
    cursor.execute(f"PRAGMA busy_timeout={SQLITE_BUSY_TIMEOUT_MS}")
    cursor.close()


def create_engine(url: str) -> AsyncEngine:
    """Create an async engine for the given URL.

    NullPool creates fresh connections and closes them immediately after use,
    which suits one-shot CLI invocations.
    """
    new_engine = create_async_engine(url, echo=False, poolclass=NullPool)
    if new_engine.dialect.name == "sqlite":
        # Use sync_engine to properly intercept aiosqlite connections
        event.listen(new_engine.sync_engine, "connect", _set_sqlite_pragma)
    return new_engine


def ensure_sqlite_directory(bind: AsyncEngine) -> None:
    """Create the directory holding a file-backed SQLite database."""
    database = bind.url.database
    if bind.dialect.name == "sqlite" and database not in (None, "", ":memory:"):
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def create_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to an engine."""
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine = create_engine(settings.resolved_database_url)

# Session factory
async_session = create_session_factory(engine)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Initialize database tables."""
    # Register ORM models on Base.metadata before create_all
    import vocabnote.models  # noqa: F401
    import vocabnote.services.dictionary.cache  # noqa: F401

    bind = bind or engine
    ensure_sqlite_directory(bind)
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for dependency injection."""
    async with async_session() as session:
        yield session
