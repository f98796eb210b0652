"""
Database configuration and session management.
Uses async SQLAlchemy for non-blocking database operations.

- SQL echo disabled
- Slow queries are logged as warnings
- Session errors are counted and logged before rollback
- SQLite connections get a Unicode aware lower()
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool, QueuePool

from gallery.config import get_settings
from gallery.utils.metrics import db_errors_total

_logger = logging.getLogger("gallery.db")

settings = get_settings()


def build_engine(database_url: str) -> AsyncEngine:
    """Create an async engine and attach slow query logging to it."""
    if "sqlite" in database_url:
        new_engine = create_async_engine(
            database_url,
            echo=False,
            poolclass=NullPool,
        )
        register_sqlite_functions(new_engine)
    else:
        new_engine = create_async_engine(
            database_url,
            echo=False,
            poolclass=QueuePool,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_recycle=settings.db_pool_recycle,
            pool_pre_ping=True,
        )
    attach_slow_query_logging(new_engine)
    return new_engine


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


def register_sqlite_functions(target: AsyncEngine) -> None:
    """
    Replace SQLite's ASCII-only lower() on every new connection.
    
    ILIKE compiles to lower(x) LIKE lower(y) on SQLite, so this makes
    case-insensitive matching agree with str.lower().
    """

    @event.listens_for(target.sync_engine, "connect")
    def _connect(dbapi_connection, connection_record):
        dbapi_connection.create_function("lower", 1, _unicode_lower)


def attach_slow_query_logging(target: AsyncEngine) -> None:
    """Warn about statements slower than ``slow_query_threshold_seconds``."""
    sync_engine = target.sync_engine

    @event.listens_for(sync_engine, "before_cursor_execute")
    def _before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        conn.info.setdefault("query_start_time", []).append(time.perf_counter())

    @event.listens_for(sync_engine, "after_cursor_execute")
    def _after_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        start_times = conn.info.get("query_start_time")
        if start_times:
            elapsed = time.perf_counter() - start_times.pop()
            if elapsed >= settings.slow_query_threshold_seconds:
                # first 100 characters only
                short_stmt = statement[:100] + "..." if len(statement) > 100 else statement
                _logger.warning(
                    "Slow query",
                    extra={"event": "db", "ms": round(elapsed * 1000), "query": short_stmt},
                )


engine = build_engine(settings.database_url)

# Create async session factory
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


async def init_db() -> None:
    """Initialize database by creating all tables."""
    # models must be imported so their tables are registered on Base.metadata
    import gallery.models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Close database connections properly."""
    await engine.dispose()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency that provides a database session.
    Ensures proper cleanup of connections after each request.

    Usage:
        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            db_errors_total.inc()
            _logger.error(
                "DB error",
                extra={
                    "event": "db",
                    "error_type": type(e).__name__,
                    "error": str(e)[:200],
                },
            )
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Context manager for database sessions outside of request context.
    Used at startup to seed configuration defaults.
    
    Usage:
        async with get_db_context() as session:
            result = await session.execute(query)
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            db_errors_total.inc()
            _logger.error(
                "DB context error",
                extra={
                    "event": "db",
                    "error_type": type(e).__name__,
                    "error": str(e)[:200],
                },
            )
            await session.rollback()
            raise
        finally:
            await session.close()
