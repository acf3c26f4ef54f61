"""
Anekazoo Animals API - Database Engine & Schema Bootstrap
==========================================================

What:  Async SQLAlchemy engine construction, session factory, declarative base,
       and the one-time startup routines (schema bootstrap, connectivity check).
How:   The application lifespan builds one engine per process, bootstraps the
       `animals` table, verifies the store answers, and hands a session factory
       to the animal store. Nothing here is created at import time.
Who:   Called by the lifespan in main.py, by Alembic, and by tests.
When:  Once at startup; the engine is disposed at shutdown.

Connection Pooling:
    pool_size / max_overflow:  Sized from settings (shared by all requests)
    pool_pre_ping:             Validates connections before use
    pool_recycle=3600:         Recycles connections every hour
"""

import logging
from typing import Optional

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from anekazoo.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object used by the schema bootstrap and Alembic.
    """
    pass


# ── Engine & Sessions ─────────────────────────────────────────────────────

def build_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """
    Create the async engine that owns the connection pool.

    Args:
        database_url: Overrides settings.database_url when given.
    """
    return create_async_engine(
        database_url or settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
        # Echo SQL only when debugging
        echo=settings.log_level == "DEBUG",
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps loaded attributes readable after commit.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


# ── Startup Routines ──────────────────────────────────────────────────────

async def bootstrap_schema(engine: AsyncEngine) -> bool:
    """
    Create the `animals` table if it does not exist yet.

    What:    Idempotent schema setup (CREATE TABLE IF NOT EXISTS semantics).
    When:    Once during application startup, never on the request path.

    Returns:
        True if the table was already present, False if it was just created.

    Raises:
        SQLAlchemyError: The store rejected the DDL or is unreachable.
            Startup treats this as fatal.
    """
    # Registers the Animal table on Base.metadata
    from anekazoo.models.animal import Animal

    table_name = Animal.__tablename__

    try:
        async with engine.begin() as conn:
            existed = await conn.run_sync(
                lambda sync_conn: inspect(sync_conn).has_table(table_name)
            )
            await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    except SQLAlchemyError as e:
        logger.error("Error creating table %s: %s", table_name, e)
        raise

    if existed:
        logger.info("Models already migrated.")
    else:
        logger.info("Migration completed successfully.")
    return existed


async def verify_connection(engine: AsyncEngine) -> None:
    """
    Run `SELECT 1` against the store.

    Raises:
        SQLAlchemyError: The store is unreachable. Startup treats this as fatal.
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database connection failed: %s", e)
        raise
    logger.info("Database connected successfully")


async def dispose_engine(engine: AsyncEngine) -> None:
    """Close all pooled connections. Called during application shutdown."""
    await engine.dispose()
