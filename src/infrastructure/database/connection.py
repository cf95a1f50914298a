# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Question store connection management using SQLAlchemy async.

This module owns the single process-wide connection pool for the question
store. The pool is created at application startup, or lazily on first use,
and shared by all requests. Each request gets its own AsyncSession from it.

Uses SQLAlchemy 2.0 async API with asyncpg driver.

Example:
    from src.infrastructure.database.connection import (
        init_question_store,
        get_store_session,
    )

    # Initialize at application startup
    await init_question_store(settings)

    # Use in request handlers
    async with get_store_session() as session:
        result = await session.execute(select(Question))
        questions = result.scalars().all()
"""

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator, Optional

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.config import get_settings

if TYPE_CHECKING:
    from src.core.config.settings import Settings

logger = logging.getLogger(__name__)

# Module-level state for the question store connection
_store_engine: Optional[AsyncEngine] = None
_store_sessionmaker: Optional[async_sessionmaker[AsyncSession]] = None


class DatabaseError(Exception):
    """Base exception for database operations.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying SQLAlchemy or database error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize the database error.

        Args:
            message: Human-readable error description.
            original_error: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class StoreQueryFailedError(DatabaseError):
    """Raised when a query against the question store fails.

    The store's own error message is kept as the message so callers can
    surface it unchanged. SQLAlchemy's statement, parameters and help
    link are not part of it.
    """

    @classmethod
    def from_error(cls, error: SQLAlchemyError) -> "StoreQueryFailedError":
        """Build the error from a failed SQLAlchemy call.

        Args:
            error: The exception raised by SQLAlchemy.

        Returns:
            StoreQueryFailedError carrying the driver's message.
        """
        if isinstance(error, DBAPIError) and error.orig is not None:
            return cls(str(error.orig))
        return cls(str(error))


def _create_store(settings: "Settings") -> None:
    global _store_engine, _store_sessionmaker

    try:
        _store_engine = create_async_engine(
            settings.store.url,
            pool_size=settings.store.pool_size,
            max_overflow=settings.store.max_overflow,
            pool_pre_ping=True,
            pool_recycle=1800,
            echo=settings.debug,
        )

        _store_sessionmaker = async_sessionmaker(
            bind=_store_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    except SQLAlchemyError as e:
        raise DatabaseError("Failed to initialize question store connection", e) from e

    logger.info(
        "Question store pool created: host=%s, database=%s",
        settings.store.host,
        settings.store.database,
    )


async def init_question_store(settings: "Settings") -> None:
    """Initialize the question store connection pool.

    This should be called once at application startup. Calling it again
    while a pool exists is a no-op.

    Args:
        settings: Application settings containing store configuration.

    Raises:
        DatabaseError: If connection pool creation fails.
    """
    if _store_engine is None:
        _create_store(settings)


async def close_question_store() -> None:
    """Close the question store connection pool.

    This should be called at application shutdown to properly
    close all connections in the pool.
    """
    global _store_engine, _store_sessionmaker

    if _store_engine is not None:
        await _store_engine.dispose()
        _store_engine = None
        _store_sessionmaker = None


def get_store_engine() -> AsyncEngine:
    """Get the question store async engine, creating it on first use.

    Returns:
        The SQLAlchemy async engine for the question store.

    Raises:
        DatabaseError: If the engine cannot be created.
    """
    if _store_engine is None:
        _create_store(get_settings())
    return _store_engine


def get_store_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get the question store sessionmaker, creating it on first use.

    Returns:
        The SQLAlchemy async sessionmaker for the question store.

    Raises:
        DatabaseError: If the engine cannot be created.
    """
    if _store_sessionmaker is None:
        _create_store(get_settings())
    return _store_sessionmaker


@asynccontextmanager
async def get_store_session() -> AsyncIterator[AsyncSession]:
    """Get an async session for the question store.

    The store is read-only from this service, so the session is only
    rolled back on failure and never committed.

    Yields:
        AsyncSession for database operations.

    Raises:
        DatabaseError: If the store cannot be reached or the engine
            cannot be created.

    Example:
        async with get_store_session() as session:
            result = await session.execute(select(BookSource))
            books = result.scalars().all()
    """
    sessionmaker = get_store_sessionmaker()

    async with sessionmaker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
