# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure for the question store.

This package provides the shared SQLAlchemy async connection pool and the
read-only models for the question bank.

Example:
    from src.infrastructure.database import get_store_session

    async with get_store_session() as session:
        result = await session.execute(select(BookSource))
"""

from src.infrastructure.database.connection import (
    DatabaseError,
    StoreQueryFailedError,
    close_question_store,
    get_store_engine,
    get_store_session,
    get_store_sessionmaker,
    init_question_store,
)

__all__ = [
    "DatabaseError",
    "StoreQueryFailedError",
    "close_question_store",
    "get_store_engine",
    "get_store_session",
    "get_store_sessionmaker",
    "init_question_store",
]
