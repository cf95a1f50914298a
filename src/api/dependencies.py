# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Open a session on the shared question store pool
- Build the per-request domain services around that session

Example:
    @router.post("/questions")
    async def get_questions(
        resolver: QuestionResolver = Depends(get_question_resolver),
    ):
        ...
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import get_settings
from src.domains.books.service import BookService
from src.domains.practice.resolver import QuestionResolver
from src.domains.practice.selection import QuestionSelector
from src.infrastructure.database.connection import (
    close_question_store,
    get_store_session,
    init_question_store,
)

logger = logging.getLogger(__name__)


async def init_db() -> None:
    """Initialize the question store connection pool."""
    await init_question_store(get_settings())


async def close_db() -> None:
    """Close the question store connection pool."""
    await close_question_store()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a question store session.

    Yields:
        AsyncSession on the shared pool, closed after the request.
    """
    async with get_store_session() as session:
        yield session


def get_question_resolver(db: AsyncSession = Depends(get_db)) -> QuestionResolver:
    """Get a question resolver bound to the request session."""
    return QuestionResolver(db=db)


def get_question_selector(db: AsyncSession = Depends(get_db)) -> QuestionSelector:
    """Get a question selector bound to the request session."""
    return QuestionSelector(db=db)


def get_book_service(db: AsyncSession = Depends(get_db)) -> BookService:
    """Get a book service bound to the request session."""
    return BookService(db=db)
