# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Book catalog service.

This module provides the BookService class for:
- Listing official books
- Looking up a book by its short code
- Listing the chapters of a book with question counts
"""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.connection import StoreQueryFailedError
from src.infrastructure.database.models import BookSource, Question
from src.models.books import BookResponse, ChapterSummary

logger = logging.getLogger(__name__)


class BookServiceError(Exception):
    """Base exception for book catalog errors."""

    pass


class BookNotFoundError(BookServiceError):
    """Raised when a book code does not match any book."""

    pass


class BookService:
    """Read-only access to the book catalog.

    Questions reference their book by name, so chapter lookups first
    resolve the book code to a name.

    Attributes:
        db: Async session on the question store.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize book service.

        Args:
            db: Async session on the question store.
        """
        self.db = db

    async def list_books(self) -> list[BookResponse]:
        """List all official books ordered by name.

        Returns:
            List of books.

        Raises:
            StoreQueryFailedError: If the query fails.
        """
        query = select(BookSource).order_by(BookSource.name)

        try:
            result = await self.db.execute(query)
            books = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Error fetching books: %s", e)
            raise StoreQueryFailedError.from_error(e) from e

        return [BookResponse.model_validate(book) for book in books]

    async def get_book_by_code(self, book_code: str) -> BookSource:
        """Get a book by its code.

        Args:
            book_code: Short book code, e.g. "HCV".

        Returns:
            BookSource model instance.

        Raises:
            BookNotFoundError: If no book has this code.
            StoreQueryFailedError: If the query fails.
        """
        query = select(BookSource).where(BookSource.code == book_code)

        try:
            result = await self.db.execute(query)
            book = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Error fetching book %s: %s", book_code, e)
            raise StoreQueryFailedError.from_error(e) from e

        if not book:
            raise BookNotFoundError("Book not found")

        return book

    async def list_chapters(self, book_code: str) -> list[ChapterSummary]:
        """List the chapters of a book with their question counts.

        Args:
            book_code: Short book code.

        Returns:
            Chapters sorted by name. Empty if the book has no questions.

        Raises:
            BookNotFoundError: If no book has this code.
            StoreQueryFailedError: If the query fails.
        """
        book = await self.get_book_by_code(book_code)

        query = (
            select(Question.chapter_name, func.count().label("count"))
            .where(Question.book_source == book.name)
            .group_by(Question.chapter_name)
            .order_by(Question.chapter_name)
        )

        try:
            result = await self.db.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Error fetching chapters for %s: %s", book_code, e)
            raise StoreQueryFailedError.from_error(e) from e

        return [
            ChapterSummary(chapter_name=row.chapter_name, count=row.count)
            for row in rows
            if row.chapter_name
        ]
