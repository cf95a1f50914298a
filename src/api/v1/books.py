# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Book catalog API endpoints.

This module provides endpoints for browsing the question bank:
- GET /books - List official books
- GET /chapters?bookCode=... - List the chapters of a book with question counts
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_book_service
from src.domains.books.service import BookService
from src.domains.practice.errors import InvalidConfigurationError
from src.models.books import BookListResponse, ChapterListResponse
from src.models.practice import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/books",
    response_model=BookListResponse,
    responses={500: {"model": ErrorResponse}},
    summary="List books",
    description="List all official books ordered by name.",
)
async def list_books(
    service: BookService = Depends(get_book_service),
) -> BookListResponse:
    """List all official books.

    Args:
        service: Book service.

    Returns:
        BookListResponse ordered by name.
    """
    return BookListResponse(data=await service.list_books())


@router.get(
    "/chapters",
    response_model=ChapterListResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    summary="List chapters",
    description="List the chapters of a book with the number of questions in each.",
)
async def list_chapters(
    book_code: Annotated[str | None, Query(alias="bookCode", description="Book code")] = None,
    service: BookService = Depends(get_book_service),
) -> ChapterListResponse:
    """List the chapters of a book.

    Args:
        book_code: Short code of the book.
        service: Book service.

    Returns:
        ChapterListResponse sorted by chapter name.

    Raises:
        InvalidConfigurationError: If bookCode is missing.
    """
    if not book_code:
        raise InvalidConfigurationError("Book code is required")

    chapters = await service.list_chapters(book_code)

    logger.debug("Listed %d chapters for book %s", len(chapters), book_code)

    return ChapterListResponse(data=chapters)
