# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Book catalog response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class BookResponse(BaseModel):
    """An official book."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    code: str
    created_at: datetime | None = None


class BookListResponse(BaseModel):
    """All official books ordered by name."""

    data: list[BookResponse]


class ChapterSummary(BaseModel):
    """A chapter and the number of questions it holds."""

    chapter_name: str
    count: int


class ChapterListResponse(BaseModel):
    """Chapters of a book ordered by name."""

    data: list[ChapterSummary]
