# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Question bank models.

The question bank is owned and maintained outside this service; these
mappings are only used for reads.

Tables:
    book_sources: One row per official book (name and short code).
    questions: Questions, linked to their book by book name and numbered
        sequentially within the book.
"""

from typing import Any

from sqlalchemy import ARRAY, JSON, BigInteger, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.database.models.base import Base, TimestampMixin


class BookSource(Base, TimestampMixin):
    """An official book that questions are drawn from."""

    __tablename__ = "book_sources"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<BookSource(code={self.code!r}, name={self.name!r})>"


class Question(Base, TimestampMixin):
    """A single question in the bank.

    Attributes:
        question_id: Public string identifier used by clients.
        book_source: Name of the owning book (BookSource.name).
        chapter_name: Chapter the question belongs to.
        question_number_in_book: Sequential number within the book.
        options: Answer options as stored JSON.
        difficulty: One of Easy, Easy-Moderate, Moderate, Moderate-Hard, Hard.
    """

    __tablename__ = "questions"

    id: Mapped[int] = mapped_column(BigInteger, primary_key=True)
    question_id: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    book_source: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    chapter_name: Mapped[str] = mapped_column(String(255), nullable=False)
    question_number_in_book: Mapped[int] = mapped_column(Integer, nullable=False)
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    options: Mapped[Any] = mapped_column(JSON, nullable=False)
    correct_option: Mapped[str] = mapped_column(String(16), nullable=False)
    solution_text: Mapped[str | None] = mapped_column(Text)
    exam_metadata: Mapped[str | None] = mapped_column(Text)
    admin_tags: Mapped[list[str] | None] = mapped_column(ARRAY(Text))
    difficulty: Mapped[str | None] = mapped_column(String(32))

    def __repr__(self) -> str:
        return (
            f"<Question(question_id={self.question_id!r}, "
            f"number={self.question_number_in_book})>"
        )
