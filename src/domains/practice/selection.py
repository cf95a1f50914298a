# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Question selection for practice sessions.

Turns a validated PracticeSessionConfig into the ordered list of question
IDs a session will use:

1. The book code is resolved to the book name questions are filed under.
2. Each selected chapter is queried on its own:
   - range mode keeps questions numbered start..end (inclusive)
   - quantity mode samples `count` questions at random
   Chapter results are always in book order.
3. The chapters are combined according to questionOrder:
   - sequential: chapter after chapter
   - interleaved: one question from each chapter in turn
   - shuffle: the whole set shuffled
"""

from __future__ import annotations

import logging
import random
from itertools import chain, zip_longest

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.books.service import BookService
from src.domains.practice.errors import NoMatchingQuestionsError, StoreQueryFailedError
from src.infrastructure.database.models import Question
from src.models.practice import (
    ChapterConfiguration,
    ChapterMode,
    ChapterQuestionsRequest,
    PracticeSessionConfig,
    QuestionOrder,
    QuestionSelection,
)

logger = logging.getLogger(__name__)

_GAP = object()


def order_questions(
    chapters: list[list[str]],
    order: QuestionOrder,
    rng: random.Random,
) -> list[str]:
    """Combine per-chapter question IDs into one session order.

    Args:
        chapters: Question IDs of each chapter, in configuration order.
        order: Ordering strategy.
        rng: Random source used by the shuffle strategy.

    Returns:
        A new list holding every ID exactly once.
    """
    if order == QuestionOrder.INTERLEAVED:
        return [
            question_id
            for question_id in chain.from_iterable(zip_longest(*chapters, fillvalue=_GAP))
            if question_id is not _GAP
        ]

    ordered = list(chain.from_iterable(chapters))
    if order == QuestionOrder.SHUFFLE:
        rng.shuffle(ordered)
    return ordered


class QuestionSelector:
    """Selects question IDs for chapters and whole sessions.

    Chapters are queried one after another on the same session.

    Attributes:
        db: Async session on the question store.
        rng: Random source for sampling and shuffling.
        books: Book catalog used to resolve book codes.
    """

    def __init__(self, db: AsyncSession, rng: random.Random | None = None) -> None:
        """Initialize the selector.

        Args:
            db: Async session on the question store.
            rng: Random source. A fresh unseeded Random is used if omitted.
        """
        self.db = db
        self.rng = rng or random.Random()
        self.books = BookService(db)

    async def select_chapter(
        self,
        book_name: str,
        chapter_name: str,
        chapter: ChapterConfiguration,
    ) -> list[str]:
        """Select question IDs from one chapter.

        Args:
            book_name: Book name questions are filed under.
            chapter_name: Chapter to select from.
            chapter: Validated selection rule.

        Returns:
            Selected IDs in book order. Empty if the chapter has no
            matching questions. Quantity mode returns fewer than `count`
            IDs when the chapter is smaller.

        Raises:
            StoreQueryFailedError: If the query fails.
        """
        query = select(Question.question_id, Question.question_number_in_book).where(
            Question.book_source == book_name,
            Question.chapter_name == chapter_name,
        )

        if chapter.mode == ChapterMode.RANGE:
            query = query.where(
                Question.question_number_in_book >= chapter.values.start,
                Question.question_number_in_book <= chapter.values.end,
            )

        query = query.order_by(Question.question_number_in_book, Question.id)

        try:
            result = await self.db.execute(query)
            rows = list(result.all())
        except SQLAlchemyError as e:
            logger.error("Error fetching questions for chapter %s: %s", chapter_name, e)
            raise StoreQueryFailedError.from_error(e) from e

        if chapter.mode == ChapterMode.QUANTITY and chapter.values.count is not None:
            count = min(chapter.values.count, len(rows))
            rows = sorted(
                self.rng.sample(rows, count),
                key=lambda row: row.question_number_in_book,
            )

        return [row.question_id for row in rows]

    async def chapter_question_ids(self, request: ChapterQuestionsRequest) -> list[str]:
        """Select question IDs for a single chapter of a book.

        Args:
            request: Validated chapter request.

        Returns:
            Selected IDs in book order.

        Raises:
            BookNotFoundError: If the book code is unknown.
            StoreQueryFailedError: If a query fails.
        """
        book = await self.books.get_book_by_code(request.book_code)
        return await self.select_chapter(book.name, request.chapter_name, request.chapter)

    async def build_selection(self, config: PracticeSessionConfig) -> QuestionSelection:
        """Select and order the questions of a whole practice session.

        Args:
            config: Validated session configuration.

        Returns:
            QuestionSelection in the configured order.

        Raises:
            BookNotFoundError: If the book code is unknown.
            StoreQueryFailedError: If a query fails.
            NoMatchingQuestionsError: If no chapter yielded any question.
        """
        book = await self.books.get_book_by_code(config.book_code)

        per_chapter: list[list[str]] = []
        for chapter_name, chapter in config.chapters.items():
            ids = await self.select_chapter(book.name, chapter_name, chapter)
            if not ids:
                logger.warning(
                    "No questions selected from chapter %s of %s", chapter_name, book.code
                )
            per_chapter.append(ids)

        question_ids = order_questions(per_chapter, config.question_order, self.rng)
        if not question_ids:
            raise NoMatchingQuestionsError("No questions found for the selected chapters")

        logger.info(
            "Built practice selection: book=%s, chapters=%d, requested=%d, "
            "questions=%d, order=%s",
            book.code,
            len(per_chapter),
            config.total_requested,
            len(question_ids),
            config.question_order.value,
        )

        return QuestionSelection(
            question_ids=question_ids,
            total_questions=len(question_ids),
            test_mode=config.test_mode,
            time_limit_in_minutes=config.time_limit_in_minutes,
            hide_metadata=config.hide_metadata,
        )
