# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Question resolution for practice sessions.

Given the question IDs chosen for a session, fetch the full question
records from the store in a single query, ordered by their number in the
book. Nothing is cached and nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.domains.practice.errors import NoMatchingQuestionsError, StoreQueryFailedError
from src.domains.practice.validation import validate_question_ids
from src.infrastructure.database.models import Question

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedQuestions:
    """Questions returned for one request.

    Attributes:
        questions: Records in ascending question_number_in_book order, ties
            broken by row id.
        total_questions: Number of records, always len(questions).
    """

    questions: list[Question]

    @property
    def total_questions(self) -> int:
        return len(self.questions)


class QuestionResolver:
    """Fetches question records by ID.

    The store returns at most one row per unique ID, so duplicate IDs in
    the request collapse, and the caller's order is replaced by book order.

    Attributes:
        db: Async session on the question store.
    """

    def __init__(self, db: AsyncSession) -> None:
        """Initialize the resolver.

        Args:
            db: Async session on the shared question store pool.
        """
        self.db = db

    async def resolve(self, question_ids: Any) -> ResolvedQuestions:
        """Fetch the questions for a list of IDs.

        Args:
            question_ids: The untrusted "questionIds" value of the request.

        Returns:
            ResolvedQuestions ordered by question_number_in_book.

        Raises:
            EmptyRequestError: If question_ids is missing, not a list, or
                empty. The store is not queried.
            InvalidConfigurationError: If an ID is not a string.
            StoreQueryFailedError: If the query fails.
            NoMatchingQuestionsError: If no question matches.
        """
        ids = validate_question_ids(question_ids)

        logger.info("Fetching %d questions for practice session", len(ids))

        query = (
            select(Question)
            .where(Question.question_id.in_(list(dict.fromkeys(ids))))
            .order_by(Question.question_number_in_book, Question.id)
        )

        try:
            result = await self.db.execute(query)
            questions = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Error fetching practice questions: %s", e)
            raise StoreQueryFailedError.from_error(e) from e

        if not questions:
            raise NoMatchingQuestionsError("No questions found")

        logger.info("Fetched %d questions for practice session", len(questions))

        return ResolvedQuestions(questions=questions)
