# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Practice session data models.

Wire names are camelCase (bookCode, questionIds, ...) to match the web
client; Python attribute names are snake_case. Models accept either form.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ChapterMode(str, Enum):
    """How questions are picked from a chapter."""

    RANGE = "range"
    QUANTITY = "quantity"


class QuestionOrder(str, Enum):
    """How the selected questions of all chapters are ordered."""

    SHUFFLE = "shuffle"
    INTERLEAVED = "interleaved"
    SEQUENTIAL = "sequential"


class TestMode(str, Enum):
    """Whether the session is untimed practice or a timed test."""

    __test__ = False

    PRACTICE = "practice"
    TIMED = "timed"


class ChapterValues(BaseModel):
    """Selection values for one chapter.

    Range mode uses start/end (inclusive question numbers within the book),
    quantity mode uses count.
    """

    start: int | None = None
    end: int | None = None
    count: int | None = None


class ChapterConfiguration(BaseModel):
    """Selection rule for a single chapter."""

    selected: bool = False
    mode: ChapterMode = ChapterMode.QUANTITY
    values: ChapterValues = Field(default_factory=ChapterValues)

    @property
    def requested_count(self) -> int:
        """Number of questions this rule asks for (upper bound for range mode)."""
        if self.mode == ChapterMode.RANGE:
            start = self.values.start or 1
            end = self.values.end or 1
            return max(0, end - start + 1)
        return self.values.count or 0


class PracticeSessionConfig(BaseModel):
    """Validated practice session configuration.

    Instances are produced by validate_session_config(); only selected
    chapters are kept, in the order the client sent them.
    """

    model_config = ConfigDict(populate_by_name=True)

    book_code: str = Field(alias="bookCode", min_length=1)
    chapters: dict[str, ChapterConfiguration]
    question_order: QuestionOrder = Field(
        default=QuestionOrder.SEQUENTIAL, alias="questionOrder"
    )
    test_mode: TestMode = Field(default=TestMode.PRACTICE, alias="testMode")
    time_limit_in_minutes: int | None = Field(default=None, alias="timeLimitInMinutes")
    hide_metadata: bool = Field(default=False, alias="hideMetadata")

    @property
    def total_requested(self) -> int:
        """Sum of requested questions over all chapters."""
        return sum(chapter.requested_count for chapter in self.chapters.values())


class QuestionSelection(BaseModel):
    """Ordered question identifiers for a practice session."""

    model_config = ConfigDict(populate_by_name=True)

    question_ids: list[str] = Field(alias="questionIds")
    total_questions: int = Field(alias="totalQuestions")
    test_mode: TestMode = Field(default=TestMode.PRACTICE, alias="testMode")
    time_limit_in_minutes: int | None = Field(default=None, alias="timeLimitInMinutes")
    hide_metadata: bool = Field(default=False, alias="hideMetadata")

    @model_validator(mode="after")
    def check_total(self) -> Self:
        """Ensure total_questions matches the number of identifiers."""
        if self.total_questions != len(self.question_ids):
            raise ValueError(
                f"totalQuestions ({self.total_questions}) does not match "
                f"the number of question IDs ({len(self.question_ids)})"
            )
        return self


class ChapterQuestionsRequest(BaseModel):
    """Validated request for the question IDs of a single chapter."""

    model_config = ConfigDict(populate_by_name=True)

    book_code: str = Field(alias="bookCode", min_length=1)
    chapter_name: str = Field(alias="chapterName", min_length=1)
    chapter: ChapterConfiguration


class QuestionRecord(BaseModel):
    """A question as stored in the question bank."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    question_id: str
    book_source: str
    chapter_name: str
    question_number_in_book: int
    question_text: str
    options: Any
    correct_option: str
    solution_text: str | None = None
    exam_metadata: str | None = None
    admin_tags: list[str] | None = None
    difficulty: str | None = None
    created_at: datetime | None = None


class QuestionListResponse(BaseModel):
    """Questions fetched for a practice session."""

    data: list[QuestionRecord]


class QuestionIdListResponse(BaseModel):
    """Question identifiers selected from one chapter."""

    data: list[str]


class ErrorResponse(BaseModel):
    """Error payload returned by every failing endpoint."""

    error: str = Field(description="Explanatory message")
    kind: str | None = Field(default=None, description="Validation failure kind")
