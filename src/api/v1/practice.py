# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Practice session API endpoints.

This module provides endpoints for practice sessions:
- POST /questions - Fetch the questions for a list of question IDs
- POST /sessions - Validate a session configuration and select its questions
- POST /chapter-questions - Select question IDs from a single chapter

Request bodies are accepted as raw JSON and shape-checked by the practice
domain validators, so malformed input is reported with a specific reason.

Example:
    POST /api/v1/practice/sessions
    {
        "bookCode": "HCV",
        "chapters": {
            "Kinematics": {"selected": true, "mode": "range", "values": {"start": 1, "end": 10}},
            "Optics": {"selected": true, "mode": "quantity", "values": {"count": 5}}
        },
        "questionOrder": "interleaved",
        "testMode": "timed",
        "timeLimitInMinutes": 30
    }
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends

from src.api.dependencies import get_question_resolver, get_question_selector
from src.domains.practice.resolver import QuestionResolver
from src.domains.practice.selection import QuestionSelector
from src.domains.practice.validation import (
    validate_chapter_request,
    validate_session_config,
)
from src.models.practice import (
    ErrorResponse,
    QuestionIdListResponse,
    QuestionListResponse,
    QuestionRecord,
    QuestionSelection,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    404: {"model": ErrorResponse, "description": "Nothing found"},
    500: {"model": ErrorResponse, "description": "Store or internal failure"},
}


@router.post(
    "/questions",
    response_model=QuestionListResponse,
    responses=_ERROR_RESPONSES,
    summary="Get practice questions",
    description="Fetch the question records for a list of question IDs, ordered by their number in the book.",
)
async def get_practice_questions(
    payload: Annotated[Any, Body()],
    resolver: QuestionResolver = Depends(get_question_resolver),
) -> QuestionListResponse:
    """Fetch the questions of a practice session.

    Args:
        payload: JSON body of the form {"questionIds": [...]}.
        resolver: Question resolver.

    Returns:
        QuestionListResponse with the matching records.
    """
    question_ids = payload.get("questionIds") if isinstance(payload, dict) else None

    resolved = await resolver.resolve(question_ids)

    return QuestionListResponse(
        data=[QuestionRecord.model_validate(question) for question in resolved.questions]
    )


@router.post(
    "/sessions",
    response_model=QuestionSelection,
    responses=_ERROR_RESPONSES,
    summary="Build practice session",
    description="Validate a practice session configuration and select its ordered question IDs.",
)
async def build_practice_session(
    payload: Annotated[Any, Body()],
    selector: QuestionSelector = Depends(get_question_selector),
) -> QuestionSelection:
    """Build the question selection for a practice session.

    Args:
        payload: Practice session configuration.
        selector: Question selector.

    Returns:
        QuestionSelection with the ordered question IDs.
    """
    config = validate_session_config(payload)

    logger.info(
        "Building practice session: book=%s, chapters=%d, order=%s, mode=%s",
        config.book_code,
        len(config.chapters),
        config.question_order.value,
        config.test_mode.value,
    )

    return await selector.build_selection(config)


@router.post(
    "/chapter-questions",
    response_model=QuestionIdListResponse,
    responses=_ERROR_RESPONSES,
    summary="Select chapter questions",
    description="Select question IDs from one chapter by number range or random quantity.",
)
async def select_chapter_questions(
    payload: Annotated[Any, Body()],
    selector: QuestionSelector = Depends(get_question_selector),
) -> QuestionIdListResponse:
    """Select question IDs from a single chapter.

    Args:
        payload: JSON body with bookCode, chapterName, mode and values.
        selector: Question selector.

    Returns:
        QuestionIdListResponse, empty if the chapter has no match.
    """
    request = validate_chapter_request(payload)

    question_ids = await selector.chapter_question_ids(request)

    return QuestionIdListResponse(data=question_ids)
