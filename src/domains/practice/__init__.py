# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Practice domain services.

This package turns a practice session configuration into questions:
- validation: shape-checks and normalizes session configurations
- selection: picks and orders question IDs for the selected chapters
- resolver: fetches the question records for a list of IDs
"""

from src.domains.practice.resolver import QuestionResolver, ResolvedQuestions
from src.domains.practice.selection import QuestionSelector, order_questions
from src.domains.practice.validation import (
    validate_chapter_request,
    validate_question_ids,
    validate_session_config,
)

__all__ = [
    "QuestionResolver",
    "ResolvedQuestions",
    "QuestionSelector",
    "order_questions",
    "validate_session_config",
    "validate_chapter_request",
    "validate_question_ids",
]
