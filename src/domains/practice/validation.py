# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Practice session configuration validation.

Request bodies arrive as untyped JSON. The functions here check the shape
of every field before trusting it and return normalized models:
- Unselected chapters are dropped.
- Numeric values are coerced to int (ints, integral floats and numeric
  strings are accepted, booleans are not).
- The time limit is kept only for timed sessions.

All functions are pure and raise a PracticeValidationError subclass on
the first problem found.

Example:
    >>> config = validate_session_config({
    ...     "bookCode": "HCV",
    ...     "chapters": {
    ...         "Kinematics": {"selected": True, "mode": "range", "values": {"start": 1, "end": 10}},
    ...     },
    ...     "questionOrder": "shuffle",
    ...     "testMode": "practice",
    ... })
    >>> config.total_requested
    10
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

from src.domains.practice.errors import (
    EmptyRequestError,
    InvalidConfigurationError,
    InvalidQuantityError,
    InvalidRangeError,
    MissingTimeLimitError,
    NoChaptersSelectedError,
)
from src.models.practice import (
    ChapterConfiguration,
    ChapterMode,
    ChapterQuestionsRequest,
    ChapterValues,
    PracticeSessionConfig,
    QuestionOrder,
    TestMode,
)

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


# Largest value the store's INTEGER columns accept
MAX_INT = 2**31 - 1


def _coerce_int(value: Any) -> int | None:
    """Coerce a JSON value to int, or return None if it is not numeric.

    Values outside the store's INTEGER range count as not numeric.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number = value
    elif isinstance(value, float) and value.is_integer():
        number = int(value)
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if abs(number) <= MAX_INT else None


def _parse_enum(raw: Mapping[str, Any], key: str, enum_cls: type[E], default: E | None) -> E:
    value = raw.get(key)
    if value is None:
        if default is None:
            raise InvalidConfigurationError(f"'{key}' is required")
        return default

    allowed = ", ".join(member.value for member in enum_cls)
    if not isinstance(value, str):
        raise InvalidConfigurationError(f"'{key}' must be one of: {allowed}")
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidConfigurationError(f"'{key}' must be one of: {allowed}") from None


def _require_text(raw: Mapping[str, Any], key: str, message: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        raise InvalidConfigurationError(message)
    return value.strip()


def validate_chapter(name: str, raw: Mapping[str, Any]) -> ChapterConfiguration:
    """Validate the selection rule of one selected chapter.

    Args:
        name: Chapter name, used in error messages.
        raw: Untyped chapter rule with "mode" and "values".

    Returns:
        Normalized ChapterConfiguration with selected=True and only the
        values the mode uses.

    Raises:
        InvalidConfigurationError: If mode is missing or unknown.
        InvalidRangeError: If range values are missing, non-positive, or
            start is after end.
        InvalidQuantityError: If the count is missing or non-positive.
    """
    mode = _parse_enum(raw, "mode", ChapterMode, None)

    values = raw.get("values")
    if values is None:
        values = {}
    if not isinstance(values, Mapping):
        raise InvalidConfigurationError(f"Chapter '{name}': 'values' must be an object")

    if mode == ChapterMode.RANGE:
        start = _coerce_int(values.get("start"))
        end = _coerce_int(values.get("end"))
        if start is None or end is None:
            raise InvalidRangeError(f"Chapter '{name}': range needs numeric start and end")
        if start < 1 or end < 1:
            raise InvalidRangeError(f"Chapter '{name}': start and end must be positive")
        if start > end:
            raise InvalidRangeError(
                f"Chapter '{name}': start ({start}) must not be greater than end ({end})"
            )
        return ChapterConfiguration(
            selected=True,
            mode=mode,
            values=ChapterValues(start=start, end=end),
        )

    count = _coerce_int(values.get("count"))
    if count is None or count < 1:
        raise InvalidQuantityError(f"Chapter '{name}': count must be a positive integer")
    return ChapterConfiguration(
        selected=True,
        mode=mode,
        values=ChapterValues(count=count),
    )


def validate_session_config(raw: Any) -> PracticeSessionConfig:
    """Validate and normalize a practice session configuration.

    Args:
        raw: Decoded JSON body.

    Returns:
        PracticeSessionConfig holding only the selected chapters.

    Raises:
        InvalidConfigurationError: If the body or a field has the wrong shape.
        NoChaptersSelectedError: If no chapter is selected.
        InvalidRangeError: If a range chapter has invalid bounds.
        InvalidQuantityError: If a quantity chapter has an invalid count.
        MissingTimeLimitError: If a timed session has no positive time limit.
    """
    if not isinstance(raw, Mapping):
        raise InvalidConfigurationError("Session configuration must be a JSON object")

    book_code = _require_text(raw, "bookCode", "'bookCode' must be a non-empty string")

    raw_chapters = raw.get("chapters")
    if raw_chapters is None:
        raw_chapters = {}
    if not isinstance(raw_chapters, Mapping):
        raise InvalidConfigurationError("'chapters' must be an object keyed by chapter name")

    chapters: dict[str, ChapterConfiguration] = {}
    for name, rule in raw_chapters.items():
        if not isinstance(rule, Mapping):
            raise InvalidConfigurationError(f"Chapter '{name}' must be an object")
        selected = rule.get("selected", False)
        if not isinstance(selected, bool):
            raise InvalidConfigurationError(f"Chapter '{name}': 'selected' must be a boolean")
        if selected:
            chapters[name] = validate_chapter(name, rule)

    if not chapters:
        raise NoChaptersSelectedError("Select at least one chapter to start a practice session")

    question_order = _parse_enum(raw, "questionOrder", QuestionOrder, QuestionOrder.SEQUENTIAL)
    test_mode = _parse_enum(raw, "testMode", TestMode, TestMode.PRACTICE)

    time_limit = None
    if test_mode == TestMode.TIMED:
        time_limit = _coerce_int(raw.get("timeLimitInMinutes"))
        if time_limit is None or time_limit < 1:
            raise MissingTimeLimitError("Timed sessions need a positive 'timeLimitInMinutes'")

    hide_metadata = raw.get("hideMetadata", False)
    if not isinstance(hide_metadata, bool):
        raise InvalidConfigurationError("'hideMetadata' must be a boolean")

    config = PracticeSessionConfig(
        book_code=book_code,
        chapters=chapters,
        question_order=question_order,
        test_mode=test_mode,
        time_limit_in_minutes=time_limit,
        hide_metadata=hide_metadata,
    )

    logger.debug(
        "Validated session config: book=%s, chapters=%d, order=%s, mode=%s",
        config.book_code,
        len(config.chapters),
        config.question_order.value,
        config.test_mode.value,
    )

    return config


def validate_chapter_request(raw: Any) -> ChapterQuestionsRequest:
    """Validate a request for the question IDs of one chapter.

    Args:
        raw: Decoded JSON body with bookCode, chapterName, mode and values.

    Returns:
        ChapterQuestionsRequest with a normalized chapter rule.

    Raises:
        InvalidConfigurationError: If book code or chapter name is missing.
        InvalidRangeError: If range values are invalid.
        InvalidQuantityError: If the count is invalid.
    """
    if not isinstance(raw, Mapping):
        raise InvalidConfigurationError("Request body must be a JSON object")

    message = "Book code and chapter name are required"
    book_code = _require_text(raw, "bookCode", message)
    chapter_name = _require_text(raw, "chapterName", message)

    return ChapterQuestionsRequest(
        book_code=book_code,
        chapter_name=chapter_name,
        chapter=validate_chapter(chapter_name, raw),
    )


def validate_question_ids(value: Any) -> list[str]:
    """Check that a value is a non-empty list of question ID strings.

    Args:
        value: The "questionIds" field of a request body.

    Returns:
        The identifiers as a list, in the order given.

    Raises:
        EmptyRequestError: If the value is missing, not a list, or empty.
        InvalidConfigurationError: If any member is not a non-empty string.
    """
    if not isinstance(value, list) or not value:
        raise EmptyRequestError("Question IDs are required")

    for item in value:
        if not isinstance(item, str) or not item:
            raise InvalidConfigurationError("Question IDs must be non-empty strings")

    return list(value)
