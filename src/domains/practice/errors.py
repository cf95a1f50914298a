# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Practice domain exceptions.

Every failure is terminal for the request. The API layer maps:
- PracticeValidationError -> 400
- NoMatchingQuestionsError -> 404
- StoreQueryFailedError -> 500
"""

from src.infrastructure.database.connection import StoreQueryFailedError


class PracticeServiceError(Exception):
    """Base exception for practice domain errors."""

    pass


class PracticeValidationError(PracticeServiceError):
    """Client input was malformed or incomplete.

    Attributes:
        kind: Stable identifier of the failure, e.g. "InvalidRange".
        message: Human-readable explanation.
    """

    kind = "ValidationError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidConfigurationError(PracticeValidationError):
    """Raised when the request does not have the expected shape."""

    kind = "InvalidConfiguration"


class NoChaptersSelectedError(PracticeValidationError):
    """Raised when no chapter is selected."""

    kind = "NoChaptersSelected"


class InvalidRangeError(PracticeValidationError):
    """Raised when a range is missing, non-positive, or reversed."""

    kind = "InvalidRange"


class InvalidQuantityError(PracticeValidationError):
    """Raised when a question count is missing or non-positive."""

    kind = "InvalidQuantity"


class MissingTimeLimitError(PracticeValidationError):
    """Raised when a timed session has no positive time limit."""

    kind = "MissingTimeLimit"


class EmptyRequestError(PracticeValidationError):
    """Raised when no question IDs were supplied."""

    kind = "EmptyRequest"


class NoMatchingQuestionsError(PracticeServiceError):
    """Raised when the store returned no questions for the request."""

    pass


__all__ = [
    "PracticeServiceError",
    "PracticeValidationError",
    "InvalidConfigurationError",
    "NoChaptersSelectedError",
    "InvalidRangeError",
    "InvalidQuantityError",
    "MissingTimeLimitError",
    "EmptyRequestError",
    "NoMatchingQuestionsError",
    "StoreQueryFailedError",
]
