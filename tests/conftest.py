# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests (mocked store sessions)
- Integration tests (FastAPI app with overridden dependencies)
"""

import os
from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import pytest

# Settings are read once at import time by the rate limiter
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("ENVIRONMENT", "development")

from src.infrastructure.database.models import BookSource, Question  # noqa: E402


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an API test against the app"
    )


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def mock_db():
    """Create mock database session."""
    db = AsyncMock()
    db.execute = AsyncMock()
    return db


@pytest.fixture
def sample_book() -> BookSource:
    """Provide a sample book."""
    return BookSource(id=1, name="HC Verma Vol 1", code="HCV")


@pytest.fixture
def make_question() -> Callable[..., Question]:
    """Provide a factory for question records."""

    def _make(question_id: str, number: int, chapter: str = "Kinematics") -> Question:
        return Question(
            id=number,
            question_id=question_id,
            book_source="HC Verma Vol 1",
            chapter_name=chapter,
            question_number_in_book=number,
            question_text=f"Question {question_id}?",
            options={"A": "1", "B": "2", "C": "3", "D": "4"},
            correct_option="A",
            solution_text=None,
            exam_metadata=None,
            admin_tags=["mechanics"],
            difficulty="Moderate",
        )

    return _make


@pytest.fixture
def sample_session_config() -> dict[str, Any]:
    """Provide a raw practice session configuration."""
    return {
        "bookCode": "HCV",
        "chapters": {
            "Kinematics": {"selected": True, "mode": "range", "values": {"start": 1, "end": 3}},
            "Optics": {"selected": True, "mode": "quantity", "values": {"count": 2}},
            "Waves": {"selected": False, "mode": "quantity", "values": {"count": 0}},
        },
        "questionOrder": "sequential",
        "testMode": "practice",
    }
