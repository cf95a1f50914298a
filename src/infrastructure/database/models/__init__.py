# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models for the question store."""

from src.infrastructure.database.models.base import Base, TimestampMixin
from src.infrastructure.database.models.question import BookSource, Question

__all__ = [
    "Base",
    "TimestampMixin",
    "BookSource",
    "Question",
]
