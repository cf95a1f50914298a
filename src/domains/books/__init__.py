# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Book catalog domain services."""

from src.domains.books.service import BookNotFoundError, BookService, BookServiceError

__all__ = ["BookService", "BookServiceError", "BookNotFoundError"]
