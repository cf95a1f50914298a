# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for the practice portal.

This package contains domain services that encapsulate business logic.

Domains:
    books: Book and chapter catalog.
    practice: Session configuration validation, question selection and
        question retrieval.
"""
