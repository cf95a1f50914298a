"""Practice Portal Backend.

Practice session API for a student learning portal: validates session
configurations, selects questions from a book's chapters and serves the
question records from the question store.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
