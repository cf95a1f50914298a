# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the practice portal API.

Settings are Pydantic models loaded from environment variables and an
optional .env file.

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.store.url)
"""

from src.core.config.settings import (
    CORSSettings,
    RateLimitSettings,
    Settings,
    StoreSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "StoreSettings",
    "RateLimitSettings",
    "CORSSettings",
]
