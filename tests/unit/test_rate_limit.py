# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for rate limiting helpers."""

import json
from unittest.mock import MagicMock

import pytest
from starlette.requests import Request

from src.api.middleware.rate_limit import (
    get_client_identifier,
    rate_limit_exceeded_handler,
)


def _request(host: str = "10.0.0.7") -> Request:
    return Request({
        "type": "http",
        "method": "GET",
        "path": "/api/v1/books",
        "headers": [],
        "client": (host, 51234),
    })


class TestClientIdentifier:
    """Tests for client identification."""

    def test_identifies_by_ip(self):
        """Test clients are keyed by remote address."""
        assert get_client_identifier(_request("192.168.1.20")) == "ip:192.168.1.20"


class TestRateLimitExceededHandler:
    """Tests for the 429 handler."""

    @pytest.mark.asyncio
    async def test_returns_429_with_retry_after(self):
        """Test the handler returns the error payload and retry header."""
        exc = MagicMock()
        exc.detail = "60 per 1 minute"
        exc.retry_after = 30

        response = await rate_limit_exceeded_handler(_request(), exc)

        assert response.status_code == 429
        assert json.loads(response.body) == {"error": "Too many requests. Please try again later."}
        assert response.headers["Retry-After"] == "30"
