# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request context middleware.

Binds a request ID, method and path to the structlog context for the
duration of each request and echoes the ID in the X-Request-ID header.
A client-supplied X-Request-ID is reused.
"""

import logging
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from src.utils.logging import bind_context, clear_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to logs and responses."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Bind request context, call the next handler, then clear it.

        Args:
            request: Incoming request.
            call_next: Next handler in the chain.

        Returns:
            The downstream response with X-Request-ID set.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id

        bind_context(request_id=request_id, method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        finally:
            clear_context()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
