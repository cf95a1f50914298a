# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API middleware components.

This package provides middleware for request processing:
- RequestContextMiddleware: Binds a request ID to the logging context.
- MetricsMiddleware: Records Prometheus request metrics.
- limiter: slowapi rate limiter shared by all routes.

Exports:
    MetricsMiddleware: Prometheus request metrics middleware.
    RequestContextMiddleware: Request ID middleware.
    limiter: Rate limiter instance.
    rate_limit_exceeded_handler: 429 response handler.
"""

from src.api.middleware.metrics import MetricsMiddleware
from src.api.middleware.rate_limit import limiter, rate_limit_exceeded_handler
from src.api.middleware.request_context import RequestContextMiddleware

__all__ = [
    "MetricsMiddleware",
    "RequestContextMiddleware",
    "limiter",
    "rate_limit_exceeded_handler",
]
