# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Prometheus metrics middleware.

Records request counts and latencies per route template, so
/api/v1/chapters?bookCode=HCV and ?bookCode=IRO share one series.

Metrics Collected:
- practice_portal_http_requests_total: Requests by method, route, status
- practice_portal_http_request_duration_seconds: Latency histogram by route
"""

import time
from typing import Callable

from fastapi import Request, Response
from prometheus_client import Counter, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

NAMESPACE = "practice_portal"

REQUESTS_TOTAL = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "route", "status"],
    namespace=NAMESPACE,
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "route"],
    namespace=NAMESPACE,
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)


def _route_label(request: Request) -> str:
    """Return the full route template of a matched request.

    Included routers may store their path relative to the prefix, so the
    template is rebuilt from the request path by putting each path
    parameter back in place of its value.
    """
    if request.scope.get("route") is None:
        return "unmatched"

    path = request.url.path

    params = {str(value): name for name, value in request.path_params.items()}
    if not params:
        return path
    return "/".join(
        f"{{{params[segment]}}}" if segment in params else segment
        for segment in path.split("/")
    )


class MetricsMiddleware(BaseHTTPMiddleware):
    """Collect per-route request metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            route = _route_label(request)
            REQUESTS_TOTAL.labels(request.method, route, str(status_code)).inc()
            REQUEST_DURATION.labels(request.method, route).observe(
                time.perf_counter() - start
            )
