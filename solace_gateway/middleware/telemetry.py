"""Telemetry middleware for request instrumentation."""

from __future__ import annotations

import time
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

from solace_gateway.telemetry import observe_request


class TelemetryMiddleware(BaseHTTPMiddleware):
    """Collect per-route request counts and latencies for Prometheus."""

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start_time = time.perf_counter()
        method = request.method

        try:
            response = await call_next(request)
        except Exception:
            observe_request(method, self._resolve_route(request), 500, time.perf_counter() - start_time)
            raise

        # The route is only resolved once routing has run inside call_next.
        route = self._resolve_route(request)
        observe_request(method, route, response.status_code, time.perf_counter() - start_time)
        return response

    @staticmethod
    def _resolve_route(request: Request) -> str:
        """Return the route template when known so path parameters stay low-cardinality."""

        scope_route: Any = request.scope.get("route")
        if scope_route is not None:
            path = getattr(scope_route, "path", None)
            if path:
                return path

        return request.url.path
