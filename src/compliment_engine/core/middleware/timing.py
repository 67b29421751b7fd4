"""Request timing middleware.

Stamps every response with ``X-Process-Time``. Requests that take longer than
the configured threshold are logged and counted per route template, so
``/saved/123`` and ``/saved/456`` share the ``/saved/{compliment_id}`` label.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from compliment_engine.observability.logging import get_logger
from compliment_engine.observability.metrics import slow_requests

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.responses import Response

logger = get_logger(__name__)

PROCESS_TIME_HEADER = "X-Process-Time"
DEFAULT_SLOW_THRESHOLD_SECONDS = 0.5
UNMATCHED_ROUTE = "unmatched"


def route_template(request: Request) -> str:
    """Path template of the matched route, or ``unmatched`` for 404s."""
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_ROUTE)


class TimingMiddleware(BaseHTTPMiddleware):
    """Time each request and report the slow ones."""

    def __init__(
        self,
        app: ASGIApp,
        slow_threshold: float = DEFAULT_SLOW_THRESHOLD_SECONDS,
    ) -> None:
        super().__init__(app)
        self.slow_threshold = slow_threshold

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        elapsed_ms = round(elapsed * 1000, 2)
        response.headers[PROCESS_TIME_HEADER] = f"{elapsed_ms}ms"

        if elapsed > self.slow_threshold:
            route = route_template(request)
            slow_requests.labels(method=request.method, route=route).inc()
            logger.warning(
                "Slow request",
                method=request.method,
                route=route,
                status_code=response.status_code,
                process_time_ms=elapsed_ms,
                threshold_ms=self.slow_threshold * 1000,
            )

        return response
