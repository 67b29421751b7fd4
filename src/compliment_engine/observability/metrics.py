"""Prometheus metrics.

This module provides:
- Engine counters (compliment sources, store failures, slow requests)
- FastAPI request instrumentation and the /metrics endpoint
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from compliment_engine.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from compliment_engine.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "compliment_engine"

compliments_generated = Counter(
    "compliments_generated_total",
    "Compliments returned, by where they came from",
    ["source"],
    namespace=METRIC_NAMESPACE,
)

store_errors = Counter(
    "compliment_store_errors_total",
    "Key-value store operations that failed",
    ["operation"],
    namespace=METRIC_NAMESPACE,
)

slow_requests = Counter(
    "http_slow_requests_total",
    "Requests slower than the configured threshold",
    ["method", "route"],
    namespace=METRIC_NAMESPACE,
)


def setup_metrics(app: FastAPI, settings: Settings) -> Instrumentator:
    """Instrument HTTP requests and expose the metrics endpoint.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.

    Returns:
        The Instrumentator (not attached when metrics are disabled).
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return Instrumentator()

    prefix = settings.api.v1_prefix

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
        ],
    )
    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
        )
    )
    instrumentator.instrument(app)

    endpoint = f"{prefix}/metrics"
    instrumentator.expose(app, endpoint=endpoint, tags=["Monitoring"])

    logger.info("Prometheus metrics configured", endpoint=endpoint)
    return instrumentator


__all__ = ["compliments_generated", "setup_metrics", "slow_requests", "store_errors"]
