"""Observability components: logging and metrics."""

from compliment_engine.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    get_logger,
    logger,
    setup_logging,
    unbind_context,
)
from compliment_engine.observability.metrics import (
    compliments_generated,
    setup_metrics,
    store_errors,
)


__all__ = [
    "bind_context",
    "clear_context",
    "compliments_generated",
    "get_context",
    "get_logger",
    "logger",
    "setup_logging",
    "setup_metrics",
    "store_errors",
    "unbind_context",
]
