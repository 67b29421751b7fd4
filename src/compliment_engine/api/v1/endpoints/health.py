"""Health check endpoints.

Provides liveness and readiness probes for Kubernetes and load balancers.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from compliment_engine.api.dependencies import get_app_settings, get_store
from compliment_engine.core.config import Settings
from compliment_engine.schemas.health import HealthResponse, ReadinessResponse
from compliment_engine.storage import ResilientStore, check_redis_health


router = APIRouter(tags=["health"])

_OK_STATUSES = frozenset({"healthy", "not_initialized"})


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness probe",
    description="Basic health check to verify the service is running.",
)
async def health_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """Check if the service is alive without touching the store."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
        environment=settings.APP_ENV,
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    summary="Readiness probe",
    description="Readiness check verifying the key-value store is usable.",
)
async def readiness_check(
    settings: Annotated[Settings, Depends(get_app_settings)],
    store: Annotated[ResilientStore | None, Depends(get_store)],
) -> ReadinessResponse:
    """Report Redis reachability and whether store calls have been failing.

    The engine keeps serving when degraded; only the status changes.
    """
    dependencies: dict[str, str] = {"redis": await check_redis_health()}

    if store is None:
        dependencies["store"] = "not_initialized"
    else:
        dependencies["store"] = "degraded" if store.degraded else "healthy"

    all_healthy = all(status in _OK_STATUSES for status in dependencies.values())

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        version=settings.app.version,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
