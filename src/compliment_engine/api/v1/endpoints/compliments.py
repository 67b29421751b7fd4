"""Compliment generation endpoints.

Provides:
- POST /compliments/generate for a new compliment
- GET /compliments/stats for cache statistics
- DELETE /compliments/cache for clearing the compliment cache
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from compliment_engine.api.dependencies import get_compliment_generator
from compliment_engine.core.exceptions import ServiceUnavailableException
from compliment_engine.observability.logging import get_logger
from compliment_engine.schemas.compliment import (
    CacheClearResponse,
    ComplimentStatsResponse,
    GenerateComplimentRequest,
    GenerateComplimentResponse,
)
from compliment_engine.services.compliments import ComplimentGenerator


logger = get_logger(__name__)

router = APIRouter(prefix="/compliments", tags=["Compliments"])

GeneratorDep = Annotated[ComplimentGenerator, Depends(get_compliment_generator)]


@router.post(
    "/generate",
    response_model=GenerateComplimentResponse,
    summary="Generate a compliment",
    description=(
        "Returns a compliment for the requested type and specificity, preferring "
        "cached compliments that were not shown recently. Never fails because "
        "of storage problems."
    ),
)
async def generate_compliment(
    request: GenerateComplimentRequest,
    generator: GeneratorDep,
) -> GenerateComplimentResponse:
    """Generate one compliment, optionally addressed to a recipient."""
    compliment = await generator.generate_compliment(
        compliment_type=request.type,
        specificity=request.specificity,
        recipient_name=request.recipient_name,
        work_safe=request.work_safe,
    )
    return GenerateComplimentResponse(
        compliment=compliment,
        type=request.type,
        specificity=request.specificity,
        work_safe=request.work_safe,
    )


@router.get(
    "/stats",
    response_model=ComplimentStatsResponse,
    summary="Compliment cache statistics",
)
async def get_compliment_stats(generator: GeneratorDep) -> ComplimentStatsResponse:
    """Count cached keys and compliments, expired entries included."""
    stats = await generator.get_compliment_stats()
    return ComplimentStatsResponse(
        cached_types=stats.cached_types,
        total_cached_compliments=stats.total_cached_compliments,
    )


@router.delete(
    "/cache",
    response_model=CacheClearResponse,
    summary="Clear the compliment cache",
    responses={
        503: {
            "description": "Store unavailable",
            "content": {
                "application/json": {
                    "example": {
                        "error": "SERVICE_UNAVAILABLE",
                        "message": "Compliment cache could not be cleared",
                    }
                }
            },
        },
    },
)
async def clear_compliment_cache(generator: GeneratorDep) -> CacheClearResponse:
    """Remove every cached compliment."""
    logger.info("Compliment cache clear requested")

    if not await generator.clear_compliment_cache():
        raise ServiceUnavailableException("Compliment cache could not be cleared")

    return CacheClearResponse(message="Compliment cache cleared")
