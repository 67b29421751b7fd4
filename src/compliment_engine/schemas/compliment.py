"""Compliment generation and cache maintenance schemas."""

from __future__ import annotations

from pydantic import Field

from compliment_engine.schemas.base import APIRequest, APIResponse
from compliment_engine.schemas.enums import ComplimentType, SpecificityLevel


class GenerateComplimentRequest(APIRequest):
    """Request body for generating a compliment."""

    type: ComplimentType = Field(
        default=ComplimentType.RANDOM,
        description="Template category",
    )
    specificity: SpecificityLevel = Field(
        default=SpecificityLevel.MEDIUM,
        description="How strongly the compliment is intensified",
    )
    recipient_name: str | None = Field(
        default=None,
        max_length=100,
        description="Name to address the compliment to",
        examples=["Sam"],
    )
    work_safe: bool = Field(default=True, description="Work-appropriate only")


class GenerateComplimentResponse(APIResponse):
    """A generated compliment with the context it was generated for."""

    compliment: str = Field(
        ...,
        description="Compliment text",
        examples=["Your ability to focus is like noise-canceling headphones."],
    )
    type: ComplimentType
    specificity: SpecificityLevel
    work_safe: bool


class ComplimentStatsResponse(APIResponse):
    """Cache statistics."""

    cached_types: int = Field(..., description="Number of cache keys stored")
    total_cached_compliments: int = Field(
        ..., description="Compliments stored across all keys"
    )


class CacheClearResponse(APIResponse):
    """Response model for cache clear operation."""

    message: str = Field(
        ...,
        description="Success message",
        examples=["Compliment cache cleared"],
    )
