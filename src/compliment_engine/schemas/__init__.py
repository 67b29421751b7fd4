"""Pydantic schemas for request/response validation."""

from compliment_engine.schemas.base import APIRequest, APIResponse
from compliment_engine.schemas.compliment import (
    CacheClearResponse,
    ComplimentStatsResponse,
    GenerateComplimentRequest,
    GenerateComplimentResponse,
)
from compliment_engine.schemas.enums import (
    ComplimentSource,
    ComplimentType,
    SpecificityLevel,
)
from compliment_engine.schemas.favorites import (
    CategoriesResponse,
    CategoryRequest,
    HistoryResponse,
    PreferencesResponse,
    SavedComplimentListResponse,
    SavedComplimentResponse,
    SaveComplimentRequest,
    UpdatePreferencesRequest,
)
from compliment_engine.schemas.health import HealthResponse, ReadinessResponse


__all__ = [
    "APIRequest",
    "APIResponse",
    "CacheClearResponse",
    "CategoriesResponse",
    "CategoryRequest",
    "ComplimentSource",
    "ComplimentStatsResponse",
    "ComplimentType",
    "GenerateComplimentRequest",
    "GenerateComplimentResponse",
    "HealthResponse",
    "HistoryResponse",
    "PreferencesResponse",
    "ReadinessResponse",
    "SaveComplimentRequest",
    "SavedComplimentListResponse",
    "SavedComplimentResponse",
    "SpecificityLevel",
    "UpdatePreferencesRequest",
]
