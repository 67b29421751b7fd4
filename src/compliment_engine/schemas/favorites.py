"""Saved compliments, history, category and preference schemas."""

from __future__ import annotations

from pydantic import Field

from compliment_engine.schemas.base import APIRequest, APIResponse
from compliment_engine.schemas.enums import ComplimentType, SpecificityLevel


class SaveComplimentRequest(APIRequest):
    """Request body for saving a compliment."""

    text: str = Field(..., min_length=1, description="Compliment text")
    category: str | None = Field(default=None, description="Optional category")


class SavedComplimentResponse(APIResponse):
    """A saved compliment."""

    id: str
    text: str
    date: str = Field(..., description="ISO-8601 save time")
    category: str | None = None


class SavedComplimentListResponse(APIResponse):
    """Saved compliments, newest first."""

    compliments: list[SavedComplimentResponse]
    count: int


class HistoryResponse(APIResponse):
    """Shown compliment history, newest first."""

    compliments: list[str]


class CategoryRequest(APIRequest):
    """Request body for adding a category."""

    name: str = Field(..., min_length=1, max_length=50)


class CategoriesResponse(APIResponse):
    """All categories in display order."""

    categories: list[str]


class PreferencesResponse(APIResponse):
    """Stored generation preferences."""

    compliment_type: ComplimentType
    specificity: SpecificityLevel
    work_safe: bool
    recipient_name: str


class UpdatePreferencesRequest(APIRequest):
    """Partial preference update; omitted fields keep their value."""

    compliment_type: ComplimentType | None = None
    specificity: SpecificityLevel | None = None
    work_safe: bool | None = None
    recipient_name: str | None = Field(default=None, max_length=100)
