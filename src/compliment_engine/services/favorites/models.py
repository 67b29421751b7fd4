"""Persisted models for saved compliments and user preferences.

Stored JSON uses camelCase keys, matching the API payloads.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from compliment_engine.schemas.enums import ComplimentType, SpecificityLevel


class _StoredModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        serialize_by_alias=True,
        extra="ignore",
    )


class SavedCompliment(_StoredModel):
    """A compliment the user chose to keep."""

    id: str = Field(..., description="Unique id (epoch milliseconds)")
    text: str
    date: str = Field(..., description="ISO-8601 time the compliment was saved")
    category: str | None = None


class Preferences(_StoredModel):
    """Generation settings remembered between sessions."""

    compliment_type: ComplimentType = ComplimentType.RANDOM
    specificity: SpecificityLevel = SpecificityLevel.MEDIUM
    work_safe: bool = True
    recipient_name: str = ""
