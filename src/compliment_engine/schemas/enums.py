"""Enumeration types shared by the engine and the API schemas."""

from __future__ import annotations

from enum import StrEnum


class ComplimentType(StrEnum):
    """Template category a compliment is drawn from."""

    ANIMAL = "animal"
    OBJECT = "object"
    SKILL = "skill"
    RANDOM = "random"


class SpecificityLevel(StrEnum):
    """How strongly a compliment is intensified with a modifier phrase."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ComplimentSource(StrEnum):
    """Where a returned compliment came from."""

    CACHE = "cache"
    FALLBACK = "fallback"
    RECOVERY = "recovery"
