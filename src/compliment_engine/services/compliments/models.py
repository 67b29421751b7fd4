"""Data models for the persisted compliment cache.

The whole cache is stored as one JSON document:

    {"animal-medium-safe": {"compliments": [...], "timestamp": 1700000000000}}
"""

from __future__ import annotations

from pydantic import BaseModel, Field, TypeAdapter


class CacheEntry(BaseModel):
    """Compliments generated for one cache key.

    ``compliments`` keeps insertion order without duplicates; ``timestamp``
    is the last refresh in epoch milliseconds.
    """

    compliments: list[str] = Field(default_factory=list)
    timestamp: int = Field(..., description="Last refresh, epoch milliseconds")

    def is_fresh(self, now_ms: int, ttl_ms: int) -> bool:
        """True while the entry is younger than ``ttl_ms``."""
        return now_ms - self.timestamp < ttl_ms


class ComplimentStats(BaseModel):
    """Summary of the persisted cache."""

    cached_types: int = 0
    total_cached_compliments: int = 0


CacheDocument = dict[str, CacheEntry]

cache_document_adapter: TypeAdapter[CacheDocument] = TypeAdapter(CacheDocument)
