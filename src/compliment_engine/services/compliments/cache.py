"""Persistent, time-expiring cache of generated compliments.

One JSON document under a single store key holds every cache entry. Reads
treat missing, unreadable or expired data as a miss; writes are best effort.
Expired entries are never purged here, they are simply not returned until a
later ``add`` refreshes them.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import orjson
from pydantic import ValidationError

from compliment_engine.observability.logging import get_logger
from compliment_engine.services.compliments.constants import (
    COMPLIMENT_CACHE_STORE_KEY,
    COMPLIMENT_CACHE_TTL_MS,
    MAX_COMPLIMENTS_PER_KEY,
)
from compliment_engine.services.compliments.models import (
    CacheDocument,
    CacheEntry,
    ComplimentStats,
    cache_document_adapter,
)
from compliment_engine.storage.resilient import StoreResult


if TYPE_CHECKING:
    from collections.abc import Callable

    from compliment_engine.storage.resilient import ResilientStore

logger = get_logger(__name__)


def epoch_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


def make_cache_key(compliment_type: str, specificity: str, work_safe: bool) -> str:
    """Build the cache key for a generation context.

    Example:
        make_cache_key("animal", "high", True)  # "animal-high-safe"
    """
    return f"{compliment_type}-{specificity}-{'safe' if work_safe else 'any'}"


class ComplimentCache:
    """Keyed compliment cache persisted through a ResilientStore.

    Cache Strategy:
    - Store key: "complimentCache" (one blob for all cache keys)
    - Entry expiry: 24 hours after the last ``add``
    - At most 20 compliments per key, oldest evicted first
    """

    def __init__(
        self,
        store: ResilientStore,
        *,
        store_key: str = COMPLIMENT_CACHE_STORE_KEY,
        ttl_ms: int = COMPLIMENT_CACHE_TTL_MS,
        max_per_key: int = MAX_COMPLIMENTS_PER_KEY,
        clock: Callable[[], int] = epoch_ms,
    ) -> None:
        self._store = store
        self.store_key = store_key
        self.ttl_ms = ttl_ms
        self.max_per_key = max_per_key
        self._clock = clock

    async def get_cached(self, key: str) -> list[str] | None:
        """Return the compliments for ``key`` if present and not expired."""
        document = await self._load()
        if document is None:
            return None

        entry = document.get(key)
        if entry is None:
            logger.debug("Cache miss", key=key)
            return None

        if not entry.is_fresh(self._clock(), self.ttl_ms):
            logger.debug("Cache entry expired", key=key, timestamp=entry.timestamp)
            return None

        logger.debug("Cache hit", key=key, count=len(entry.compliments))
        return list(entry.compliments)

    async def add(self, key: str, compliment: str) -> bool:
        """Append ``compliment`` to the entry for ``key`` and persist.

        Nothing is written when the current document could not be read.

        Returns:
            True if the cache was written, False if the store failed.
        """
        loaded = await self._read_document()
        if not loaded.ok:
            logger.warning("Skipping cache write after failed read", key=key)
            return False

        now = self._clock()
        document = loaded.value or {}

        entry = document.get(key)
        if entry is None:
            entry = CacheEntry(compliments=[], timestamp=now)
            document[key] = entry

        if compliment not in entry.compliments:
            entry.compliments.append(compliment)
            if len(entry.compliments) > self.max_per_key:
                del entry.compliments[: len(entry.compliments) - self.max_per_key]

        # Refreshed on every add, duplicates included
        entry.timestamp = now

        result = await self._store.set(self.store_key, self._dump(document))
        if result.ok:
            logger.debug("Cached compliment", key=key, count=len(entry.compliments))
        return result.ok

    async def clear(self) -> bool:
        """Remove every cached entry at once."""
        result = await self._store.remove(self.store_key)
        if result.ok:
            logger.info("Compliment cache cleared", store_key=self.store_key)
        return result.ok

    async def stats(self) -> ComplimentStats:
        """Count keys and compliments, expired entries included."""
        document = await self._load()
        if not document:
            return ComplimentStats()
        return ComplimentStats(
            cached_types=len(document),
            total_cached_compliments=sum(
                len(entry.compliments) for entry in document.values()
            ),
        )

    async def _load(self) -> CacheDocument | None:
        """Cache document, or None when unreadable, absent or invalid."""
        loaded = await self._read_document()
        return loaded.value if loaded.ok else None

    async def _read_document(self) -> StoreResult[CacheDocument]:
        """Read and validate the cache document.

        A failed store read is returned as a failure. Absent data and data
        that is not a valid cache document both succeed with a None value.
        """
        result = await self._store.get(self.store_key)
        if not result.ok:
            return StoreResult(ok=False, error=result.error)
        if not result.value:
            return StoreResult.success()

        try:
            document = cache_document_adapter.validate_python(
                orjson.loads(result.value)
            )
        except (orjson.JSONDecodeError, ValidationError) as e:
            logger.warning(
                "Ignoring malformed compliment cache",
                store_key=self.store_key,
                error=str(e),
            )
            return StoreResult.success()
        return StoreResult.success(document)

    @staticmethod
    def _dump(document: CacheDocument) -> str:
        return orjson.dumps(cache_document_adapter.dump_python(document)).decode()
