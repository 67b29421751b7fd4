"""Compliment generation service.

Provides methods for:
- Cache-first compliment selection with a recent-history anti-repeat filter
- Fallback synthesis from the static template bank
- Cache maintenance (clear, stats)
"""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

from compliment_engine.observability.logging import get_logger
from compliment_engine.observability.metrics import compliments_generated
from compliment_engine.schemas.enums import (
    ComplimentSource,
    ComplimentType,
    SpecificityLevel,
)
from compliment_engine.services.compliments.cache import (
    ComplimentCache,
    make_cache_key,
)
from compliment_engine.services.compliments.constants import (
    MAX_SYNTHESIS_ATTEMPTS,
    VARIETY_MIN_AVAILABLE,
    VARIETY_MIN_CACHED,
)
from compliment_engine.services.compliments.content import ContentBank
from compliment_engine.services.compliments.exceptions import ContentBankError
from compliment_engine.services.compliments.history import RecentHistory
from compliment_engine.services.compliments.personalization import personalize


if TYPE_CHECKING:
    from compliment_engine.core.config import Settings
    from compliment_engine.services.compliments.models import ComplimentStats
    from compliment_engine.storage.resilient import ResilientStore

logger = get_logger(__name__)


class ComplimentGenerator:
    """Produce one compliment per call.

    Orchestrates:
    1. Cache lookup for the (type, specificity, work-safe) key
    2. Filtering of cached candidates against recently shown compliments
    3. Fallback synthesis with bounded retries when the pool is empty
    4. Cache population and history recording

    Each instance owns its RecentHistory; two generators never share
    anti-repeat state. Calls are expected one at a time.
    """

    def __init__(
        self,
        cache: ComplimentCache,
        *,
        content: ContentBank | None = None,
        history: RecentHistory | None = None,
        rng: random.Random | None = None,
        max_attempts: int = MAX_SYNTHESIS_ATTEMPTS,
        variety_min_available: int = VARIETY_MIN_AVAILABLE,
        variety_min_cached: int = VARIETY_MIN_CACHED,
    ) -> None:
        self._rng = rng or random.Random()
        self.cache = cache
        self.content = content or ContentBank(rng=self._rng)
        self.history = history if history is not None else RecentHistory()
        self.max_attempts = max_attempts
        self.variety_min_available = variety_min_available
        self.variety_min_cached = variety_min_cached

    @classmethod
    def from_settings(
        cls,
        store: ResilientStore,
        settings: Settings,
        rng: random.Random | None = None,
    ) -> ComplimentGenerator:
        """Build a generator wired from the ``compliments`` config section."""
        config = settings.compliments
        rng = rng or random.Random()
        cache = ComplimentCache(
            store,
            store_key=config.store.cache_key,
            ttl_ms=int(config.cache.ttl_hours * 60 * 60 * 1000),
            max_per_key=config.cache.max_per_key,
        )
        return cls(
            cache,
            content=ContentBank(
                rng=rng,
                specificity_probability=config.generation.specificity_probability,
            ),
            history=RecentHistory(config.history.capacity),
            rng=rng,
            max_attempts=config.generation.max_attempts,
            variety_min_available=config.generation.variety_min_available,
            variety_min_cached=config.generation.variety_min_cached,
        )

    async def generate_compliment(
        self,
        compliment_type: ComplimentType | str = ComplimentType.RANDOM,
        specificity: SpecificityLevel | str = SpecificityLevel.MEDIUM,
        recipient_name: str | None = None,
        work_safe: bool = True,
    ) -> str:
        """Generate a compliment.

        Args:
            compliment_type: Template category; unknown values use "random".
            specificity: Modifier intensity (low, medium, high).
            recipient_name: Optional name to address the compliment to.
            work_safe: Part of the cache key only.

        Returns:
            A non-empty compliment string.

        Raises:
            ContentBankError: If the static template bank is defective.
        """
        compliment_type = str(compliment_type)
        specificity = str(specificity)

        try:
            key = make_cache_key(compliment_type, specificity, work_safe)
            cached = await self.cache.get_cached(key)
            available = self._select_pool(cached, recipient_name)

            if available:
                compliment = personalize(
                    available[self._rng.randrange(len(available))], recipient_name
                )
                source = ComplimentSource.CACHE
            else:
                base = self._synthesize(compliment_type, specificity, recipient_name)
                compliment = personalize(base, recipient_name)
                await self.cache.add(key, base)
                source = ComplimentSource.FALLBACK
        except ContentBankError:
            raise
        except Exception:
            logger.exception(
                "Error generating compliment, using direct fallback",
                compliment_type=compliment_type,
                specificity=specificity,
            )
            base = self._synthesize(compliment_type, specificity, recipient_name)
            compliment = personalize(base, recipient_name)
            source = ComplimentSource.RECOVERY

        self.history.record(compliment)
        compliments_generated.labels(source=source.value).inc()
        logger.debug(
            "Generated compliment",
            compliment_type=compliment_type,
            specificity=specificity,
            source=source.value,
        )
        return compliment

    async def clear_compliment_cache(self) -> bool:
        """Drop every cached compliment (best effort).

        Returns:
            False if the store could not remove the cache.
        """
        return await self.cache.clear()

    async def get_compliment_stats(self) -> ComplimentStats:
        """Return counts of cached keys and compliments."""
        return await self.cache.stats()

    def reset_history(self) -> None:
        """Forget recently shown compliments."""
        self.history.clear()

    def _select_pool(
        self,
        cached: list[str] | None,
        recipient_name: str | None,
    ) -> list[str]:
        """Cached candidates not shown recently.

        Falls back to the full cached list when filtering leaves too few
        options out of a reasonably sized cache.
        """
        if not cached:
            return []

        available = [
            c
            for c in cached
            if not self.history.contains(personalize(c, recipient_name))
        ]
        if (
            len(available) < self.variety_min_available
            and len(cached) > self.variety_min_cached
        ):
            return list(cached)
        return available

    def _synthesize(
        self,
        compliment_type: str,
        specificity: str,
        recipient_name: str | None,
    ) -> str:
        """Draw a fresh compliment, retrying while it was shown recently.

        After ``max_attempts`` retries the last draw is accepted even if it
        repeats.
        """
        candidate = self.content.synthesize(compliment_type, specificity)
        attempts = 0
        while (
            self.history.contains(personalize(candidate, recipient_name))
            and attempts < self.max_attempts
        ):
            candidate = self.content.synthesize(compliment_type, specificity)
            attempts += 1
        return candidate
