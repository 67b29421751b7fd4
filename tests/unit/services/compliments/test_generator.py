"""Unit tests for ComplimentGenerator."""

from __future__ import annotations

import random
from unittest.mock import AsyncMock, MagicMock

import pytest
from prometheus_client import REGISTRY

from compliment_engine.core.config import Settings
from compliment_engine.schemas.enums import ComplimentType, SpecificityLevel
from compliment_engine.services.compliments import (
    ComplimentCache,
    ComplimentGenerator,
    ContentBank,
    RecentHistory,
    make_cache_key,
    personalize,
)
from compliment_engine.services.compliments.constants import FALLBACK_TEMPLATES
from compliment_engine.services.compliments.exceptions import ContentBankError
from compliment_engine.storage import InMemoryKeyValueStore, ResilientStore
from tests.fixtures.clock import FrozenClock


pytestmark = pytest.mark.unit


def _generated(source: str) -> float:
    value = REGISTRY.get_sample_value(
        "compliment_engine_compliments_generated_total",
        {"source": source},
    )
    return value or 0.0


class FirstChoice(random.Random):
    """Always picks the first candidate."""

    def randrange(self, *args: object, **kwargs: object) -> int:  # type: ignore[override]
        return 0


@pytest.fixture
def cache(store: ResilientStore, clock: FrozenClock) -> ComplimentCache:
    """Create ComplimentCache over the in-memory store."""
    return ComplimentCache(store, clock=clock)


@pytest.fixture
def generator(cache: ComplimentCache, rng: random.Random) -> ComplimentGenerator:
    """Create ComplimentGenerator with seeded randomness."""
    return ComplimentGenerator(cache, rng=rng)


class TestCachePath:
    """Tests for serving compliments from the cache."""

    async def test_serves_cached_compliment(
        self, generator: ComplimentGenerator, cache: ComplimentCache
    ) -> None:
        key = make_cache_key("animal", "medium", True)
        for item in ["Cached one", "Cached two", "Cached three"]:
            await cache.add(key, item)

        result = await generator.generate_compliment("animal", "medium")

        assert result in {"Cached one", "Cached two", "Cached three"}
        stats = await cache.stats()
        assert stats.total_cached_compliments == 3

    async def test_skips_recently_shown(
        self, generator: ComplimentGenerator, cache: ComplimentCache
    ) -> None:
        key = make_cache_key("skill", "low", True)
        for item in ["A", "B", "C"]:
            await cache.add(key, item)
        generator.history.record("A")
        generator.history.record("B")

        result = await generator.generate_compliment("skill", "low")

        assert result == "C"

    async def test_personalizes_cached_compliment(
        self, generator: ComplimentGenerator, cache: ComplimentCache
    ) -> None:
        key = make_cache_key("random", "medium", True)
        await cache.add(key, "I admire your patience.")

        result = await generator.generate_compliment(
            "random", "medium", recipient_name="Sam"
        )

        assert result == "I admire Sam's patience."

    async def test_filter_compares_personalized_text(
        self, generator: ComplimentGenerator, cache: ComplimentCache
    ) -> None:
        key = make_cache_key("random", "medium", True)
        await cache.add(key, "I admire your patience.")
        await cache.add(key, "Great timing.")
        generator.history.record("I admire Sam's patience.")

        result = await generator.generate_compliment(
            "random", "medium", recipient_name="Sam"
        )

        assert result == "Sam, great timing."

    async def test_variety_override_uses_full_list(
        self, cache: ComplimentCache
    ) -> None:
        cached = [f"Compliment {i}" for i in range(6)]
        key = make_cache_key("object", "low", True)
        for item in cached:
            await cache.add(key, item)
        history = RecentHistory(capacity=5)
        for item in cached[:5]:
            history.record(item)
        generator = ComplimentGenerator(cache, history=history, rng=FirstChoice())

        result = await generator.generate_compliment("object", "low")

        # Only "Compliment 5" is unseen; the full list puts a shown one first
        assert result == "Compliment 0"

    async def test_enough_unseen_keeps_filter(
        self, cache: ComplimentCache
    ) -> None:
        cached = [f"Compliment {i}" for i in range(8)]
        key = make_cache_key("object", "low", True)
        for item in cached:
            await cache.add(key, item)
        history = RecentHistory(capacity=5)
        for item in cached[:5]:
            history.record(item)
        generator = ComplimentGenerator(cache, history=history, rng=FirstChoice())

        result = await generator.generate_compliment("object", "low")

        assert result == "Compliment 5"

    async def test_small_exhausted_cache_falls_back(
        self, cache: ComplimentCache, rng: random.Random
    ) -> None:
        cached = [f"Compliment {i}" for i in range(5)]
        key = make_cache_key("object", "low", True)
        for item in cached:
            await cache.add(key, item)
        history = RecentHistory(capacity=5)
        for item in cached:
            history.record(item)
        generator = ComplimentGenerator(cache, history=history, rng=rng)

        result = await generator.generate_compliment("object", "low")

        assert result in FALLBACK_TEMPLATES["object"]
        assert result in (await cache.get_cached(key) or [])

    async def test_counts_cache_source(
        self, generator: ComplimentGenerator, cache: ComplimentCache
    ) -> None:
        await cache.add(make_cache_key("animal", "medium", True), "A")
        before = _generated("cache")

        await generator.generate_compliment("animal", "medium")

        assert _generated("cache") == before + 1


class TestFallbackPath:
    """Tests for synthesizing when the cache has nothing to offer."""

    async def test_synthesizes_and_caches(
        self, generator: ComplimentGenerator, cache: ComplimentCache
    ) -> None:
        result = await generator.generate_compliment("animal", "low")

        assert result in FALLBACK_TEMPLATES["animal"]
        assert await cache.get_cached("animal-low-safe") == [result]

    async def test_caches_unpersonalized_text(
        self, generator: ComplimentGenerator, cache: ComplimentCache
    ) -> None:
        result = await generator.generate_compliment(
            "skill", "low", recipient_name="Sam"
        )

        cached = await cache.get_cached("skill-low-safe")
        assert cached is not None
        assert len(cached) == 1
        assert cached[0] in FALLBACK_TEMPLATES["skill"]
        assert result == personalize(cached[0], "Sam")

    async def test_unknown_type_uses_random_templates(
        self, generator: ComplimentGenerator, cache: ComplimentCache
    ) -> None:
        result = await generator.generate_compliment("dragon", "low")

        assert result in FALLBACK_TEMPLATES["random"]
        assert await cache.get_cached("dragon-low-safe") == [result]

    async def test_work_safe_flag_selects_key(
        self, generator: ComplimentGenerator, cache: ComplimentCache
    ) -> None:
        await generator.generate_compliment("animal", "low", work_safe=False)

        assert await cache.get_cached("animal-low-any") is not None
        assert await cache.get_cached("animal-low-safe") is None

    async def test_accepts_enum_arguments(
        self, generator: ComplimentGenerator, cache: ComplimentCache
    ) -> None:
        await generator.generate_compliment(
            ComplimentType.SKILL, SpecificityLevel.HIGH
        )

        assert await cache.get_cached("skill-high-safe") is not None

    async def test_defaults_to_random_medium_safe(
        self, generator: ComplimentGenerator, cache: ComplimentCache
    ) -> None:
        result = await generator.generate_compliment()

        assert result
        assert await cache.get_cached("random-medium-safe") is not None

    async def test_counts_fallback_source(
        self, generator: ComplimentGenerator
    ) -> None:
        before = _generated("fallback")

        await generator.generate_compliment("animal", "low")

        assert _generated("fallback") == before + 1


class TestSynthesisRetries:
    """Tests for the bounded anti-repeat retry loop."""

    @pytest.fixture
    def content(self) -> MagicMock:
        """ContentBank stand-in with scripted draws."""
        return MagicMock(spec=ContentBank)

    async def test_retries_past_recent_repeat(
        self, cache: ComplimentCache, content: MagicMock
    ) -> None:
        content.synthesize.side_effect = ["Seen", "Seen", "Fresh"]
        generator = ComplimentGenerator(cache, content=content)
        generator.history.record("Seen")

        result = await generator.generate_compliment("animal", "low")

        assert result == "Fresh"
        assert content.synthesize.call_count == 3

    async def test_gives_up_after_max_attempts(
        self, cache: ComplimentCache, content: MagicMock
    ) -> None:
        content.synthesize.return_value = "Seen"
        generator = ComplimentGenerator(cache, content=content, max_attempts=5)
        generator.history.record("Seen")

        result = await generator.generate_compliment("animal", "low")

        assert result == "Seen"
        assert content.synthesize.call_count == 6

    async def test_retry_checks_personalized_text(
        self, cache: ComplimentCache, content: MagicMock
    ) -> None:
        content.synthesize.side_effect = ["Great job.", "Nice work."]
        generator = ComplimentGenerator(cache, content=content)
        generator.history.record("Sam, great job.")

        result = await generator.generate_compliment(
            "animal", "low", recipient_name="Sam"
        )

        assert result == "Sam, nice work."


class TestHistory:
    """Tests for recording shown compliments."""

    async def test_records_final_text(self, generator: ComplimentGenerator) -> None:
        result = await generator.generate_compliment(
            "animal", "low", recipient_name="Sam"
        )

        assert generator.history.snapshot() == [result]

    async def test_history_is_capped(self, generator: ComplimentGenerator) -> None:
        for _ in range(8):
            await generator.generate_compliment("random", "low")

        assert len(generator.history) == 5

    async def test_consecutive_calls_avoid_repeats(
        self, cache: ComplimentCache, rng: random.Random
    ) -> None:
        generator = ComplimentGenerator(cache, rng=rng, max_attempts=100)
        results = [
            await generator.generate_compliment("animal", "low") for _ in range(5)
        ]

        assert len(set(results)) == 5

    async def test_reset_history(self, generator: ComplimentGenerator) -> None:
        await generator.generate_compliment()

        generator.reset_history()

        assert len(generator.history) == 0

    async def test_generators_do_not_share_history(
        self, cache: ComplimentCache
    ) -> None:
        first = ComplimentGenerator(cache)
        second = ComplimentGenerator(cache)

        await first.generate_compliment()

        assert len(first.history) == 1
        assert len(second.history) == 0


class TestFailureHandling:
    """Tests for store failures and defective content."""

    async def test_store_failure_still_returns_compliment(
        self, rng: random.Random
    ) -> None:
        backend = MagicMock()
        backend.get = AsyncMock(side_effect=ConnectionError("down"))
        backend.set = AsyncMock(side_effect=ConnectionError("down"))
        cache = ComplimentCache(ResilientStore(backend))
        generator = ComplimentGenerator(cache, rng=rng)

        result = await generator.generate_compliment("animal", "low")

        assert result in FALLBACK_TEMPLATES["animal"]

    async def test_unexpected_error_uses_recovery(self, rng: random.Random) -> None:
        cache = MagicMock(spec=ComplimentCache)
        cache.get_cached = AsyncMock(side_effect=RuntimeError("boom"))
        cache.add = AsyncMock()
        generator = ComplimentGenerator(cache, rng=rng)
        before = _generated("recovery")

        result = await generator.generate_compliment(
            "object", "low", recipient_name="Sam"
        )

        assert result in {personalize(t, "Sam") for t in FALLBACK_TEMPLATES["object"]}
        cache.add.assert_not_awaited()
        assert generator.history.snapshot() == [result]
        assert _generated("recovery") == before + 1

    async def test_content_bank_error_propagates(
        self, cache: ComplimentCache
    ) -> None:
        generator = ComplimentGenerator(
            cache, content=ContentBank(templates={"random": ()})
        )

        with pytest.raises(ContentBankError):
            await generator.generate_compliment("random", "low")

        assert len(generator.history) == 0


class TestMaintenance:
    """Tests for cache maintenance pass-throughs."""

    async def test_stats_and_clear(self, generator: ComplimentGenerator) -> None:
        await generator.generate_compliment("animal", "low")
        await generator.generate_compliment("object", "low")

        stats = await generator.get_compliment_stats()
        assert stats.cached_types == 2
        assert stats.total_cached_compliments == 2

        assert await generator.clear_compliment_cache() is True

        stats = await generator.get_compliment_stats()
        assert stats.cached_types == 0
        assert stats.total_cached_compliments == 0


class TestFromSettings:
    """Tests for building the generator from configuration."""

    def test_wires_configuration(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(deep=True)
        settings.compliments.cache.ttl_hours = 1
        settings.compliments.cache.max_per_key = 7
        settings.compliments.history.capacity = 3
        settings.compliments.generation.max_attempts = 2
        settings.compliments.store.cache_key = "otherCache"

        generator = ComplimentGenerator.from_settings(
            ResilientStore(InMemoryKeyValueStore()), settings
        )

        assert generator.cache.ttl_ms == 60 * 60 * 1000
        assert generator.cache.max_per_key == 7
        assert generator.cache.store_key == "otherCache"
        assert generator.history.capacity == 3
        assert generator.max_attempts == 2

    async def test_generates_with_defaults(self, test_settings: Settings) -> None:
        generator = ComplimentGenerator.from_settings(
            ResilientStore(InMemoryKeyValueStore()),
            test_settings,
            rng=random.Random(0),
        )

        result = await generator.generate_compliment("random", "low")

        assert result in FALLBACK_TEMPLATES["random"]
