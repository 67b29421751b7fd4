"""Shared test fixtures for the compliment engine tests.

Provides an in-memory store, a seeded random generator and a controllable
clock so generation and expiry behaviour is deterministic.
"""

from __future__ import annotations

import os
import random

import pytest

# Pick up config/environments/test before any settings are built
os.environ.setdefault("APP_ENV", "test")

from compliment_engine.core.config import Settings, StoreBackend  # noqa: E402
from compliment_engine.core.config.settings import (  # noqa: E402
    ComplimentSettings,
    ComplimentStoreSettings,
    LoggingSettings,
    MetricsSettings,
    ObservabilitySettings,
)
from compliment_engine.storage import (  # noqa: E402
    InMemoryKeyValueStore,
    ResilientStore,
)
from tests.fixtures.clock import FrozenClock  # noqa: E402


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def store(memory_store: InMemoryKeyValueStore) -> ResilientStore:
    """ResilientStore over the in-memory store."""
    return ResilientStore(memory_store)


@pytest.fixture
def rng() -> random.Random:
    """Seeded random generator."""
    return random.Random(1234)


@pytest.fixture
def clock() -> FrozenClock:
    """Clock frozen at FROZEN_NOW_MS."""
    return FrozenClock()


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an app that needs no external services."""
    return Settings(
        APP_ENV="test",
        compliments=ComplimentSettings(
            store=ComplimentStoreSettings(backend=StoreBackend.MEMORY),
        ),
        logging=LoggingSettings(level="WARNING", format="json"),
        observability=ObservabilitySettings(
            metrics=MetricsSettings(enabled=False),
        ),
    )
