"""Fixtures for endpoint tests against a fully wired app."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from compliment_engine.factory import create_app


if TYPE_CHECKING:
    from collections.abc import Iterator

    from fastapi import FastAPI

    from compliment_engine.core.config import Settings


PREFIX = "/api/v1/compliments"


@pytest.fixture
def app(test_settings: Settings) -> FastAPI:
    """App backed by the in-memory store."""
    return create_app(test_settings)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    """Test client with the lifespan running."""
    with TestClient(app) as test_client:
        yield test_client
