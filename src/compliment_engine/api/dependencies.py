"""FastAPI dependencies for service access.

Services are initialized during application startup and stored in
app.state.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, Request, status

from compliment_engine.core.config import get_settings


if TYPE_CHECKING:
    from compliment_engine.core.config import Settings
    from compliment_engine.services.compliments import ComplimentGenerator
    from compliment_engine.services.favorites import FavoritesService
    from compliment_engine.storage import ResilientStore


def _from_state(request: Request, name: str, label: str) -> object:
    service = getattr(request.app.state, name, None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{label} not available",
        )
    return service


async def get_compliment_generator(request: Request) -> ComplimentGenerator:
    """Get the compliment generator from app state.

    Raises:
        HTTPException: 503 if the generator is not initialized.
    """
    return _from_state(request, "compliment_generator", "Compliment generator")  # type: ignore[return-value]


async def get_favorites_service(request: Request) -> FavoritesService:
    """Get the favorites service from app state.

    Raises:
        HTTPException: 503 if the service is not initialized.
    """
    return _from_state(request, "favorites_service", "Favorites service")  # type: ignore[return-value]


async def get_store(request: Request) -> ResilientStore | None:
    """Get the shared key-value store, or None before startup."""
    return getattr(request.app.state, "store", None)


async def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()
