"""Saved compliments, history, categories and preferences endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from compliment_engine.api.dependencies import get_favorites_service
from compliment_engine.core.exceptions import BadRequestException, NotFoundException
from compliment_engine.schemas.favorites import (
    CategoriesResponse,
    CategoryRequest,
    HistoryResponse,
    PreferencesResponse,
    SavedComplimentListResponse,
    SavedComplimentResponse,
    SaveComplimentRequest,
    UpdatePreferencesRequest,
)
from compliment_engine.services.favorites import FavoritesService
from compliment_engine.services.favorites.exceptions import (
    CategoryError,
    SavedComplimentNotFoundError,
)
from compliment_engine.services.favorites.models import Preferences, SavedCompliment


router = APIRouter(tags=["Favorites"])

FavoritesDep = Annotated[FavoritesService, Depends(get_favorites_service)]


def _saved_response(saved: SavedCompliment) -> SavedComplimentResponse:
    return SavedComplimentResponse.model_validate(saved.model_dump(by_alias=False))


def _preferences_response(preferences: Preferences) -> PreferencesResponse:
    return PreferencesResponse.model_validate(preferences.model_dump(by_alias=False))


# =============================================================================
# Saved Compliments
# =============================================================================


@router.get(
    "/saved",
    response_model=SavedComplimentListResponse,
    summary="List saved compliments",
)
async def list_saved(
    favorites: FavoritesDep,
    category: Annotated[str | None, Query(description="Exact category")] = None,
) -> SavedComplimentListResponse:
    """Saved compliments, newest first."""
    saved = await favorites.list_saved(category)
    return SavedComplimentListResponse(
        compliments=[_saved_response(item) for item in saved],
        count=len(saved),
    )


@router.post(
    "/saved",
    response_model=SavedComplimentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a compliment",
)
async def save_compliment(
    request: SaveComplimentRequest,
    favorites: FavoritesDep,
) -> SavedComplimentResponse:
    saved = await favorites.save_compliment(request.text, request.category)
    return _saved_response(saved)


@router.delete(
    "/saved/{compliment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a saved compliment",
)
async def remove_compliment(compliment_id: str, favorites: FavoritesDep) -> None:
    """Delete a saved compliment by id.

    Raises:
        NotFoundException: 404 if no saved compliment has this id.
    """
    try:
        await favorites.remove_compliment(compliment_id)
    except SavedComplimentNotFoundError as e:
        raise NotFoundException("Saved compliment", compliment_id) from e


# =============================================================================
# History
# =============================================================================


@router.get("/history", response_model=HistoryResponse, summary="Shown history")
async def get_history(favorites: FavoritesDep) -> HistoryResponse:
    return HistoryResponse(compliments=await favorites.get_history())


@router.delete(
    "/history",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Clear shown history",
)
async def clear_history(favorites: FavoritesDep) -> None:
    await favorites.clear_history()


# =============================================================================
# Categories
# =============================================================================


@router.get("/categories", response_model=CategoriesResponse, summary="Categories")
async def get_categories(favorites: FavoritesDep) -> CategoriesResponse:
    return CategoriesResponse(categories=await favorites.get_categories())


@router.post(
    "/categories",
    response_model=CategoriesResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a category",
)
async def add_category(
    request: CategoryRequest,
    favorites: FavoritesDep,
) -> CategoriesResponse:
    """Add a category; adding an existing name changes nothing.

    Raises:
        BadRequestException: 400 if the name is blank.
    """
    try:
        categories = await favorites.add_category(request.name)
    except CategoryError as e:
        raise BadRequestException(str(e)) from e
    return CategoriesResponse(categories=categories)


@router.delete(
    "/categories/{name}",
    response_model=CategoriesResponse,
    summary="Remove a category",
)
async def remove_category(name: str, favorites: FavoritesDep) -> CategoriesResponse:
    return CategoriesResponse(categories=await favorites.remove_category(name))


# =============================================================================
# Preferences
# =============================================================================


@router.get(
    "/preferences",
    response_model=PreferencesResponse,
    summary="Generation preferences",
)
async def get_preferences(favorites: FavoritesDep) -> PreferencesResponse:
    return _preferences_response(await favorites.get_preferences())


@router.put(
    "/preferences",
    response_model=PreferencesResponse,
    summary="Update generation preferences",
)
async def update_preferences(
    request: UpdatePreferencesRequest,
    favorites: FavoritesDep,
) -> PreferencesResponse:
    """Merge the provided fields into the stored preferences."""
    changes = request.model_dump(by_alias=False, exclude_none=True)
    return _preferences_response(await favorites.update_preferences(changes))
