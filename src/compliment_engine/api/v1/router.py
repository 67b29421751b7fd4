"""API v1 router aggregating all endpoint routers.

All endpoints are mounted under /api/v1/compliments/ via the v1_prefix configuration.
"""

from __future__ import annotations

from fastapi import APIRouter

from compliment_engine.api.v1.endpoints import compliments, favorites, health


router = APIRouter()

router.include_router(health.router)
router.include_router(compliments.router)
router.include_router(favorites.router)
