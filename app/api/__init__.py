from __future__ import annotations

from fastapi import APIRouter

from .health import router as health_router
from .nav import router as nav_router
from .places import router as places_router
from .polyline import router as polyline_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(nav_router)
api_router.include_router(places_router)
api_router.include_router(polyline_router)
