from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.core.settings import settings

router = APIRouter()


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return "Server is running!"


@router.get("/health")
def health() -> dict:
    return {
        "status": "ok",
        "google_maps_configured": bool(settings.google_maps_api_key),
    }
