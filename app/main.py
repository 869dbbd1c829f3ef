# app/main.py
from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from starlette.middleware.gzip import GZipMiddleware

# Load <project>/.env (main.py is <project>/app/main.py)
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")

from app.core.settings import settings
from app.core.errors import service_unavailable
from app.core.logging_config import setup_logging
from app.api import api_router

from app.services.google_maps import GoogleMaps
from app.services.places import Places
from app.services.routing import Routing

setup_logging(settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Roadside Stops Backend",
    version="1.0.0",
    default_response_class=ORJSONResponse,
)

# ── Compression (must be added before CORS) ──
app.add_middleware(GZipMiddleware, minimum_size=1000)

_origins = settings.cors_origin_list or ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

# ──────────────────────────────────────────────────────────────
# Shared upstream client
# ──────────────────────────────────────────────────────────────

_maps: GoogleMaps | None = None


def _get_maps() -> GoogleMaps:
    # Only called from async providers: check-and-set runs on the event loop.
    global _maps
    if _maps is None:
        if not settings.google_maps_api_key:
            service_unavailable("maps_not_configured", "GOOGLE_MAPS_API_KEY is not set")
        _maps = GoogleMaps.from_settings()
    return _maps


# ──────────────────────────────────────────────────────────────
# Dependency providers
# ──────────────────────────────────────────────────────────────

async def provide_places_service() -> Places:
    return Places(
        maps=_get_maps(),
        route_types=settings.route_place_types,
        route_radius_m=settings.places_route_radius_m,
        nearest_radius_m=settings.places_nearest_radius_m,
        sample_interval_km=settings.route_sample_interval_km,
        max_samples=settings.route_max_samples,
        max_concurrency=settings.places_max_concurrency,
    )


async def provide_routing_service() -> Routing:
    return Routing(
        maps=_get_maps(),
        places=await provide_places_service(),
        travel_mode=settings.travel_mode,
    )


# ──────────────────────────────────────────────────────────────
# Dependency overrides
# ──────────────────────────────────────────────────────────────

from app.api import nav as nav_api
from app.api import places as places_api

app.dependency_overrides[nav_api.get_routing_service] = provide_routing_service
app.dependency_overrides[places_api.get_places_service] = provide_places_service

# Routes
app.include_router(api_router)

# ──────────────────────────────────────────────────────────────
# Startup / shutdown
# ──────────────────────────────────────────────────────────────

@app.on_event("startup")
def startup():
    if not settings.google_maps_api_key:
        logger.error(
            "[app] GOOGLE_MAPS_API_KEY is not set; route and places endpoints will answer 503"
        )


@app.on_event("shutdown")
async def shutdown():
    global _maps
    logger.info("[app] Shutting down, closing upstream client")
    if _maps is not None:
        try:
            await _maps.aclose()
        except Exception as e:
            logger.warning(f"[app] Error closing Google Maps client: {e}")
        _maps = None


def run() -> None:
    """Console entry point: serve with uvicorn, refusing to start without a key."""
    import uvicorn

    if not settings.google_maps_api_key:
        logger.error(
            "Google Maps API key is not set. "
            "Please set GOOGLE_MAPS_API_KEY in your .env file."
        )
        raise SystemExit(1)

    logger.info("[app] Server running on http://%s:%d", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    run()
