from __future__ import annotations

import os
from typing import Callable, List

import httpx
import pytest

os.environ.setdefault("GOOGLE_MAPS_API_KEY", "test-key")

from app.services.google_maps import GoogleMaps  # noqa: E402
from app.services.places import Places  # noqa: E402

DIRECTIONS_URL = "https://maps.test/directions/json"
PLACES_URL = "https://maps.test/place/nearbysearch/json"

# The canonical example from Google's polyline algorithm documentation.
CANONICAL_POLYLINE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
CANONICAL_POINTS = [(38.5, -120.2), (40.7, -120.95), (43.252, -126.453)]


def place(place_id: str, lat: float, lng: float, *types: str) -> dict:
    return {
        "place_id": place_id,
        "name": place_id.title(),
        "types": list(types),
        "geometry": {"location": {"lat": lat, "lng": lng}},
    }


class Recorder:
    """Mock transport handler that remembers every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.handler = handler
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)


@pytest.fixture
def make_maps():
    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> GoogleMaps:
        return GoogleMaps(
            api_key="test-key",
            directions_url=DIRECTIONS_URL,
            places_url=PLACES_URL,
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def make_places():
    def _make(maps: GoogleMaps, **overrides) -> Places:
        kwargs = dict(
            maps=maps,
            route_types=["gas_station", "rest_stop", "lodging"],
            route_radius_m=1000,
            nearest_radius_m=5000,
            sample_interval_km=0,
            max_samples=0,
            max_concurrency=4,
        )
        kwargs.update(overrides)
        return Places(**kwargs)

    return _make
