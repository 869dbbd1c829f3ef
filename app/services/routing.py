from __future__ import annotations

import logging
from typing import Any, Dict

from app.core.contracts import RouteRequest, RouteResponse
from app.core.errors import not_found, service_unavailable
from app.core.polyline import PolylineDecodeError, decode_polyline
from app.core.time import utc_now_iso
from app.services.google_maps import GoogleMaps, GoogleMapsError
from app.services.places import Places

logger = logging.getLogger(__name__)


def _overview_polyline(route: Dict[str, Any]) -> str:
    overview = route.get("overview_polyline") or {}
    if not isinstance(overview, dict):
        return ""
    return str(overview.get("points") or "")


class Routing:
    def __init__(self, *, maps: GoogleMaps, places: Places, travel_mode: str = "driving"):
        self.maps = maps
        self.places = places
        self.travel_mode = travel_mode

    async def get_route(self, req: RouteRequest) -> RouteResponse:
        origin = req.start.as_param()
        destination = req.destination_param()

        try:
            data = await self.maps.directions(
                origin,
                destination,
                mode=self.travel_mode,
                vehicle_type=req.vehicleType,
            )
        except GoogleMapsError as exc:
            service_unavailable("directions_failed", f"Failed to fetch route: {exc}")

        routes = data.get("routes") or []
        if not routes:
            not_found("no_route", f"no route found from {origin} to {destination}")

        best = routes[0]
        if not isinstance(best, dict):
            service_unavailable("bad_route_geometry", "route is not an object")

        poly = _overview_polyline(best)
        if not poly:
            service_unavailable("bad_route_geometry", "route has no overview polyline")

        try:
            points = decode_polyline(poly)
        except PolylineDecodeError as exc:
            logger.error("route_polyline_decode_failed: %s", exc)
            service_unavailable("bad_route_geometry", f"route polyline could not be decoded: {exc}")

        places = await self.places.along_route(points)

        return RouteResponse(
            route=best,
            places=places,
            waypoints=len(points),
            fetched_at=utc_now_iso(),
        )
