from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from app.core.contracts import FindNearestResponse, NavCoord, PlaceDict
from app.core.errors import service_unavailable
from app.core.geo import haversine_m, sample_points
from app.services.google_maps import GoogleMaps, GoogleMapsError

logger = logging.getLogger(__name__)


def _place_latlng(place: PlaceDict) -> Optional[Tuple[float, float]]:
    loc = (place.get("geometry") or {}).get("location") or {}
    try:
        return float(loc["lat"]), float(loc["lng"])
    except (KeyError, TypeError, ValueError):
        return None


def _category_for(place: PlaceDict, categories: Sequence[str]) -> Optional[str]:
    """First of the place's own types that we were asked for."""
    for t in place.get("types") or []:
        if t in categories:
            return t
    return None


class Places:
    def __init__(
        self,
        *,
        maps: GoogleMaps,
        route_types: Sequence[str],
        route_radius_m: int,
        nearest_radius_m: int,
        sample_interval_km: float,
        max_samples: int,
        max_concurrency: int = 8,
    ):
        self.maps = maps
        self.route_types = list(route_types)
        self.route_radius_m = route_radius_m
        self.nearest_radius_m = nearest_radius_m
        self.sample_interval_km = sample_interval_km
        self.max_samples = max_samples
        self.max_concurrency = max(1, int(max_concurrency))

    # ──────────────────────────────────────────────────────────
    # Along a route
    # ──────────────────────────────────────────────────────────

    async def _lookup(
        self,
        sem: asyncio.Semaphore,
        point: Tuple[float, float],
        place_type: str,
    ) -> List[PlaceDict]:
        async with sem:
            try:
                return await self.maps.nearby_search(
                    point[0],
                    point[1],
                    radius_m=self.route_radius_m,
                    place_type=place_type,
                )
            except GoogleMapsError as exc:
                # One failed lookup must not sink the whole route.
                logger.warning(
                    "places_lookup_failed type=%s at=(%.5f,%.5f): %s",
                    place_type, point[0], point[1], exc,
                )
                return []

    async def along_route(self, points: Sequence[Tuple[float, float]]) -> Dict[str, List[PlaceDict]]:
        """
        Nearby-search every configured category around sampled route points.

        Returns {category: [place, ...]} with every category present.  Places
        are filed under the first of their `types` we asked for and
        de-duplicated by place_id.
        """
        places: Dict[str, List[PlaceDict]] = {t: [] for t in self.route_types}

        samples = sample_points(points, self.sample_interval_km, self.max_samples)
        if not samples or not self.route_types:
            return places

        logger.info(
            "places_along_route: decoded=%d samples=%d types=%s requests=%d",
            len(points), len(samples), ",".join(self.route_types),
            len(samples) * len(self.route_types),
        )

        sem = asyncio.Semaphore(self.max_concurrency)
        batches = await asyncio.gather(
            *(self._lookup(sem, p, t) for p in samples for t in self.route_types)
        )

        seen: set[str] = set()
        for results in batches:
            for place in results:
                category = _category_for(place, self.route_types)
                if not category:
                    continue
                pid = place.get("place_id")
                if pid:
                    if pid in seen:
                        continue
                    seen.add(pid)
                places[category].append(place)

        logger.info(
            "places_along_route: found %s",
            " ".join(f"{k}={len(v)}" for k, v in places.items()),
        )
        return places

    # ──────────────────────────────────────────────────────────
    # Nearest to a position
    # ──────────────────────────────────────────────────────────

    async def nearest(self, pos: NavCoord, place_type: str) -> FindNearestResponse:
        try:
            results = await self.maps.nearby_search(
                pos.lat,
                pos.lng,
                radius_m=self.nearest_radius_m,
                place_type=place_type,
            )
        except GoogleMapsError as exc:
            service_unavailable("places_failed", f"Failed to fetch nearby places: {exc}")

        best: Optional[PlaceDict] = None
        best_d: Optional[float] = None
        origin = (pos.lat, pos.lng)
        for place in results:
            ll = _place_latlng(place)
            if ll is None:
                continue
            d = haversine_m(origin, ll)
            if best_d is None or d < best_d:
                best, best_d = place, d

        # Results without coordinates: fall back to Google's own ordering.
        if best is None and results:
            best = results[0]

        logger.info("places_nearest type=%s results=%d distance_m=%s", place_type, len(results), best_d)
        return FindNearestResponse(
            nearest=best,
            distance_m=round(best_d, 1) if best_d is not None else None,
        )
