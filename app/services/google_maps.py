"""
Google Maps Platform client (Directions + Places Nearby Search).

Docs:
  https://developers.google.com/maps/documentation/directions/get-directions
  https://developers.google.com/maps/documentation/places/web-service/search-nearby

Both endpoints answer HTTP 200 even for most failures and report the real
outcome in the body's `status` field, so every response is checked twice.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import httpx

from app.core.settings import settings

logger = logging.getLogger(__name__)

# API-level statuses that carry a usable (possibly empty) payload.
_OK_STATUSES = frozenset({"OK", "ZERO_RESULTS"})


class GoogleMapsError(RuntimeError):
    def __init__(self, message: str, *, api_status: Optional[str] = None, http_status: Optional[int] = None):
        super().__init__(message)
        self.api_status = api_status
        self.http_status = http_status


class GoogleMaps:
    """Thin async wrapper around the Directions and Nearby Search JSON APIs."""

    def __init__(
        self,
        *,
        api_key: str,
        directions_url: str,
        places_url: str,
        timeout_s: float = 15.0,
        retries: int = 1,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key:
            raise RuntimeError(
                "GOOGLE_MAPS_API_KEY is not set. "
                "Add it to your .env or environment variables."
            )
        self.api_key = api_key
        self.directions_url = directions_url
        self.places_url = places_url
        self.client = httpx.AsyncClient(
            timeout=timeout_s,
            transport=transport or httpx.AsyncHTTPTransport(retries=retries),
        )

    @classmethod
    def from_settings(cls) -> "GoogleMaps":
        return cls(
            api_key=settings.google_maps_api_key,
            directions_url=settings.google_directions_url,
            places_url=settings.google_places_nearby_url,
            timeout_s=settings.google_timeout_s,
            retries=settings.google_retries,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _get_json(self, url: str, params: Dict[str, str], *, what: str) -> Dict[str, Any]:
        params = {**params, "key": self.api_key}
        try:
            r = await self.client.get(url, params=params)
            r.raise_for_status()
            data = r.json()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "google_%s_http_error status=%d body=%s",
                what,
                exc.response.status_code,
                exc.response.text[:500],
            )
            raise GoogleMapsError(
                f"Google {what} failed: HTTP {exc.response.status_code}",
                http_status=exc.response.status_code,
            ) from exc
        except httpx.TimeoutException as exc:
            logger.error("google_%s_timeout", what)
            raise GoogleMapsError(f"Google {what} timed out") from exc
        except httpx.HTTPError as exc:
            logger.error("google_%s_transport_error: %s", what, exc)
            raise GoogleMapsError(f"Google {what} request failed: {exc}") from exc
        except ValueError as exc:
            raise GoogleMapsError(f"Google {what} returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise GoogleMapsError(f"Google {what} returned an unexpected payload")

        api_status = str(data.get("status") or "")
        if api_status not in _OK_STATUSES:
            detail = data.get("error_message") or api_status or "missing status"
            logger.error("google_%s_api_error status=%s message=%s", what, api_status, detail)
            raise GoogleMapsError(f"Google {what} failed: {detail}", api_status=api_status)

        return data

    async def directions(
        self,
        origin: str,
        destination: str,
        *,
        mode: str = "driving",
        vehicle_type: str | None = None,
    ) -> Dict[str, Any]:
        params = {"origin": origin, "destination": destination, "mode": mode}
        if vehicle_type:
            params["vehicleType"] = vehicle_type
        return await self._get_json(self.directions_url, params, what="directions")

    async def nearby_search(
        self,
        lat: float,
        lng: float,
        *,
        radius_m: int,
        place_type: str,
    ) -> List[Dict[str, Any]]:
        params = {
            "location": f"{lat},{lng}",
            "radius": str(int(radius_m)),
            "type": place_type,
        }
        data = await self._get_json(self.places_url, params, what="places")
        results = data.get("results") or []
        return [r for r in results if isinstance(r, dict)]
