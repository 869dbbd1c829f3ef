from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


# ──────────────────────────────────────────────────────────────
# Shared
# ──────────────────────────────────────────────────────────────

class NavCoord(BaseModel):
    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)

    def as_param(self) -> str:
        """Google's "lat,lng" location format."""
        return f"{self.lat},{self.lng}"


# Upstream place / route objects are passed through untouched.
PlaceDict = Dict[str, Any]


# ──────────────────────────────────────────────────────────────
# Route + places along it
# ──────────────────────────────────────────────────────────────

class RouteRequest(BaseModel):
    start: NavCoord
    destination: Union[NavCoord, str]   # address / place name or coordinates
    vehicleType: Optional[str] = None

    def destination_param(self) -> str:
        if isinstance(self.destination, NavCoord):
            return self.destination.as_param()
        return self.destination


class RouteResponse(BaseModel):
    route: Dict[str, Any]                       # Directions API route, as returned
    places: Dict[str, List[PlaceDict]]          # category -> places
    waypoints: int                              # decoded overview points
    fetched_at: str                             # ISO8601 UTC


# ──────────────────────────────────────────────────────────────
# Nearest place
# ──────────────────────────────────────────────────────────────

class FindNearestRequest(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    pos: NavCoord
    type: str = Field(min_length=1)             # Google place type, e.g. "gas_station"


class FindNearestResponse(BaseModel):
    nearest: Optional[PlaceDict] = None
    distance_m: Optional[float] = None


# ──────────────────────────────────────────────────────────────
# Polyline
# ──────────────────────────────────────────────────────────────

class PolylineDecodeRequest(BaseModel):
    polyline: str = Field(max_length=200_000)
    precision: int = Field(default=5, ge=1, le=7)


class PathPoint(BaseModel):
    lat: float
    lng: float


class PolylineDecodeResponse(BaseModel):
    points: List[PathPoint]
    count: int
