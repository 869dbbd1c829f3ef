from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # Server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=3000, alias="PORT")
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Google Maps Platform
    google_maps_api_key: str = Field(default="", alias="GOOGLE_MAPS_API_KEY")
    google_directions_url: str = Field(
        default="https://maps.googleapis.com/maps/api/directions/json",
        alias="GOOGLE_DIRECTIONS_URL",
    )
    google_places_nearby_url: str = Field(
        default="https://maps.googleapis.com/maps/api/place/nearbysearch/json",
        alias="GOOGLE_PLACES_NEARBY_URL",
    )
    google_timeout_s: float = Field(default=15.0, alias="GOOGLE_TIMEOUT_S")
    google_retries: int = Field(default=1, alias="GOOGLE_RETRIES")

    # Routing
    travel_mode: str = Field(default="driving", alias="TRAVEL_MODE")
    route_sample_interval_km: float = Field(default=5.0, alias="ROUTE_SAMPLE_INTERVAL_KM")
    route_max_samples: int = Field(default=40, alias="ROUTE_MAX_SAMPLES")

    # Places
    places_route_types: str = Field(default="gas_station,rest_stop,lodging", alias="PLACES_ROUTE_TYPES")
    places_route_radius_m: int = Field(default=1000, alias="PLACES_ROUTE_RADIUS_M")
    places_nearest_radius_m: int = Field(default=5000, alias="PLACES_NEAREST_RADIUS_M")
    places_max_concurrency: int = Field(default=8, alias="PLACES_MAX_CONCURRENCY")

    @property
    def route_place_types(self) -> List[str]:
        return [t.strip() for t in self.places_route_types.split(",") if t.strip()]

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
