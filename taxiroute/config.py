# path: taxi-route-api/taxiroute/config.py

"""
Runtime configuration.

Values come from the environment, optionally seeded from a .env file:

    GOOGLE_MAPS_API_KEY=...        # empty disables snapping and geocoding
    ROUTES_PATH=data/routes.json
    HTTP_TIMEOUT_S=10
    LOG_LEVEL=INFO
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

from dotenv import load_dotenv

DEFAULT_ROADS_API_URL = "https://roads.googleapis.com/v1/snapToRoads"
DEFAULT_GEOCODE_API_URL = "https://maps.googleapis.com/maps/api/geocode/json"
DEFAULT_ROUTES_PATH = "data/routes.json"

# the Roads API takes at most 100 points per request; windows share a point
MIN_SNAP_CHUNK_SIZE = 2
MAX_SNAP_CHUNK_SIZE = 100


@dataclass(frozen=True)
class Settings:
    google_maps_api_key: str = ""
    routes_path: str = DEFAULT_ROUTES_PATH
    roads_api_url: str = DEFAULT_ROADS_API_URL
    geocode_api_url: str = DEFAULT_GEOCODE_API_URL
    http_timeout_s: float = 10.0
    snap_chunk_size: int = 100
    max_segment_m: float = 15.0
    log_level: str = "INFO"

    def __post_init__(self):
        if not MIN_SNAP_CHUNK_SIZE <= self.snap_chunk_size <= MAX_SNAP_CHUNK_SIZE:
            raise ValueError(
                f"SNAP_CHUNK_SIZE must be between {MIN_SNAP_CHUNK_SIZE} and "
                f"{MAX_SNAP_CHUNK_SIZE}, got {self.snap_chunk_size}"
            )
        if self.max_segment_m <= 0:
            raise ValueError(f"MAX_SEGMENT_M must be positive, got {self.max_segment_m}")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            google_maps_api_key=os.getenv("GOOGLE_MAPS_API_KEY", "").strip(),
            routes_path=os.getenv("ROUTES_PATH", DEFAULT_ROUTES_PATH),
            roads_api_url=os.getenv("ROADS_API_URL", DEFAULT_ROADS_API_URL),
            geocode_api_url=os.getenv("GEOCODE_API_URL", DEFAULT_GEOCODE_API_URL),
            http_timeout_s=float(os.getenv("HTTP_TIMEOUT_S", "10")),
            snap_chunk_size=int(os.getenv("SNAP_CHUNK_SIZE", "100")),
            max_segment_m=float(os.getenv("MAX_SEGMENT_M", "15")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    load_dotenv()
    return Settings.from_env()
