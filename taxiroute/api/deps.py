# path: taxi-route-api/taxiroute/api/deps.py

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from taxiroute.clients.google_geocode import GoogleGeocodeClient
from taxiroute.clients.google_roads import GoogleRoadsClient
from taxiroute.config import get_settings
from taxiroute.services.region import GeocodeClient
from taxiroute.services.road_snap import SnapClient
from taxiroute.services.route_store import RouteStore


@lru_cache(maxsize=1)
def get_route_store() -> RouteStore:
    return RouteStore(get_settings().routes_path)


@lru_cache(maxsize=1)
def get_snap_client() -> Optional[SnapClient]:
    settings = get_settings()
    if not settings.google_maps_api_key:
        return None
    return GoogleRoadsClient(
        settings.google_maps_api_key,
        base_url=settings.roads_api_url,
        timeout=settings.http_timeout_s,
    )


@lru_cache(maxsize=1)
def get_geocode_client() -> Optional[GeocodeClient]:
    settings = get_settings()
    if not settings.google_maps_api_key:
        return None
    return GoogleGeocodeClient(
        settings.google_maps_api_key,
        base_url=settings.geocode_api_url,
        timeout=settings.http_timeout_s,
    )
