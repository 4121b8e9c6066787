# path: taxi-route-api/taxiroute/editor/capabilities.py

"""Async snapper/saver builders for EditorSession."""

from __future__ import annotations

from typing import Any, Dict, Optional
import asyncio

from taxiroute.clients.route_api import RouteApiClient
from taxiroute.editor.session import Saver, Snapper
from taxiroute.models.route_models import RouteIn
from taxiroute.services.region import GeocodeClient
from taxiroute.services.road_snap import SnapClient, snap_path_to_roads
from taxiroute.services.route_normalizer import normalize_route
from taxiroute.services.route_store import RouteStore
from taxiroute.utils.geo import Path


def snapper_from_client(snap_client: SnapClient, **options: Any) -> Snapper:
    """In-process snapping; the blocking chunk loop runs in a worker thread."""

    async def snapper(path: Path) -> Path:
        return await asyncio.to_thread(snap_path_to_roads, path, snap_client, **options)

    return snapper


def saver_from_store(store: RouteStore, geocode_client: Optional[GeocodeClient] = None) -> Saver:
    def _save(payload: Dict[str, Any]) -> Dict[str, Any]:
        route = normalize_route(RouteIn.model_validate(payload), geocode_client=geocode_client)
        return store.create(route).model_dump(mode="json", by_alias=True)

    async def saver(payload: Dict[str, Any]) -> Dict[str, Any]:
        return await asyncio.to_thread(_save, payload)

    return saver


def snapper_from_api(client: RouteApiClient) -> Snapper:
    async def snapper(path: Path) -> Path:
        return await asyncio.to_thread(client.snap, path)

    return snapper


def saver_from_api(client: RouteApiClient) -> Saver:
    async def saver(payload: Dict[str, Any]) -> Dict[str, Any]:
        return await asyncio.to_thread(client.create, payload)

    return saver
