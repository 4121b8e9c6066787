# path: taxi-route-api/taxiroute/api/routes/routes.py

from __future__ import annotations

from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from taxiroute.api.deps import get_geocode_client, get_route_store, get_snap_client
from taxiroute.config import Settings, get_settings
from taxiroute.errors import RoadsApiError, RouteNotFoundError
from taxiroute.models.route_models import (
    ConfigResponse,
    PathRequest,
    RegionLabel,
    RouteIn,
    SnapResponse,
    StoredRoute,
)
from taxiroute.services.region import GeocodeClient, infer_region
from taxiroute.services.road_snap import SnapClient, snap_path_to_roads
from taxiroute.services.route_normalizer import normalize_route
from taxiroute.services.route_store import RouteStore
from taxiroute.utils.geo import sanitize_list

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/routes", tags=["routes"])
config_router = APIRouter(tags=["config"])


@config_router.get("/config", response_model=ConfigResponse)
def read_config(settings: Settings = Depends(get_settings)) -> ConfigResponse:
    return ConfigResponse(maps_api_key=settings.google_maps_api_key)


@router.get("", response_model=List[StoredRoute])
def list_routes(store: RouteStore = Depends(get_route_store)) -> List[StoredRoute]:
    return store.list()


@router.post("/snap", response_model=SnapResponse)
def snap_route(
    body: PathRequest,
    snap_client: Optional[SnapClient] = Depends(get_snap_client),
    settings: Settings = Depends(get_settings),
) -> SnapResponse:
    path = sanitize_list(body.path)
    if len(path) < 2:
        raise HTTPException(status_code=400, detail="Path needs at least 2 distinct points to snap")
    if snap_client is None:
        raise HTTPException(status_code=503, detail="Road snapping is not configured")
    try:
        snapped = snap_path_to_roads(
            path,
            snap_client,
            chunk_size=settings.snap_chunk_size,
            max_segment_m=settings.max_segment_m,
        )
    except RoadsApiError as e:
        logger.warning("snap failed: %s", e)
        raise HTTPException(status_code=502, detail=str(e))
    if not snapped:
        raise HTTPException(status_code=503, detail="Road snapping returned no points, try again")
    snapped = sanitize_list(snapped)
    return SnapResponse(snapped_path=snapped, point_count=len(snapped))


@router.post("/region", response_model=RegionLabel)
def infer_route_region(
    body: PathRequest,
    geocode_client: Optional[GeocodeClient] = Depends(get_geocode_client),
) -> RegionLabel:
    path = sanitize_list(body.path)
    if not path:
        raise HTTPException(status_code=400, detail="Path has no valid points")
    if geocode_client is None:
        return RegionLabel()
    return RegionLabel(**infer_region(path, geocode_client))


@router.get("/{route_id}", response_model=StoredRoute)
def read_route(route_id: int, store: RouteStore = Depends(get_route_store)) -> StoredRoute:
    try:
        return store.get(route_id)
    except RouteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=StoredRoute, status_code=status.HTTP_201_CREATED)
def create_route(
    route: RouteIn,
    store: RouteStore = Depends(get_route_store),
    geocode_client: Optional[GeocodeClient] = Depends(get_geocode_client),
) -> StoredRoute:
    normalized = normalize_route(route, geocode_client=geocode_client)
    if len(normalized.path) == 1:
        raise HTTPException(status_code=400, detail="Path needs at least 2 distinct points")
    return store.create(normalized)


@router.put("/{route_id}", response_model=StoredRoute)
def update_route(
    route_id: int,
    route: RouteIn,
    store: RouteStore = Depends(get_route_store),
    geocode_client: Optional[GeocodeClient] = Depends(get_geocode_client),
) -> StoredRoute:
    try:
        previous = store.get(route_id)
        normalized = normalize_route(route, geocode_client=geocode_client, previous=previous)
        if len(normalized.path) == 1:
            raise HTTPException(status_code=400, detail="Path needs at least 2 distinct points")
        return store.update(route_id, normalized)
    except RouteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{route_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_route(route_id: int, store: RouteStore = Depends(get_route_store)) -> Response:
    try:
        store.delete(route_id)
    except RouteNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
