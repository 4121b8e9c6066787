# path: taxi-route-api/taxiroute/utils/geo.py

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Sequence
import math

Coordinate = Dict[str, float]
Path = List[Coordinate]

EARTH_RADIUS_M = 6371000.0
COORD_DECIMALS = 6
DEFAULT_TOLERANCE = 1e-5


def _as_float(value: Any) -> Optional[float]:
    # bool is an int subclass; a stray True must not become latitude 1.0
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def sanitize_coordinate(point: Any) -> Optional[Coordinate]:
    """
    Coerce one point into {"lat": float, "lng": float}.

    Accepts mappings (lat/lng, lat/lon, latitude/longitude), objects with
    lat/lng attributes (pydantic models) and (lat, lng) pairs. Returns None
    when either axis is missing, non-numeric or non-finite.
    """
    if point is None:
        return None
    if isinstance(point, dict):
        lat = point.get("lat", point.get("latitude"))
        lng = point.get("lng", point.get("lon", point.get("longitude")))
    elif isinstance(point, (list, tuple)):
        if len(point) != 2:
            return None
        lat, lng = point
    else:
        lat = getattr(point, "lat", None)
        lng = getattr(point, "lng", None)

    lat_f = _as_float(lat)
    lng_f = _as_float(lng)
    if lat_f is None or lng_f is None:
        return None
    return {"lat": lat_f, "lng": lng_f}


def round_coordinate(point: Coordinate, decimals: int = COORD_DECIMALS) -> Coordinate:
    return {"lat": round(point["lat"], decimals), "lng": round(point["lng"], decimals)}


def sanitize_list(points: Optional[Iterable[Any]]) -> Path:
    """Sanitize, round to 6 decimals and collapse consecutive duplicates."""
    out: Path = []
    for raw in points or []:
        p = sanitize_coordinate(raw)
        if p is None:
            continue
        p = round_coordinate(p)
        if out and out[-1] == p:
            continue
        out.append(p)
    return out


def clone_path(path: Sequence[Coordinate]) -> Path:
    return [{"lat": p["lat"], "lng": p["lng"]} for p in path]


def approximately_equal(a: Optional[Coordinate], b: Optional[Coordinate], tolerance: float = DEFAULT_TOLERANCE) -> bool:
    if a is None or b is None:
        return False
    return abs(a["lat"] - b["lat"]) <= tolerance and abs(a["lng"] - b["lng"]) <= tolerance


def paths_equal(a: Sequence[Coordinate], b: Sequence[Coordinate], tolerance: float = 1e-9) -> bool:
    if len(a) != len(b):
        return False
    return all(approximately_equal(p, q, tolerance) for p, q in zip(a, b))


def haversine_m(a_lat: float, a_lng: float, b_lat: float, b_lng: float) -> float:
    phi1 = math.radians(a_lat)
    phi2 = math.radians(b_lat)
    dphi = math.radians(b_lat - a_lat)
    dlmb = math.radians(b_lng - a_lng)

    s = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    # clamp: rounding can push s a hair above 1 for antipodal points
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(min(1.0, s)))


def distance_meters(a: Coordinate, b: Coordinate) -> float:
    return haversine_m(a["lat"], a["lng"], b["lat"], b["lng"])


def polyline_length_m(path: Sequence[Coordinate]) -> float:
    total = 0.0
    for i in range(1, len(path)):
        total += distance_meters(path[i - 1], path[i])
    return total
