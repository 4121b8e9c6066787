# path: taxi-route-api/taxiroute/services/region.py

from __future__ import annotations

from collections import Counter
from typing import Callable, Dict, List, Optional, Sequence
import logging

from taxiroute.utils.geo import Coordinate, Path

logger = logging.getLogger(__name__)

# {"province", "locality", "postalTown", "adminArea", "sublocality"} or None
AddressParts = Dict[str, Optional[str]]
GeocodeClient = Callable[[Coordinate], Optional[AddressParts]]

DEFAULT_SAMPLES = 5
SAMPLE_KEY_DECIMALS = 5
CITY_FIELDS = ("locality", "postalTown", "adminArea", "sublocality")


def _sample_key(p: Coordinate) -> tuple:
    return (round(p["lat"], SAMPLE_KEY_DECIMALS), round(p["lng"], SAMPLE_KEY_DECIMALS))


def pick_sample_points(path: Sequence[Coordinate], samples: int = DEFAULT_SAMPLES) -> Path:
    """
    Representative points along a path: all of them for short paths,
    otherwise evenly spaced indexes with both endpoints always present.
    """
    if samples < 2:
        raise ValueError("samples must be at least 2")
    if len(path) <= samples:
        return list(path)

    last = len(path) - 1
    # half-up rounding, not round()'s banker's rounding
    interior = [int(i * last / (samples - 1) + 0.5) for i in range(1, samples - 1)]

    # endpoints always vote, even when a loop route ends where it started;
    # only interior samples are deduplicated
    seen = {_sample_key(path[0]), _sample_key(path[last])}
    picked: Path = [path[0]]
    for idx in interior:
        if idx <= 0 or idx >= last:
            continue
        p = path[idx]
        key = _sample_key(p)
        if key in seen:
            continue
        seen.add(key)
        picked.append(p)
    picked.append(path[last])
    return picked


def _clean(value: Optional[str]) -> str:
    return value.strip() if isinstance(value, str) else ""


def _city_of(parts: AddressParts) -> str:
    for field in CITY_FIELDS:
        value = _clean(parts.get(field))
        if value:
            return value
    return ""


def _majority(values: List[str]) -> str:
    if not values:
        return ""
    counts = Counter(values)
    best = max(counts.values())
    # Counter keeps insertion order, so the first-seen value wins a tie
    for value, count in counts.items():
        if count == best:
            return value
    return ""


def infer_region(path: Sequence[Coordinate], geocode_client: GeocodeClient, *, samples: int = DEFAULT_SAMPLES) -> Dict[str, str]:
    """
    Majority vote of province and city over reverse-geocoded sample points.

    One failing lookup never aborts the others. An axis with no votes comes
    back as "" so callers can keep a previously stored label.
    """
    provinces: List[str] = []
    cities: List[str] = []

    for point in pick_sample_points(path, samples):
        try:
            parts = geocode_client(point)
        except Exception as exc:  # noqa: BLE001
            logger.warning("reverse geocode failed for %.5f,%.5f: %s", point["lat"], point["lng"], exc)
            continue
        if not parts:
            logger.info("reverse geocode returned nothing for %.5f,%.5f", point["lat"], point["lng"])
            continue

        province = _clean(parts.get("province"))
        if province:
            provinces.append(province)
        city = _city_of(parts)
        if city:
            cities.append(city)

    return {"province": _majority(provinces), "city": _majority(cities)}
