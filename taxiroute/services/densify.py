# path: taxi-route-api/taxiroute/services/densify.py

from __future__ import annotations

from typing import Sequence
import math

from taxiroute.utils.geo import Coordinate, Path, clone_path, distance_meters


DEFAULT_MAX_SEGMENT_M = 15.0


def _interpolate(a: Coordinate, b: Coordinate, steps: int) -> Path:
    return [
        {
            "lat": a["lat"] + (k / steps) * (b["lat"] - a["lat"]),
            "lng": a["lng"] + (k / steps) * (b["lng"] - a["lng"]),
        }
        for k in range(1, steps)
    ]


def _longest_gap(a: Coordinate, inner: Path, b: Coordinate) -> float:
    chain = [a] + inner + [b]
    return max(distance_meters(p, q) for p, q in zip(chain, chain[1:]))


def densify(path: Sequence[Coordinate], max_segment_m: float = DEFAULT_MAX_SEGMENT_M) -> Path:
    """
    Insert interpolated points so no consecutive pair is farther apart than
    max_segment_m. First and last input points are always kept; zero-length
    segments are dropped rather than duplicated.
    """
    if max_segment_m <= 0:
        raise ValueError("max_segment_m must be positive")
    if len(path) < 2:
        return clone_path(path)

    out: Path = [{"lat": path[0]["lat"], "lng": path[0]["lng"]}]

    for i in range(1, len(path)):
        a = path[i - 1]
        b = path[i]
        seg = distance_meters(a, b)
        if seg == 0:
            continue
        if seg > max_segment_m:
            steps = math.ceil(seg / max_segment_m)
            inner = _interpolate(a, b, steps)
            # lat/lng interpolation is not a great circle, so pieces of one
            # leg are not quite equal; add steps until the longest fits
            while _longest_gap(a, inner, b) > max_segment_m:
                steps += 1
                inner = _interpolate(a, b, steps)
            out.extend(inner)
        out.append({"lat": b["lat"], "lng": b["lng"]})

    return out
