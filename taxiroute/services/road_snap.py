# path: taxi-route-api/taxiroute/services/road_snap.py

from __future__ import annotations

from typing import Callable, Iterator, List, Sequence
import logging

from taxiroute.services.densify import DEFAULT_MAX_SEGMENT_M, densify
from taxiroute.utils.geo import Coordinate, Path, approximately_equal, sanitize_coordinate

logger = logging.getLogger(__name__)

SnapClient = Callable[[Path], Sequence[Coordinate]]

MAX_POINTS_PER_CALL = 100
DUPLICATE_TOLERANCE_DEG = 1e-6
ANCHOR_TOLERANCE_DEG = 1e-5


def iter_windows(points: Sequence[Coordinate], chunk_size: int = MAX_POINTS_PER_CALL) -> Iterator[Path]:
    """
    Yield windows of at most chunk_size points advancing by chunk_size - 1,
    so each window starts on the previous window's last point.
    """
    if chunk_size < 2:
        raise ValueError("chunk_size must be at least 2")
    stride = chunk_size - 1
    for start in range(0, len(points) - 1, stride):
        yield list(points[start:start + chunk_size])


def snap_path_to_roads(
    path: Sequence[Coordinate],
    snap_client: SnapClient,
    *,
    chunk_size: int = MAX_POINTS_PER_CALL,
    max_segment_m: float = DEFAULT_MAX_SEGMENT_M,
) -> Path:
    """
    Densify a drawn path, snap it to roads window by window and stitch the
    results into one path that starts and ends on the drawn endpoints.

    Returns [] when there is nothing to snap or the service returned no
    points; callers treat that as "snap unavailable". Any failure from
    snap_client propagates, no partial path is ever returned.
    """
    dense = densify(path, max_segment_m)
    if len(dense) < 2:
        return []

    stitched: List[Coordinate] = []
    for n, window in enumerate(iter_windows(dense, chunk_size)):
        logger.debug("snapping window %d (%d points)", n, len(window))
        for raw in snap_client(window) or []:
            p = sanitize_coordinate(raw)
            if p is None:
                continue
            if stitched and approximately_equal(stitched[-1], p, DUPLICATE_TOLERANCE_DEG):
                continue
            stitched.append(p)

    if not stitched:
        logger.info("road snapping returned no points for %d-point path", len(dense))
        return []

    first = dense[0]
    last = dense[-1]
    if not approximately_equal(stitched[0], first, ANCHOR_TOLERANCE_DEG):
        stitched.insert(0, {"lat": first["lat"], "lng": first["lng"]})
    if not approximately_equal(stitched[-1], last, ANCHOR_TOLERANCE_DEG):
        stitched.append({"lat": last["lat"], "lng": last["lng"]})

    return stitched
