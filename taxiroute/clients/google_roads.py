# path: taxi-route-api/taxiroute/clients/google_roads.py

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence
import logging

import requests

from taxiroute.config import DEFAULT_ROADS_API_URL
from taxiroute.errors import RoadsApiError
from taxiroute.utils.geo import Coordinate, Path

logger = logging.getLogger(__name__)

MAX_POINTS_PER_REQUEST = 100


class GoogleRoadsClient:
    """
    Snap-to-roads adapter. Calling the instance with up to 100 points makes
    one HTTPS request and returns the snapped points in traversal order, so
    it plugs straight into snap_path_to_roads as the snap_client.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_ROADS_API_URL,
        timeout: float = 10.0,
        interpolate: bool = True,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("Roads API key is not set (GOOGLE_MAPS_API_KEY)")
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.interpolate = interpolate
        self.session = session or requests.Session()

    @staticmethod
    def format_path(points: Sequence[Coordinate]) -> str:
        return "|".join(f"{p['lat']:.6f},{p['lng']:.6f}" for p in points)

    def snap(self, points: Sequence[Coordinate]) -> Path:
        if not points:
            return []
        if len(points) > MAX_POINTS_PER_REQUEST:
            raise ValueError(f"at most {MAX_POINTS_PER_REQUEST} points per request, got {len(points)}")

        params = {
            "path": self.format_path(points),
            "interpolate": "true" if self.interpolate else "false",
            "key": self.api_key,
        }
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise RoadsApiError(f"Roads API request failed: {exc}") from exc

        data = self._json(response)
        if response.status_code != 200 or "error" in data:
            error = data.get("error") or {}
            message = error.get("message") or f"HTTP {response.status_code}"
            raise RoadsApiError(f"Roads API error: {message}")

        if data.get("warningMessage"):
            logger.warning("Roads API warning: %s", data["warningMessage"])

        return self.parse_snapped_points(data)

    __call__ = snap

    @staticmethod
    def _json(response: requests.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            raise RoadsApiError(f"Roads API returned invalid JSON (HTTP {response.status_code})") from exc
        if not isinstance(data, dict):
            raise RoadsApiError("Roads API returned an unexpected payload")
        return data

    @staticmethod
    def parse_snapped_points(data: Dict[str, Any]) -> Path:
        out: List[Coordinate] = []
        for item in data.get("snappedPoints") or []:
            location = item.get("location") or {}
            lat = location.get("latitude")
            lng = location.get("longitude")
            if lat is None or lng is None:
                continue
            out.append({"lat": float(lat), "lng": float(lng)})
        return out
