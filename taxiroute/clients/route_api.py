# path: taxi-route-api/taxiroute/clients/route_api.py

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

import requests

from taxiroute.errors import RoadsApiError, RouteNotFoundError
from taxiroute.utils.geo import Coordinate, Path


class RouteApiClient:
    """
    Client for the route HTTP API, used by editors that run outside the
    server process. Route payloads and records are camelCase dicts, the
    same shape the API speaks.
    """

    def __init__(self, base_url: str, *, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, suffix: str = "") -> str:
        return f"{self.base_url}/api/routes{suffix}"

    def _request(self, method: str, suffix: str = "", **kwargs) -> requests.Response:
        return self.session.request(method, self._url(suffix), timeout=self.timeout, **kwargs)

    @staticmethod
    def _detail(response: requests.Response) -> str:
        try:
            return str(response.json().get("detail", response.text))
        except ValueError:
            return response.text

    def snap(self, path: Sequence[Coordinate]) -> Path:
        response = self._request("POST", "/snap", json={"path": list(path)})
        if response.status_code == 503:
            # snapping unavailable: same meaning as an empty stitched result
            return []
        if response.status_code == 502:
            raise RoadsApiError(self._detail(response))
        response.raise_for_status()
        return [{"lat": p["lat"], "lng": p["lng"]} for p in response.json()["snappedPath"]]

    def infer_region(self, path: Sequence[Coordinate]) -> Dict[str, str]:
        response = self._request("POST", "/region", json={"path": list(path)})
        response.raise_for_status()
        return response.json()

    def list(self) -> List[Dict[str, Any]]:
        response = self._request("GET")
        response.raise_for_status()
        return response.json()

    def get(self, route_id: int) -> Dict[str, Any]:
        response = self._request("GET", f"/{route_id}")
        if response.status_code == 404:
            raise RouteNotFoundError(route_id)
        response.raise_for_status()
        return response.json()

    def create(self, route: Dict[str, Any]) -> Dict[str, Any]:
        response = self._request("POST", json=route)
        response.raise_for_status()
        return response.json()

    def update(self, route_id: int, route: Dict[str, Any]) -> Dict[str, Any]:
        response = self._request("PUT", f"/{route_id}", json=route)
        if response.status_code == 404:
            raise RouteNotFoundError(route_id)
        response.raise_for_status()
        return response.json()

    def delete(self, route_id: int) -> None:
        response = self._request("DELETE", f"/{route_id}")
        if response.status_code == 404:
            raise RouteNotFoundError(route_id)
        response.raise_for_status()
