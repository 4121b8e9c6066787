# path: taxi-route-api/taxiroute/clients/google_geocode.py

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple
import logging

import requests

from taxiroute.config import DEFAULT_GEOCODE_API_URL
from taxiroute.errors import GeocodeError
from taxiroute.utils.geo import Coordinate

logger = logging.getLogger(__name__)

CACHE_DECIMALS = 5

# address_components type -> field name used by region inference
COMPONENT_FIELDS = {
    "administrative_area_level_1": "province",
    "locality": "locality",
    "postal_town": "postalTown",
    "administrative_area_level_2": "adminArea",
    "sublocality": "sublocality",
    "sublocality_level_1": "sublocality",
}


class GoogleGeocodeClient:
    """
    Reverse-geocoding adapter. Calling the instance with one coordinate
    returns {"province", "locality", "postalTown", "adminArea", "sublocality"}
    or None when the service has no address there. Results, including
    misses, are cached by coordinate rounded to 5 decimals.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_GEOCODE_API_URL,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        if not api_key:
            raise ValueError("Geocoding API key is not set (GOOGLE_MAPS_API_KEY)")
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self._cache: Dict[Tuple[float, float], Optional[Dict[str, str]]] = {}

    def reverse(self, point: Coordinate) -> Optional[Dict[str, str]]:
        key = (round(point["lat"], CACHE_DECIMALS), round(point["lng"], CACHE_DECIMALS))
        if key in self._cache:
            return self._cache[key]

        params = {"latlng": f"{point['lat']:.6f},{point['lng']:.6f}", "key": self.api_key}
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            data = response.json()
        except requests.RequestException as exc:
            raise GeocodeError(f"Geocoding request failed: {exc}") from exc
        except ValueError as exc:
            raise GeocodeError(f"Geocoding returned invalid JSON (HTTP {response.status_code})") from exc

        status = data.get("status")
        if status == "ZERO_RESULTS":
            parts = None
        elif response.status_code != 200 or status != "OK":
            raise GeocodeError(f"Geocoding error: {status} {data.get('error_message', '')}".strip())
        else:
            parts = self.parse_address(data)

        # errors are not cached, a retry may succeed
        self._cache[key] = parts
        return parts

    __call__ = reverse

    @staticmethod
    def parse_address(data: Dict[str, Any]) -> Optional[Dict[str, str]]:
        parts: Dict[str, str] = {}
        for result in data.get("results") or []:
            for component in result.get("address_components") or []:
                name = component.get("long_name") or ""
                if not name:
                    continue
                for kind in component.get("types") or []:
                    field = COMPONENT_FIELDS.get(kind)
                    if field and field not in parts:
                        parts[field] = name
        return parts or None
