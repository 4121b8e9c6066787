# path: taxi-route-api/taxiroute/services/route_normalizer.py

from __future__ import annotations

from typing import Optional
import logging

from taxiroute.models.route_models import RouteIn, StoredRoute
from taxiroute.services.region import GeocodeClient, infer_region
from taxiroute.utils.geo import sanitize_list

logger = logging.getLogger(__name__)


def normalize_route(
    route: RouteIn,
    *,
    geocode_client: Optional[GeocodeClient] = None,
    previous: Optional[StoredRoute] = None,
) -> RouteIn:
    """
    Prepare a submitted route for storage.

    - path and snappedPath are sanitized and rounded to 6 decimals
    - snappedPath falls back to path when snapping was never run
    - province/city are inferred from geometry when a geocoder is available;
      an axis the inference cannot fill keeps the submitted label, then the
      previously stored one
    """
    path = sanitize_list(route.path)
    snapped = sanitize_list(route.snapped_path)
    if len(snapped) < 2:
        snapped = list(path)

    province = route.province or (previous.province if previous else "")
    city = route.city or (previous.city if previous else "")

    geometry = snapped if len(snapped) >= 2 else path
    if geocode_client is not None and len(geometry) >= 2:
        region = infer_region(geometry, geocode_client)
        if region["province"]:
            province = region["province"]
        if region["city"]:
            city = region["city"]
        logger.debug("inferred region %s / %s", region["province"] or "-", region["city"] or "-")

    data = route.model_dump()
    data.update(path=path, snapped_path=snapped, province=province, city=city)
    return RouteIn.model_validate(data)
