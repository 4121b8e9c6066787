# path: taxi-route-api/taxiroute/errors.py


class TaxiRouteError(Exception):
    """Base class for errors raised by taxiroute."""


class InvalidPathError(TaxiRouteError, ValueError):
    """Path has too few valid points for the requested operation."""


class RoadsApiError(TaxiRouteError):
    """The road-snapping service failed or returned a non-success response."""


class GeocodeError(TaxiRouteError):
    """The reverse-geocoding service failed or returned a non-success response."""


class RouteNotFoundError(TaxiRouteError, KeyError):
    def __init__(self, route_id: int):
        super().__init__(route_id)
        self.route_id = route_id

    def __str__(self) -> str:
        return f"Route {self.route_id} not found"
