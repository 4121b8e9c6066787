import pytest

from taxiroute.services.route_store import RouteStore


class RecordingSnapClient:
    """Echoes each window back and remembers what it was asked."""

    def __init__(self, responses=None):
        self.calls = []
        self.responses = list(responses) if responses is not None else None

    def __call__(self, points):
        self.calls.append([dict(p) for p in points])
        if self.responses is None:
            return [dict(p) for p in points]
        if self.responses:
            return self.responses.pop(0)
        return []


class FakeGeocoder:
    """Returns canned address parts in order; Exception instances are raised."""

    def __init__(self, results):
        self.results = list(results)
        self.calls = []

    def __call__(self, point):
        self.calls.append(point)
        result = self.results.pop(0) if self.results else None
        if isinstance(result, Exception):
            raise result
        return result


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self._payload = payload
        self.status_code = status_code
        self.text = str(payload)

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests = []

    def get(self, url, params=None, timeout=None):
        self.requests.append({"url": url, "params": params, "timeout": timeout})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def joburg_path():
    # three clicks across Johannesburg, roughly 1.5 km apart
    return [
        {"lat": -26.20, "lng": 28.05},
        {"lat": -26.21, "lng": 28.06},
        {"lat": -26.22, "lng": 28.07},
    ]


@pytest.fixture
def store(tmp_path):
    return RouteStore(tmp_path / "routes.json")
