import pytest

from taxiroute.errors import RoadsApiError
from taxiroute.services.densify import densify
from taxiroute.services.road_snap import iter_windows, snap_path_to_roads
from taxiroute.utils.geo import approximately_equal

from conftest import RecordingSnapClient


def _dense_line(n, start_lat=-26.2, lng=28.05, step=0.00009):
    # ~10 m apart along a meridian, already below the densify threshold
    return [{"lat": start_lat - i * step, "lng": lng} for i in range(n)]


def test_windows_share_boundary_points():
    points = _dense_line(250)
    windows = list(iter_windows(points, 100))
    assert [len(w) for w in windows] == [100, 100, 52]
    assert windows[0][-1] == windows[1][0]
    assert windows[1][-1] == windows[2][0]
    assert windows[-1][-1] == points[-1]


def test_iter_windows_rejects_tiny_chunks():
    with pytest.raises(ValueError):
        list(iter_windows(_dense_line(5), 1))


def test_199_points_make_exactly_two_calls_without_duplicate_boundary():
    path = _dense_line(199)
    assert len(densify(path)) == 199

    client = RecordingSnapClient()
    out = snap_path_to_roads(path, client)

    assert len(client.calls) == 2
    assert len(out) == 199
    for a, b in zip(out, out[1:]):
        assert not approximately_equal(a, b, 1e-6)


def test_less_than_two_points_returns_empty_without_calls():
    client = RecordingSnapClient()
    assert snap_path_to_roads([{"lat": -26.2, "lng": 28.05}], client) == []
    assert snap_path_to_roads([], client) == []
    assert client.calls == []


def test_empty_service_result_means_unavailable(joburg_path):
    client = RecordingSnapClient(responses=[])
    assert snap_path_to_roads(joburg_path, client) == []
    assert len(client.calls) >= 1


def test_endpoints_are_force_anchored(joburg_path):
    # service trims both ends and shifts everything onto a nearby road
    road = [
        {"lat": -26.2030, "lng": 28.0531},
        {"lat": -26.2100, "lng": 28.0598},
        {"lat": -26.2170, "lng": 28.0671},
    ]
    client = RecordingSnapClient(responses=[road])
    out = snap_path_to_roads(joburg_path, client)

    assert approximately_equal(out[0], joburg_path[0])
    assert approximately_equal(out[-1], joburg_path[-1])
    assert out[1:-1] == road


def test_anchor_not_added_when_service_keeps_endpoints():
    path = _dense_line(10)
    client = RecordingSnapClient()
    out = snap_path_to_roads(path, client)
    assert out == path


def test_near_duplicate_points_are_dropped():
    path = _dense_line(3)
    p = path[1]
    client = RecordingSnapClient(
        responses=[[path[0], p, {"lat": p["lat"] + 5e-7, "lng": p["lng"]}, path[2]]]
    )
    out = snap_path_to_roads(path, client)
    assert out == path


def test_invalid_points_from_service_are_ignored():
    path = _dense_line(3)
    client = RecordingSnapClient(responses=[[path[0], {"lat": None, "lng": 1.0}, path[2]]])
    assert snap_path_to_roads(path, client) == [path[0], path[2]]


def test_window_failure_fails_the_whole_snap():
    path = _dense_line(250)
    calls = []

    def flaky(points):
        calls.append(points)
        if len(calls) == 2:
            raise RoadsApiError("quota exceeded")
        return points

    with pytest.raises(RoadsApiError, match="quota exceeded"):
        snap_path_to_roads(path, flaky)
    assert len(calls) == 2


def test_windows_are_sent_in_path_order(joburg_path):
    client = RecordingSnapClient()
    snap_path_to_roads(joburg_path, client)
    dense = densify(joburg_path)
    assert client.calls[0][0] == dense[0]
    assert client.calls[-1][-1] == dense[-1]
    for prev, nxt in zip(client.calls, client.calls[1:]):
        assert prev[-1] == nxt[0]
        assert len(prev) <= 100
