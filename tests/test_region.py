import pytest

from taxiroute.errors import GeocodeError
from taxiroute.services.region import infer_region, pick_sample_points

from conftest import FakeGeocoder


def _line(n):
    return [{"lat": -26.2 - i * 0.001, "lng": 28.05 + i * 0.001} for i in range(n)]


def test_short_paths_use_every_point():
    path = _line(4)
    assert pick_sample_points(path) == path


def test_long_paths_sample_evenly_with_endpoints():
    path = _line(101)
    samples = pick_sample_points(path)
    assert samples == [path[0], path[25], path[50], path[75], path[100]]


def test_sampling_dedupes_on_five_decimals():
    # interior points closer than 1e-5 to a sample are dropped
    path = [{"lat": -26.2 + i * 1e-7, "lng": 28.05} for i in range(10)]
    samples = pick_sample_points(path)
    assert samples == [path[0], path[9]]


def test_loop_route_keeps_both_endpoints():
    out_and_back = _line(6) + list(reversed(_line(6)))[1:]
    assert out_and_back[0] == out_and_back[-1]
    samples = pick_sample_points(out_and_back)
    assert samples[0] == out_and_back[0]
    assert samples[-1] == out_and_back[-1]
    assert len(samples) == 5


def test_loop_route_endpoint_gets_both_votes():
    loop = _line(6) + list(reversed(_line(6)))[1:]
    geocoder = FakeGeocoder(
        [
            {"province": "Gauteng", "locality": "Soweto"},
            {"province": "Gauteng", "locality": "Orlando"},
            {"province": "Gauteng", "locality": "Orlando"},
            {"province": "Gauteng", "locality": "Diepkloof"},
            {"province": "Gauteng", "locality": "Soweto"},
        ]
    )
    region = infer_region(loop, geocoder)
    assert len(geocoder.calls) == 5
    assert region["city"] == "Soweto"


def test_pick_sample_points_validates_count():
    with pytest.raises(ValueError):
        pick_sample_points(_line(10), samples=1)


def test_province_majority_vote():
    provinces = ["Gauteng", "Gauteng", "Gauteng", "Free State", "Gauteng"]
    geocoder = FakeGeocoder([{"province": p, "locality": "Johannesburg"} for p in provinces])
    region = infer_region(_line(50), geocoder)
    assert region == {"province": "Gauteng", "city": "Johannesburg"}
    assert len(geocoder.calls) == 5


def test_partial_failures_still_produce_labels():
    geocoder = FakeGeocoder(
        [
            GeocodeError("OVER_QUERY_LIMIT"),
            {"province": "Gauteng", "locality": "Soweto"},
            RuntimeError("timeout"),
            {"province": "Gauteng", "locality": "Soweto"},
            {"province": "Free State", "locality": "Sasolburg"},
        ]
    )
    region = infer_region(_line(50), geocoder)
    assert region == {"province": "Gauteng", "city": "Soweto"}
    assert len(geocoder.calls) == 5


def test_city_falls_back_through_address_fields():
    geocoder = FakeGeocoder(
        [
            {"province": "Gauteng", "locality": "", "postalTown": "Midrand"},
            {"province": "Gauteng", "adminArea": "City of Johannesburg"},
            {"province": "Gauteng", "sublocality": "Braamfontein"},
            {"province": "Gauteng", "postalTown": "Midrand", "adminArea": "Ekurhuleni"},
            None,
        ]
    )
    region = infer_region(_line(50), geocoder)
    assert region["city"] == "Midrand"


def test_ties_go_to_first_seen():
    geocoder = FakeGeocoder(
        [
            {"province": "Free State", "locality": "Sasolburg"},
            {"province": "Gauteng", "locality": "Vereeniging"},
        ]
    )
    region = infer_region(_line(2), geocoder)
    assert region == {"province": "Free State", "city": "Sasolburg"}


def test_total_failure_yields_empty_labels():
    geocoder = FakeGeocoder([GeocodeError("down")] * 5)
    assert infer_region(_line(50), geocoder) == {"province": "", "city": ""}


def test_empty_path_makes_no_calls():
    geocoder = FakeGeocoder([])
    assert infer_region([], geocoder) == {"province": "", "city": ""}
    assert geocoder.calls == []
