from types import SimpleNamespace

import pytest

from nearbynomad.rides.config import DEFAULT_RIDE_CONFIG
from nearbynomad.rides.deep_links import (
    build_destination_link,
    build_ride_link,
    estimate_fares,
    estimate_pickup_times,
    itinerary_rides,
)

HOME = SimpleNamespace(latitude=12.9716, longitude=77.5946)


def _stop(name, lat, lon):
    return SimpleNamespace(name=name, latitude=lat, longitude=lon)


STOPS = [
    _stop("Cubbon Park", 12.9763, 77.5929),
    _stop("Brew & Bloom Cafe", 12.9721, 77.5933),
    _stop("Bull Temple", 12.9425, 77.5683),
]


def test_ride_link_deep_link_format():
    link = build_ride_link(HOME, STOPS[0])
    assert link.deep_link == (
        "uber://?action=setPickup"
        "&pickup[latitude]=12.9716&pickup[longitude]=77.5946"
        "&dropoff[latitude]=12.9763&dropoff[longitude]=77.5929"
    )
    assert link.web_url.startswith("https://m.uber.com/ul/?pickup[latitude]=12.9716")
    assert "action=" not in link.web_url


def test_ride_link_extras_are_url_encoded():
    link = build_ride_link(HOME, STOPS[1], product_id="uberx", dropoff_nickname=STOPS[1].name)
    assert "dropoff[nickname]=Brew%20%26%20Bloom%20Cafe" in link.deep_link
    assert link.deep_link.endswith("&product_id=uberx")


def test_ride_link_includes_estimates():
    link = build_ride_link(HOME, STOPS[2])
    assert link.distance_km > 0
    assert [f.product_id for f in link.fare_estimates] == [p.product_id for p in DEFAULT_RIDE_CONFIG.products]
    assert len(link.time_estimates) == len(DEFAULT_RIDE_CONFIG.products)


def test_short_rides_charge_minimum_fare():
    uberx = estimate_fares(0.5)[0]
    assert uberx.product_id == "uberx"
    assert uberx.low_estimate == 5
    assert uberx.currency_code == "USD"
    assert uberx.estimate.startswith("$5-")


def test_longer_rides_cost_more():
    short = {f.product_id: f.low_estimate for f in estimate_fares(12.0)}
    long = {f.product_id: f.low_estimate for f in estimate_fares(40.0)}
    assert all(long[k] > short[k] for k in short)


def test_pickup_times_have_a_floor():
    times = {t.product_id: t.estimate_minutes for t in estimate_pickup_times(0.1)}
    assert times["uberx"] == 5


def test_destination_link_uses_current_location():
    link = build_destination_link(STOPS[0], product_id="uberxl")
    assert link.deep_link.startswith("uber://?action=setDropoff&dropoff[latitude]=12.9763")
    assert "pickup" not in link.deep_link
    assert link.deep_link.endswith("product_id=uberxl")
    assert link.distance_km is None
    assert link.fare_estimates


@pytest.mark.parametrize(
    "point",
    [None, SimpleNamespace(latitude=95.0, longitude=0.0), SimpleNamespace(latitude="x", longitude=0.0)],
)
def test_invalid_coordinates_raise(point):
    with pytest.raises(ValueError):
        build_ride_link(HOME, point)
    with pytest.raises(ValueError):
        build_ride_link(point, HOME)


def test_itinerary_rides_with_user_location():
    rides = itinerary_rides(STOPS, HOME)
    assert len(rides) == 3
    assert rides[0].origin == "Your Location"
    assert rides[0].destination == "Cubbon Park"
    assert (rides[2].origin, rides[2].destination) == ("Brew & Bloom Cafe", "Bull Temple")


def test_itinerary_rides_without_user_location():
    rides = itinerary_rides(STOPS, None)
    assert len(rides) == 2
    assert rides[0].origin == "Cubbon Park"


def test_itinerary_rides_empty():
    assert itinerary_rides([], HOME) == []
