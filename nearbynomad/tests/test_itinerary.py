from types import SimpleNamespace

import pytest

from nearbynomad.geo import distance_km
from nearbynomad.recommendations.itinerary import build_itinerary, stop_cost, stop_time_minutes
from nearbynomad.recommendations.models import Place, UserPreferences

PREFS = UserPreferences(mood="happy")


def _place(pid, category, price_level=1, lat=12.97, lon=77.59, distance=1.0):
    return Place(
        id=pid,
        name=f"{category} {pid}",
        category=category,
        latitude=lat,
        longitude=lon,
        price_level=price_level,
        distance_km=distance,
    )


PLACES = [
    _place("1", "Restaurant", price_level=2, lat=12.9758, lon=77.6012, distance=0.8),
    _place("2", "Park", price_level=0, lat=12.9763, lon=77.5929, distance=0.5),
    _place("3", "Cafe", price_level=1, lat=12.9721, lon=77.5933, distance=0.2),
]


def test_stop_estimates_for_default_preferences():
    plan = build_itinerary(PLACES, PREFS)
    assert [s.time_estimate_minutes for s in plan.stops] == [75, 60, 45]
    assert [s.cost_estimate for s in plan.stops] == [25.0, 0.0, 10.0]
    assert plan.total_time_minutes == 180
    assert plan.total_cost == 35.0


def test_totals_equal_sum_of_stops():
    prefs = UserPreferences(mood="social", social_mode="friends", energy_level="high")
    plan = build_itinerary(PLACES, prefs)
    assert plan.total_time_minutes == sum(s.time_estimate_minutes for s in plan.stops)
    assert plan.total_cost == pytest.approx(sum(s.cost_estimate for s in plan.stops))


def test_descriptions_and_steps():
    plan = build_itinerary(PLACES, PREFS)
    assert [s.step for s in plan.stops] == [1, 2, 3]
    assert [s.description for s in plan.stops] == [
        "Start at Restaurant 1",
        "Then Park 2",
        "Finally Cafe 3",
    ]


def test_single_stop_starts_only():
    plan = build_itinerary(PLACES[:1], PREFS)
    assert plan.stops[0].description == "Start at Restaurant 1"


def test_friends_take_longer_and_cost_more():
    friends = UserPreferences(mood="social", social_mode="friends", energy_level="high")
    restaurant = PLACES[0]
    assert stop_time_minutes(restaurant, friends) == 146
    assert stop_cost(restaurant, friends) == pytest.approx(37.5)


def test_low_energy_shortens_visits():
    tired = UserPreferences(mood="tired", energy_level="low")
    assert stop_time_minutes(PLACES[1], tired) == 42


def test_free_categories_cost_nothing():
    temple = _place("t", "Temple", price_level=3)
    assert stop_cost(temple, PREFS) == 0.0
    assert stop_cost(PLACES[1], PREFS) == 0.0


def test_unknown_category_uses_default_duration():
    assert stop_time_minutes(_place("z", "Spaceport"), PREFS) == 60


def test_distance_without_location_sums_place_distances():
    plan = build_itinerary(PLACES, PREFS)
    assert plan.total_distance_km == pytest.approx(1.5)


def test_distance_with_location_follows_the_route():
    start = SimpleNamespace(latitude=12.9716, longitude=77.5946)
    plan = build_itinerary(PLACES, PREFS, user_location=start)
    expected = (
        distance_km(start, PLACES[0])
        + distance_km(PLACES[0], PLACES[1])
        + distance_km(PLACES[1], PLACES[2])
    )
    assert plan.total_distance_km == pytest.approx(round(expected, 2))


def test_empty_itinerary():
    plan = build_itinerary([], PREFS)
    assert plan.stops == []
    assert plan.total_time_minutes == 0
    assert plan.total_cost == 0.0
