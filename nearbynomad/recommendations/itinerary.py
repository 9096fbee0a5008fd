from __future__ import annotations

from typing import Sequence

from ..geo import HasCoordinates, distance_km
from .models import Itinerary, ItineraryStop, Place, UserPreferences
from .tables import DEFAULT_TABLES, ScoringTables

_GROUP_FACTOR = 1.5
_ENERGY_TIME_FACTOR = {
    "very_low": 0.7,
    "low": 0.7,
    "medium": 1.0,
    "high": 1.3,
    "very_high": 1.3,
}


def _describe(index: int, count: int, name: str) -> str:
    if index == 0:
        return f"Start at {name}"
    if index == count - 1:
        return f"Finally {name}"
    return f"Then {name}"


def stop_time_minutes(place: Place, prefs: UserPreferences, tables: ScoringTables = DEFAULT_TABLES) -> int:
    minutes = float(tables.visit_duration(place.category))
    if prefs.social_mode == "friends":
        minutes *= _GROUP_FACTOR
    minutes *= _ENERGY_TIME_FACTOR[prefs.energy_level]
    return round(minutes)


def stop_cost(place: Place, prefs: UserPreferences, tables: ScoringTables = DEFAULT_TABLES) -> float:
    if tables.is_free_category(place.category):
        return 0.0
    cost = tables.price_level_cost.get(place.price_level, 0.0)
    if prefs.social_mode == "friends":
        cost *= _GROUP_FACTOR
    return round(cost, 2)


def _path_distance(places: Sequence[Place], start: HasCoordinates | None) -> float:
    if start is None:
        return sum(p.distance_km or 0.0 for p in places)
    total = 0.0
    previous: HasCoordinates = start
    for place in places:
        total += distance_km(previous, place)
        previous = place
    return total


def build_itinerary(
    places: Sequence[Place],
    prefs: UserPreferences,
    user_location: HasCoordinates | None = None,
    tables: ScoringTables = DEFAULT_TABLES,
) -> Itinerary:
    """
    Turn an already ranked slice of places into an ordered plan.

    Stops keep the given order. When ``user_location`` is known the total
    distance follows the walk from the user through every stop; otherwise
    it is the sum of each place's distance from the user.
    """
    stops = [
        ItineraryStop(
            step=i + 1,
            place=place,
            time_estimate_minutes=stop_time_minutes(place, prefs, tables),
            cost_estimate=stop_cost(place, prefs, tables),
            description=_describe(i, len(places), place.name),
        )
        for i, place in enumerate(places)
    ]

    return Itinerary(
        stops=stops,
        total_time_minutes=sum(s.time_estimate_minutes for s in stops),
        total_cost=round(sum(s.cost_estimate for s in stops), 2),
        total_distance_km=round(_path_distance(places, user_location), 2),
    )
