from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence, Union

from ..geo import HasCoordinates, distances_km
from ..rides.deep_links import build_destination_link, build_ride_link
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .itinerary import build_itinerary
from .models import (
    Itinerary,
    Place,
    RawPreferences,
    RecommendationResponse,
    ScoredPlace,
    UserPreferences,
)
from .normalizer import normalize
from .randomness import RandomSource, SystemRandomSource
from .ranking import Ranker, group_by_category
from .scoring import ScoringEngine
from .surprise import SurpriseGenerator
from .tables import DEFAULT_TABLES, ScoringTables

logger = logging.getLogger(__name__)

RawInput = Union[RawPreferences, Mapping[str, Any]]


class RecommendationService:
    """Wires normalizer, engine, ranker and generators for one catalog snapshot."""

    def __init__(
        self,
        random_source: RandomSource,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
        tables: ScoringTables = DEFAULT_TABLES,
    ):
        self.config = config
        self.tables = tables
        self.engine = ScoringEngine(tables, config.weights)
        self.ranker = Ranker(self.engine, random_source, config)
        self.surprise = SurpriseGenerator(random_source, tables)

    def _prepare(
        self,
        raw_preferences: RawInput,
        catalog: Sequence[Place],
        user_location: HasCoordinates | None,
        now: datetime | None,
    ) -> tuple[UserPreferences, list[Place]]:
        # Normalise first so invalid input fails before anything is scored.
        prefs = normalize(raw_preferences, now=now, config=self.config)
        return prefs, with_distances(catalog, user_location)

    def get_recommendations(
        self,
        raw_preferences: RawInput,
        catalog: Sequence[Place],
        user_location: HasCoordinates | None = None,
        limit: int | None = None,
        include_groups: bool = False,
        now: datetime | None = None,
    ) -> RecommendationResponse:
        start_time = time.time()
        prefs, places = self._prepare(raw_preferences, catalog, user_location, now)

        if not places:
            logger.info("Empty catalog for mood=%s; returning no recommendations", prefs.mood)
            return RecommendationResponse(
                recommendations=[],
                total_places=0,
                generated_at=datetime.now(timezone.utc),
                preferences=prefs,
                grouped={} if include_groups else None,
            )

        scored = self.ranker.score_all(places, prefs)
        top = self.ranker.select_top(scored, limit)
        top = [attach_ride(item, user_location) for item in top]

        elapsed_ms = round((time.time() - start_time) * 1000, 1)
        logger.info(
            "Scored %d places for mood=%s energy=%s budget=%s; returning %d in %.1f ms",
            len(places), prefs.mood, prefs.energy_level, prefs.budget, len(top), elapsed_ms,
        )

        return RecommendationResponse(
            recommendations=top,
            total_places=len(places),
            generated_at=datetime.now(timezone.utc),
            preferences=prefs,
            grouped=group_by_category(scored) if include_groups else None,
        )

    def generate_itinerary(
        self,
        places: Sequence[Place],
        raw_preferences: RawInput,
        user_location: HasCoordinates | None = None,
        now: datetime | None = None,
    ) -> Itinerary:
        prefs, located = self._prepare(raw_preferences, places, user_location, now)
        return build_itinerary(located, prefs, user_location, self.tables)

    def generate_surprise(
        self,
        raw_preferences: RawInput,
        catalog: Sequence[Place],
        user_location: HasCoordinates | None = None,
        now: datetime | None = None,
    ) -> list[ScoredPlace]:
        prefs, places = self._prepare(raw_preferences, catalog, user_location, now)
        ranked = self.ranker.score_all(places, prefs)
        picks = self.surprise.generate(ranked, prefs, self.config.surprise_count)
        return [attach_ride(item, user_location) for item in picks]

    def score_place(
        self,
        place: Place,
        raw_preferences: RawInput,
        user_location: HasCoordinates | None = None,
        now: datetime | None = None,
    ) -> tuple[float, dict[str, float], str]:
        prefs, located = self._prepare(raw_preferences, [place], user_location, now)
        target = located[0]
        return (
            self.engine.score(target, prefs),
            self.engine.score_breakdown(target, prefs),
            self.engine.match_reason(target, prefs),
        )


def with_distances(places: Sequence[Place], origin: HasCoordinates | None) -> list[Place]:
    """Stamp each place with its distance from ``origin`` (kept as-is without one)."""
    if origin is None or not places:
        return list(places)
    km = distances_km([p.latitude for p in places], [p.longitude for p in places], origin)
    return [place.with_distance(round(float(d), 3)) for place, d in zip(places, km)]


def attach_ride(item: ScoredPlace, user_location: HasCoordinates | None) -> ScoredPlace:
    place = item.place
    if user_location is not None:
        ride = build_ride_link(user_location, place, dropoff_nickname=place.name)
    else:
        ride = build_destination_link(place)
    return item.model_copy(update={"ride": ride})


def get_recommendations(
    raw_preferences: RawInput,
    catalog: Sequence[Place],
    user_location: HasCoordinates | None = None,
    random_source: RandomSource | None = None,
    **kwargs: Any,
) -> RecommendationResponse:
    """One-shot helper; a fresh OS-entropy source is used unless one is given."""
    service = RecommendationService(random_source or SystemRandomSource())
    return service.get_recommendations(raw_preferences, catalog, user_location, **kwargs)


def generate_itinerary(
    places: Sequence[Place],
    raw_preferences: RawInput,
    user_location: HasCoordinates | None = None,
) -> Itinerary:
    return RecommendationService(SystemRandomSource()).generate_itinerary(places, raw_preferences, user_location)


def generate_surprise(
    raw_preferences: RawInput,
    catalog: Sequence[Place],
    user_location: HasCoordinates | None = None,
    random_source: RandomSource | None = None,
) -> list[ScoredPlace]:
    service = RecommendationService(random_source or SystemRandomSource())
    return service.generate_surprise(raw_preferences, catalog, user_location)
