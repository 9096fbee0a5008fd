from __future__ import annotations

import logging
from collections import OrderedDict
from typing import Iterable

from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .errors import EngineConfigurationError
from .models import Place, ScoredPlace, UserPreferences
from .randomness import RandomSource, uniform
from .scoring import ScoringEngine

logger = logging.getLogger(__name__)


class Ranker:
    """
    Orders scored places and keeps repeated requests from looking identical.

    Every call re-samples a multiplicative jitter of ``1 ± randomization_spread``
    per place and, with ``rotation_probability``, moves the top pick to the
    end of the top-N list. Both draws come from the injected ``RandomSource``.
    """

    def __init__(
        self,
        engine: ScoringEngine,
        random_source: RandomSource,
        config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    ):
        if random_source is None or not isinstance(random_source, RandomSource):
            raise EngineConfigurationError("Ranker requires a RandomSource with next_float()")
        if not 0.0 <= config.randomization_spread < 1.0:
            raise EngineConfigurationError(
                f"randomization_spread must be in [0, 1), got {config.randomization_spread}"
            )
        if not 0.0 <= config.rotation_probability <= 1.0:
            raise EngineConfigurationError(
                f"rotation_probability must be in [0, 1], got {config.rotation_probability}"
            )
        if config.top_n < 1:
            raise EngineConfigurationError(f"top_n must be at least 1, got {config.top_n}")

        self.engine = engine
        self.random_source = random_source
        self.config = config

    def _jitter(self) -> float:
        spread = self.config.randomization_spread
        return uniform(self.random_source, 1.0 - spread, 1.0 + spread)

    def score_all(self, places: Iterable[Place], prefs: UserPreferences) -> list[ScoredPlace]:
        """Score, jitter and sort every place (highest first, nearest on ties)."""
        scored: list[ScoredPlace] = []
        for place in places:
            base = self.engine.score(place, prefs)
            scored.append(ScoredPlace(
                place=place,
                recommendation_score=round(base * self._jitter(), 2),
                base_score=round(base, 2),
                match_reason=self.engine.match_reason(place, prefs),
            ))

        scored.sort(key=lambda s: (-s.recommendation_score, s.place.distance_km or 0.0))
        return scored

    def select_top(self, scored: list[ScoredPlace], limit: int | None = None) -> list[ScoredPlace]:
        top = scored[: self.config.top_n if limit is None else limit]
        if len(top) > 1 and self.random_source.next_float() < self.config.rotation_probability:
            logger.debug("Rotating top pick %s to the end", top[0].place.id)
            top = top[1:] + top[:1]
        return top

    def rank(
        self,
        places: Iterable[Place],
        prefs: UserPreferences,
        limit: int | None = None,
    ) -> list[ScoredPlace]:
        return self.select_top(self.score_all(places, prefs), limit)


def group_by_category(scored: Iterable[ScoredPlace]) -> dict[str, list[ScoredPlace]]:
    """Partition an already-sorted list by category, preserving order."""
    groups: OrderedDict[str, list[ScoredPlace]] = OrderedDict()
    for item in scored:
        groups.setdefault(item.place.category or "Other", []).append(item)
    return dict(groups)
