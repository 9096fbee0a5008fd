from __future__ import annotations

from typing import Sequence

from .errors import EngineConfigurationError
from .models import ScoredPlace, UserPreferences
from .randomness import RandomSource, choice_index, shuffled
from .tables import DEFAULT_TABLES, ScoringTables


class SurpriseGenerator:
    """Picks a few places at random, ignoring their scores on purpose."""

    def __init__(self, random_source: RandomSource, tables: ScoringTables = DEFAULT_TABLES):
        if random_source is None or not isinstance(random_source, RandomSource):
            raise EngineConfigurationError("SurpriseGenerator requires a RandomSource with next_float()")
        self.random_source = random_source
        self.reasons = tables.surprise_reasons

    def generate(
        self,
        ranked: Sequence[ScoredPlace],
        prefs: UserPreferences | None = None,
        count: int = 3,
    ) -> list[ScoredPlace]:
        picks = shuffled(self.random_source, ranked)[:count]
        return [
            item.model_copy(update={
                "match_reason": self.reasons[choice_index(self.random_source, len(self.reasons))],
            })
            for item in picks
        ]
