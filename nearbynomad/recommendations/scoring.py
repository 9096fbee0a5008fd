"""
Additive scoring of a single place against normalized preferences.

Each term is exposed as its own method so it can be inspected and tested in
isolation; ``score`` sums them and floors the total at zero.
"""
from __future__ import annotations

from .config import ScoringWeights
from .errors import EngineConfigurationError
from .models import Place, UserPreferences
from .tables import DEFAULT_TABLES, ScoringTables

# A single factor has to reach these levels before it is named in the reason.
_STRONG_CATEGORY_WEIGHT = 0.7
_HIGH_RATING = 4.0
_GENERIC_REASON = "Good match for your preferences"


class ScoringEngine:
    def __init__(
        self,
        tables: ScoringTables = DEFAULT_TABLES,
        weights: ScoringWeights | None = None,
    ):
        if tables is None:
            raise EngineConfigurationError("ScoringEngine requires lookup tables")
        self.tables = tables
        self.weights = weights or ScoringWeights()
        if self.weights.distance_penalty_per_km < 0 or self.weights.accessibility_miss < 0:
            raise EngineConfigurationError("Penalty rates must be non-negative")

    # -- individual terms -------------------------------------------------

    def mood_term(self, place: Place, prefs: UserPreferences) -> float:
        return self.tables.mood_weight(prefs.mood, place.category) * self.weights.mood

    def interest_term(self, place: Place, prefs: UserPreferences) -> float:
        # Summed without a cap so places matching several interests rise.
        return sum(
            self.tables.interest_weight(interest, place.category) * self.weights.interest
            for interest in prefs.interests
        )

    def max_distance_km(self, prefs: UserPreferences) -> float:
        return self.tables.energy_tiers[prefs.energy_level].max_distance_km

    def distance_term(self, place: Place, prefs: UserPreferences) -> float:
        distance = place.distance_km or 0.0
        max_distance = self.max_distance_km(prefs)
        if distance <= max_distance:
            return self.weights.distance * (1 - distance / max_distance)
        return -(distance - max_distance) * self.weights.distance_penalty_per_km

    def energy_term(self, place: Place, prefs: UserPreferences) -> float:
        """Flat bonus when the place is tagged with the user's own energy tier."""
        if place.energy_level is None or place.energy_level != prefs.energy_level:
            return 0.0
        return self.weights.energy_match

    def budget_term(self, place: Place, prefs: UserPreferences) -> float:
        max_price = self.tables.budget_max_price[prefs.budget]
        if place.price_level <= max_price:
            return self.weights.budget * (1 - place.price_level / max_price)
        return -(place.price_level - max_price) * self.weights.budget_penalty_per_level

    def transport_term(self, place: Place, prefs: UserPreferences) -> float:
        mode = self.tables.transport_modes.get(prefs.transport)
        if mode is None or prefs.transport not in place.transport_modes:
            return 0.0
        if (place.distance_km or 0.0) > mode.max_distance_km:
            return 0.0
        return self.weights.transport * mode.weight

    def social_term(self, place: Place, prefs: UserPreferences) -> float:
        if prefs.social_mode not in place.social_modes:
            return 0.0
        score = self.weights.social_mode
        mode = self.tables.social_modes.get(prefs.social_mode)
        if mode is not None:
            matching = sum(1 for tag in place.tags if tag.strip().lower() in mode.keywords)
            score += matching * self.weights.social_keyword
        return score

    def accessibility_term(self, place: Place, prefs: UserPreferences) -> float:
        score = 0.0
        for need in prefs.accessibility:
            if place.satisfies(need):
                score += self.weights.accessibility_match
            else:
                score -= self.weights.accessibility_miss
        return score

    def food_term(self, place: Place, prefs: UserPreferences) -> float:
        if "eat" not in prefs.interests or not self.tables.is_food_category(place.category):
            return 0.0
        return len(prefs.food_types & place.food_types) * self.weights.food_type

    def rating_term(self, place: Place, prefs: UserPreferences | None = None) -> float:
        return (place.rating - self.weights.rating_midpoint) * self.weights.rating

    def time_of_day_term(self, place: Place, prefs: UserPreferences) -> float:
        return self.tables.time_weight(prefs.time_of_day, place.category) * self.weights.time_of_day

    # -- aggregate ----------------------------------------------------------

    def score_breakdown(self, place: Place, prefs: UserPreferences) -> dict[str, float]:
        return {
            "mood": self.mood_term(place, prefs),
            "interest": self.interest_term(place, prefs),
            "distance": self.distance_term(place, prefs),
            "energy": self.energy_term(place, prefs),
            "budget": self.budget_term(place, prefs),
            "transport": self.transport_term(place, prefs),
            "social": self.social_term(place, prefs),
            "accessibility": self.accessibility_term(place, prefs),
            "food": self.food_term(place, prefs),
            "rating": self.rating_term(place, prefs),
            "time_of_day": self.time_of_day_term(place, prefs),
        }

    def score(self, place: Place, prefs: UserPreferences) -> float:
        return max(0.0, sum(self.score_breakdown(place, prefs).values()))

    def match_reason(self, place: Place, prefs: UserPreferences) -> str:
        """Comma-joined explanation built from the factors that clearly fired."""
        reasons: list[str] = []

        if self.tables.mood_weight(prefs.mood, place.category) > _STRONG_CATEGORY_WEIGHT:
            reasons.append(f"Perfect for {prefs.mood} mood")

        for interest in sorted(prefs.interests):
            if self.tables.interest_weight(interest, place.category) > _STRONG_CATEGORY_WEIGHT:
                reasons.append(f"Matches your {interest} interest")

        if (place.distance_km or 0.0) <= self.max_distance_km(prefs):
            reasons.append(f"Perfect distance for {prefs.energy_level.replace('_', ' ')} energy")

        if self.tables.social_weight(prefs.social_mode, place.category) > _STRONG_CATEGORY_WEIGHT:
            reasons.append(f"Great for {prefs.social_mode} visits")

        if prefs.accessibility and all(place.satisfies(need) for need in prefs.accessibility):
            reasons.append("Meets your accessibility needs")

        if place.rating > _HIGH_RATING:
            reasons.append(f"Highly rated ({place.rating:g}/5)")

        return ", ".join(reasons) if reasons else _GENERIC_REASON
