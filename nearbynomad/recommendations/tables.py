"""
Lookup tables that drive the scoring engine.

Everything here is built once by ``build_default_tables()`` and exposed as
read-only mappings; the engine receives a ``ScoringTables`` instance and never
mutates it. Category keys are matched case-insensitively, and anything not
listed simply weighs zero.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

MOODS = ("happy", "excited", "relaxed", "calm", "curious", "adventurous", "romantic", "tired", "sad", "social")
INTERESTS = ("eat", "relax", "play", "sightseeing", "nature", "sports", "events", "shop", "culture")
ENERGY_TIERS = ("very_low", "low", "medium", "high", "very_high")
BUDGET_TIERS = ("low", "medium", "high")
TRANSPORT_MODES = ("walk", "bike", "public", "car", "uber")
SOCIAL_MODES = ("solo", "friends", "family", "date")
ACCESSIBILITY_NEEDS = ("wheelchair", "pet", "kid")
TIME_OF_DAY_BUCKETS = ("morning", "midday", "afternoon", "evening", "night")


def category_key(category: str | None) -> str:
    return (category or "").strip().casefold()


def _weights(raw: dict[str, float]) -> Mapping[str, float]:
    return MappingProxyType({category_key(k): v for k, v in raw.items()})


def _frozen(raw: dict) -> Mapping:
    return MappingProxyType(dict(raw))


@dataclass(frozen=True)
class EnergyTier:
    max_distance_km: float
    label: str


@dataclass(frozen=True)
class TransportMode:
    max_distance_km: float
    weight: float


@dataclass(frozen=True)
class SocialMode:
    keywords: frozenset[str]
    categories: Mapping[str, float]


@dataclass(frozen=True)
class ScoringTables:
    moods: Mapping[str, Mapping[str, float]]
    interests: Mapping[str, Mapping[str, float]]
    energy_tiers: Mapping[str, EnergyTier]
    budget_max_price: Mapping[str, int]
    transport_modes: Mapping[str, TransportMode]
    social_modes: Mapping[str, SocialMode]
    time_of_day: Mapping[str, Mapping[str, float]]
    food_categories: frozenset[str]
    visit_minutes: Mapping[str, int]
    default_visit_minutes: int
    price_level_cost: Mapping[int, float]
    free_categories: frozenset[str]
    surprise_reasons: tuple[str, ...]
    # Display-case category weights, for clients; lookups use the casefolded maps.
    mood_labels: Mapping[str, Mapping[str, float]]
    interest_labels: Mapping[str, Mapping[str, float]]

    def mood_weight(self, mood: str, category: str) -> float:
        return self.moods.get(mood, {}).get(category_key(category), 0.0)

    def interest_weight(self, interest: str, category: str) -> float:
        return self.interests.get(interest, {}).get(category_key(category), 0.0)

    def social_weight(self, social_mode: str, category: str) -> float:
        mode = self.social_modes.get(social_mode)
        if mode is None:
            return 0.0
        return mode.categories.get(category_key(category), 0.0)

    def time_weight(self, bucket: str, category: str) -> float:
        return self.time_of_day.get(bucket, {}).get(category_key(category), 0.0)

    def is_food_category(self, category: str) -> bool:
        return category_key(category) in self.food_categories

    def is_free_category(self, category: str) -> bool:
        return category_key(category) in self.free_categories

    def visit_duration(self, category: str) -> int:
        return self.visit_minutes.get(category_key(category), self.default_visit_minutes)


def build_default_tables() -> ScoringTables:
    moods = {
        "happy": {"Cafe": 0.9, "Restaurant": 0.8, "Park": 0.7, "Sightseeing": 0.7,
                  "Entertainment": 0.7, "Shopping": 0.6, "Temple": 0.5},
        "excited": {"Adventure": 1.0, "Entertainment": 0.9, "Bar": 0.8, "Sightseeing": 0.8,
                    "Shopping": 0.6, "Park": 0.5, "Cafe": 0.4, "Temple": 0.3},
        "relaxed": {"Temple": 0.9, "Park": 0.9, "Spa": 0.9, "Cafe": 0.8, "Sightseeing": 0.6,
                    "Restaurant": 0.5, "Shopping": 0.3},
        "calm": {"Park": 0.9, "Temple": 0.9, "Garden": 0.9, "Cafe": 0.8, "Spa": 0.8,
                 "Museum": 0.6, "Restaurant": 0.4},
        "curious": {"Museum": 1.0, "Sightseeing": 0.9, "Temple": 0.8, "Cafe": 0.6,
                    "Restaurant": 0.5, "Shopping": 0.4},
        "adventurous": {"Adventure": 1.0, "Sightseeing": 0.7, "Park": 0.6, "Gym": 0.5,
                        "Cafe": 0.3, "Temple": 0.2, "Shopping": 0.1},
        "romantic": {"Restaurant": 0.9, "Cafe": 0.8, "Park": 0.7, "Sightseeing": 0.7,
                     "Bar": 0.6, "Shopping": 0.5, "Temple": 0.4},
        "tired": {"Cafe": 0.9, "Spa": 0.9, "Temple": 0.8, "Restaurant": 0.7, "Park": 0.6,
                  "Sightseeing": 0.3, "Shopping": 0.2},
        "sad": {"Park": 0.9, "Cafe": 0.8, "Temple": 0.8, "Garden": 0.8, "Restaurant": 0.6,
                "Museum": 0.4},
        "social": {"Restaurant": 0.9, "Bar": 0.9, "Cafe": 0.8, "Entertainment": 0.8,
                   "Shopping": 0.7, "Sightseeing": 0.5, "Temple": 0.3},
    }
    interests = {
        "eat": {"Restaurant": 1.0, "Fast Food": 0.9, "Cafe": 0.7, "Bar": 0.5, "Shopping": 0.3},
        "relax": {"Temple": 0.9, "Spa": 0.9, "Park": 0.8, "Cafe": 0.8, "Sightseeing": 0.6},
        "play": {"Entertainment": 1.0, "Playground": 0.9, "Adventure": 0.8, "Park": 0.7, "Gym": 0.6},
        "sightseeing": {"Sightseeing": 1.0, "Museum": 0.9, "Temple": 0.8, "Park": 0.6, "Cafe": 0.4},
        "nature": {"Park": 1.0, "Garden": 1.0, "Zoo": 0.9, "Adventure": 0.6},
        "sports": {"Gym": 1.0, "Stadium": 1.0, "Adventure": 0.7, "Park": 0.6},
        "events": {"Entertainment": 1.0, "Theater": 0.9, "Bar": 0.8, "Stadium": 0.7},
        "shop": {"Shopping": 1.0, "Cafe": 0.5, "Restaurant": 0.4},
        "culture": {"Temple": 0.9, "Museum": 0.9, "Sightseeing": 0.8, "Theater": 0.7, "Cafe": 0.4},
    }
    social_modes = {
        "solo": SocialMode(
            keywords=frozenset({"peaceful", "quiet", "cozy", "wifi"}),
            categories=_weights({"Temple": 0.9, "Cafe": 0.8, "Park": 0.7, "Museum": 0.7}),
        ),
        "friends": SocialMode(
            keywords=frozenset({"lively", "fun", "social", "live music"}),
            categories=_weights({"Restaurant": 0.9, "Bar": 0.9, "Entertainment": 0.8, "Shopping": 0.8}),
        ),
        "family": SocialMode(
            keywords=frozenset({"family", "safe", "comfortable", "kid friendly"}),
            categories=_weights({"Sightseeing": 0.9, "Park": 0.9, "Zoo": 0.9, "Temple": 0.8}),
        ),
        "date": SocialMode(
            keywords=frozenset({"romantic", "intimate", "beautiful", "scenic"}),
            categories=_weights({"Restaurant": 0.9, "Cafe": 0.8, "Bar": 0.7, "Park": 0.7}),
        ),
    }
    time_of_day = {
        "morning": {"Cafe": 1.0, "Park": 0.8, "Temple": 0.8, "Gym": 0.7},
        "midday": {"Restaurant": 1.0, "Fast Food": 0.8, "Museum": 0.7, "Shopping": 0.7, "Sightseeing": 0.7},
        "afternoon": {"Park": 0.8, "Museum": 0.8, "Shopping": 0.8, "Sightseeing": 0.8, "Cafe": 0.7},
        "evening": {"Restaurant": 1.0, "Bar": 0.8, "Entertainment": 0.8, "Theater": 0.8, "Park": 0.5},
        "night": {"Bar": 1.0, "Entertainment": 0.9, "Fast Food": 0.6},
    }
    visit_minutes = {
        "Restaurant": 75, "Cafe": 45, "Bar": 90, "Fast Food": 30, "Park": 60, "Temple": 45,
        "Shopping": 90, "Entertainment": 120, "Sightseeing": 60, "Museum": 90, "Adventure": 120,
        "Spa": 90, "Gym": 60, "Theater": 150, "Zoo": 120, "Garden": 45,
    }

    return ScoringTables(
        moods=_frozen({m: _weights(w) for m, w in moods.items()}),
        interests=_frozen({i: _weights(w) for i, w in interests.items()}),
        mood_labels=_frozen({m: _frozen(w) for m, w in moods.items()}),
        interest_labels=_frozen({i: _frozen(w) for i, w in interests.items()}),
        energy_tiers=_frozen({
            "very_low": EnergyTier(1.0, "Stay close"),
            "low": EnergyTier(2.0, "Short walks nearby"),
            "medium": EnergyTier(5.0, "Up to 5km radius"),
            "high": EnergyTier(10.0, "Happy to travel"),
            "very_high": EnergyTier(20.0, "Anywhere in the city"),
        }),
        budget_max_price=_frozen({"low": 1, "medium": 2, "high": 3}),
        transport_modes=_frozen({
            "walk": TransportMode(2.0, 1.0),
            "bike": TransportMode(5.0, 0.8),
            "public": TransportMode(10.0, 0.7),
            "car": TransportMode(20.0, 0.6),
            "uber": TransportMode(25.0, 0.6),
        }),
        social_modes=_frozen(social_modes),
        time_of_day=_frozen({b: _weights(w) for b, w in time_of_day.items()}),
        food_categories=frozenset(category_key(c) for c in ("Restaurant", "Cafe", "Bar", "Fast Food", "Bakery")),
        visit_minutes=_weights(visit_minutes),
        default_visit_minutes=60,
        price_level_cost=_frozen({0: 0.0, 1: 10.0, 2: 25.0, 3: 50.0, 4: 90.0}),
        free_categories=frozenset(category_key(c) for c in ("Park", "Temple")),
        surprise_reasons=(
            "A hidden gem worth exploring",
            "Something different from your usual picks",
            "A local favorite you might have missed",
            "Perfect for a spontaneous detour",
            "Step outside your comfort zone",
        ),
    )


DEFAULT_TABLES = build_default_tables()


# Display metadata for the profile endpoints.
MOOD_PROFILES = (
    {"id": "happy", "name": "Happy", "description": "Feeling joyful and energetic", "energy_level": "high"},
    {"id": "excited", "name": "Excited", "description": "Ready for adventure and fun", "energy_level": "high"},
    {"id": "relaxed", "name": "Relaxed", "description": "Taking it easy", "energy_level": "low"},
    {"id": "calm", "name": "Calm", "description": "Seeking peace and tranquility", "energy_level": "low"},
    {"id": "curious", "name": "Curious", "description": "Wants to learn something new", "energy_level": "medium"},
    {"id": "adventurous", "name": "Adventurous", "description": "Up for a challenge", "energy_level": "very_high"},
    {"id": "romantic", "name": "Romantic", "description": "Looking for intimate experiences", "energy_level": "medium"},
    {"id": "tired", "name": "Tired", "description": "Need rest and relaxation", "energy_level": "very_low"},
    {"id": "sad", "name": "Sad", "description": "Need comfort and healing", "energy_level": "low"},
    {"id": "social", "name": "Social", "description": "Wants to be around people", "energy_level": "medium"},
)

# Preset raw preferences served by the time-based endpoint, per hour bucket.
TIME_BASED_PRESETS = MappingProxyType({
    "morning": {"mood": "calm", "interests": ["relax", "eat"], "energy_level": 40,
                "description": "Morning recommendations"},
    "midday": {"mood": "happy", "interests": ["eat", "sightseeing"], "energy_level": 70,
               "description": "Lunch time recommendations"},
    "afternoon": {"mood": "calm", "interests": ["relax", "nature"], "energy_level": 50,
                  "description": "Afternoon recommendations"},
    "evening": {"mood": "romantic", "interests": ["eat", "relax"], "energy_level": 60,
                "description": "Evening recommendations"},
    "night": {"mood": "excited", "interests": ["events", "play"], "energy_level": 80,
              "description": "Night recommendations"},
})
