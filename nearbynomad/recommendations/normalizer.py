from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping

from pydantic import ValidationError

from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .errors import PreferenceValidationError
from .models import RawPreferences, UserPreferences
from .tables import (
    ACCESSIBILITY_NEEDS,
    BUDGET_TIERS,
    ENERGY_TIERS,
    MOODS,
    TIME_BASED_PRESETS,
)

logger = logging.getLogger(__name__)

# Upper bounds (exclusive) of the 0-100 energy slider for each tier.
_ENERGY_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (20, "very_low"),
    (40, "low"),
    (60, "medium"),
    (80, "high"),
)

# Free-text spellings the form has used for accessibility needs.
_ACCESSIBILITY_ALIASES = {
    "wheelchair": "wheelchair",
    "wheelchair_accessible": "wheelchair",
    "pet": "pet",
    "pets": "pet",
    "pet_friendly": "pet",
    "kid": "kid",
    "kids": "kid",
    "kid_friendly": "kid",
}


def _token(value: Any) -> str:
    return str(value).strip().lower().replace("-", "_").replace(" ", "_")


def energy_tier(value: float | str | None) -> str:
    """Map the energy slider (0-100) or a tier name onto one of five tiers."""
    if value is None or value == "":
        return "medium"
    if isinstance(value, str):
        token = _token(value)
        if token in ENERGY_TIERS:
            return token
        try:
            value = float(token)
        except ValueError:
            raise PreferenceValidationError("energy_level", f"unrecognised value {value!r}") from None

    for upper, tier in _ENERGY_THRESHOLDS:
        if value < upper:
            return tier
    return "very_high"


def budget_tier(value: float | str | None, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> str:
    """Map a raw currency amount or a tier name onto low / medium / high."""
    if value is None or value == "":
        return "medium"
    if isinstance(value, str):
        token = _token(value).lstrip("$")
        if token in BUDGET_TIERS:
            return token
        try:
            value = float(token)
        except ValueError:
            raise PreferenceValidationError("budget", f"unrecognised value {value!r}") from None

    # Tiers rise with the amount: below low_below is low, below medium_below
    # is medium, anything at or above it is high.
    if value < config.budget_low_below:
        return "low"
    if value < config.budget_medium_below:
        return "medium"
    return "high"


def time_of_day(hour: int) -> str:
    if 6 <= hour < 10:
        return "morning"
    if 10 <= hour < 14:
        return "midday"
    if 14 <= hour < 18:
        return "afternoon"
    if 18 <= hour < 22:
        return "evening"
    return "night"


def _accessibility(values: list[str]) -> frozenset[str]:
    needs = set()
    for raw in values:
        need = _ACCESSIBILITY_ALIASES.get(_token(raw))
        if need in ACCESSIBILITY_NEEDS:
            needs.add(need)
    return frozenset(needs)


def normalize(
    raw: RawPreferences | Mapping[str, Any],
    now: datetime | None = None,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> UserPreferences:
    """
    Turn form input into canonical ``UserPreferences``.

    ``mood`` is the only required field and must be one of ``MOODS``.
    Everything else falls back to a neutral default. Unknown interests are
    kept; they simply carry no weight when scoring.
    """
    if not isinstance(raw, RawPreferences):
        try:
            raw = RawPreferences.model_validate(dict(raw or {}))
        except ValidationError as exc:
            error = exc.errors()[0]
            field = ".".join(str(part) for part in error["loc"]) or "preferences"
            raise PreferenceValidationError(field, error["msg"]) from exc

    if not raw.mood or not raw.mood.strip():
        raise PreferenceValidationError("mood", "a mood is required")
    mood = _token(raw.mood)
    if mood not in MOODS:
        raise PreferenceValidationError("mood", f"unknown mood {raw.mood!r}; expected one of {', '.join(MOODS)}")

    interests = frozenset(_token(i) for i in raw.interests if str(i).strip())
    # Same folding as Place.food_types so multi-word cuisines still intersect.
    food_types = frozenset(str(f).strip().lower() for f in raw.food_types if str(f).strip())
    if food_types and "eat" not in interests:
        logger.debug("Ignoring food types %s without the 'eat' interest", sorted(food_types))

    clock = now or datetime.now()
    return UserPreferences(
        mood=mood,
        interests=interests,
        energy_level=energy_tier(raw.energy_level),
        budget=budget_tier(raw.budget, config),
        transport=_token(raw.transport) if raw.transport else "walk",
        social_mode=_token(raw.social_mode) if raw.social_mode else "solo",
        accessibility=_accessibility(raw.accessibility),
        food_types=food_types,
        time_of_day=time_of_day(clock.hour),
    )


def time_based_preferences(hour: int) -> dict[str, Any]:
    """Preset raw preferences for the given hour of the day."""
    preset = dict(TIME_BASED_PRESETS[time_of_day(hour)])
    preset["interests"] = list(preset["interests"])
    return preset
