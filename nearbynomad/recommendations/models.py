from __future__ import annotations

import numbers
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..rides.models import RideLink

EnergyTierName = Literal["very_low", "low", "medium", "high", "very_high"]
BudgetTierName = Literal["low", "medium", "high"]
TimeOfDay = Literal["morning", "midday", "afternoon", "evening", "night"]

_PRICE_TOKENS = {"free": 0, "$": 1, "$$": 2, "$$$": 3, "$$$$": 4}


class _CamelModel(BaseModel):
    """Accepts both snake_case and the camelCase keys the web client sends."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Place(_CamelModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    category: str = ""
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    rating: float = Field(default=0.0, ge=0.0, le=5.0)
    price_level: int = Field(default=1, ge=0, le=4)
    tags: tuple[str, ...] = ()
    wheelchair_accessible: bool = False
    pet_friendly: bool = False
    kid_friendly: bool = False
    transport_modes: frozenset[str] = frozenset()
    social_modes: frozenset[str] = frozenset()
    food_types: frozenset[str] = frozenset()
    energy_level: EnergyTierName | None = None
    address: str | None = None
    distance_km: float | None = Field(default=None, ge=0.0)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        if isinstance(value, bool):
            return value
        if isinstance(value, numbers.Real) and float(value).is_integer():
            return str(int(value))
        return str(value) if isinstance(value, numbers.Real) else value

    @field_validator("price_level", mode="before")
    @classmethod
    def _parse_price(cls, value):
        if value is None:
            return 1
        if isinstance(value, str):
            token = value.strip().lower()
            if token in _PRICE_TOKENS:
                return _PRICE_TOKENS[token]
        return value

    @field_validator("transport_modes", "social_modes", "food_types", mode="before")
    @classmethod
    def _lowercase_modes(cls, value):
        if value is None:
            return frozenset()
        return frozenset(str(v).strip().lower() for v in value)

    @field_validator("energy_level", mode="before")
    @classmethod
    def _energy_token(cls, value):
        if isinstance(value, str):
            return value.strip().lower().replace("-", "_").replace(" ", "_") or None
        return value

    def with_distance(self, distance_km: float) -> Place:
        return self.model_copy(update={"distance_km": distance_km})

    def satisfies(self, need: str) -> bool:
        """Whether the place meets one accessibility need (wheelchair, pet, kid)."""
        if need == "wheelchair":
            return self.wheelchair_accessible
        if need == "pet":
            return self.pet_friendly
        if need == "kid":
            return self.kid_friendly
        return False


class UserLocation(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    address: str | None = None


class RawPreferences(_CamelModel):
    """Preferences exactly as the mood form submits them."""

    mood: str | None = None
    interests: list[str] = Field(default_factory=list)
    energy_level: float | str | None = None
    budget: float | str | None = None
    transport: str | None = None
    social_mode: str | None = None
    accessibility: list[str] = Field(default_factory=list)
    food_types: list[str] = Field(default_factory=list)


class UserPreferences(BaseModel):
    model_config = ConfigDict(frozen=True)

    mood: str
    interests: frozenset[str] = frozenset()
    energy_level: EnergyTierName = "medium"
    budget: BudgetTierName = "medium"
    transport: str = "walk"
    social_mode: str = "solo"
    accessibility: frozenset[str] = frozenset()
    food_types: frozenset[str] = frozenset()
    time_of_day: TimeOfDay = "midday"


class ScoredPlace(BaseModel):
    place: Place
    recommendation_score: float = Field(..., ge=0.0)
    base_score: float = Field(..., ge=0.0)
    match_reason: str
    ride: RideLink | None = None


class ItineraryStop(BaseModel):
    step: int
    place: Place
    time_estimate_minutes: int
    cost_estimate: float
    description: str


class Itinerary(BaseModel):
    stops: list[ItineraryStop]
    total_time_minutes: int
    total_cost: float
    total_distance_km: float


class RecommendationRequest(BaseModel):
    preferences: RawPreferences
    user_location: UserLocation | None = None
    limit: int | None = Field(default=None, ge=1, le=50)
    group_by_category: bool = False


class RecommendationResponse(BaseModel):
    recommendations: list[ScoredPlace]
    total_places: int
    generated_at: datetime
    preferences: UserPreferences | None = None
    grouped: dict[str, list[ScoredPlace]] | None = None


class ItineraryRequest(BaseModel):
    places: list[Place]
    preferences: RawPreferences
    user_location: UserLocation | None = None


class SurpriseResponse(BaseModel):
    surprises: list[ScoredPlace]
    generated_at: datetime


class ScoreRequest(BaseModel):
    place: Place
    preferences: RawPreferences
    user_location: UserLocation | None = None


class ScoreResponse(BaseModel):
    place: str
    score: float
    breakdown: dict[str, float]
    match_reason: str


class ItineraryRidesRequest(BaseModel):
    places: list[Place] = Field(..., min_length=1)
    user_location: UserLocation | None = None
