from __future__ import annotations

from pydantic import BaseModel, Field


class Coordinates(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    address: str | None = None


class FareEstimate(BaseModel):
    product_id: str
    display_name: str
    currency_code: str
    estimate: str
    low_estimate: int
    high_estimate: int
    surge_multiplier: float = 1.0
    duration_minutes: int


class TimeEstimate(BaseModel):
    product_id: str
    display_name: str
    estimate_minutes: int


class RideLink(BaseModel):
    deep_link: str
    web_url: str
    distance_km: float | None = None
    fare_estimates: list[FareEstimate] = Field(default_factory=list)
    time_estimates: list[TimeEstimate] = Field(default_factory=list)


class ItineraryRide(BaseModel):
    origin: str
    destination: str
    ride: RideLink


class RideLinkRequest(BaseModel):
    pickup: Coordinates | None = None
    destination: Coordinates
    product_id: str | None = None
