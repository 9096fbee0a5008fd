from __future__ import annotations

import logging
import os
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from .recommendations.data_store import get_catalog
from .recommendations.errors import CatalogError, PreferenceValidationError
from .recommendations.models import (
    Itinerary,
    ItineraryRequest,
    ItineraryRidesRequest,
    RawPreferences,
    RecommendationRequest,
    RecommendationResponse,
    ScoreRequest,
    ScoreResponse,
    SurpriseResponse,
    UserLocation,
)
from .recommendations.normalizer import time_based_preferences
from .recommendations.randomness import SystemRandomSource
from .recommendations.retrieval import RecommendationService
from .recommendations.tables import DEFAULT_TABLES, INTERESTS, MOOD_PROFILES
from .rides.deep_links import build_destination_link, build_ride_link, itinerary_rides
from .rides.models import ItineraryRide, RideLink, RideLinkRequest

logger = logging.getLogger(__name__)

app = FastAPI(title="NearbyNomad Recommendation API", version="1.0.0")

raw_origins = os.getenv("NEARBYNOMAD_ALLOWED_ORIGINS") or "*"
app.add_middleware(
    CORSMiddleware,
    allow_origins=[origin.strip() for origin in raw_origins.split(",") if origin.strip()] or ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

service = RecommendationService(SystemRandomSource())


def _catalog():
    try:
        return get_catalog()
    except CatalogError as exc:
        logger.error("Place catalog unavailable: %s", exc)
        raise HTTPException(status_code=503, detail="Place catalog unavailable") from exc


def _invalid(exc: PreferenceValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail={"field": exc.field, "message": exc.message})


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/recommendations/mood-profiles")
def mood_profiles() -> list[dict]:
    return [
        {**profile, "categories": sorted(DEFAULT_TABLES.mood_labels[profile["id"]])}
        for profile in MOOD_PROFILES
    ]


@app.get("/recommendations/interest-mappings")
def interest_mappings() -> dict[str, dict]:
    return {
        interest: {
            "name": interest.capitalize(),
            "categories": dict(DEFAULT_TABLES.interest_labels[interest]),
        }
        for interest in INTERESTS
    }


# ── Recommendation endpoints ─────────────────────────────────────────────


@app.post("/recommendations", response_model=RecommendationResponse)
def recommendations(body: RecommendationRequest) -> RecommendationResponse:
    catalog = _catalog()
    try:
        return service.get_recommendations(
            body.preferences,
            catalog,
            body.user_location,
            limit=body.limit,
            include_groups=body.group_by_category,
        )
    except PreferenceValidationError as exc:
        raise _invalid(exc) from exc


@app.post("/recommendations/itinerary", response_model=Itinerary)
def itinerary(body: ItineraryRequest) -> Itinerary:
    if not body.places:
        raise HTTPException(status_code=400, detail="Missing or invalid places array")
    try:
        return service.generate_itinerary(body.places, body.preferences, body.user_location)
    except PreferenceValidationError as exc:
        raise _invalid(exc) from exc


@app.post("/recommendations/surprise", response_model=SurpriseResponse)
def surprise(body: RecommendationRequest) -> SurpriseResponse:
    catalog = _catalog()
    try:
        picks = service.generate_surprise(body.preferences, catalog, body.user_location)
    except PreferenceValidationError as exc:
        raise _invalid(exc) from exc
    return SurpriseResponse(surprises=picks, generated_at=datetime.now(timezone.utc))


@app.post("/recommendations/score", response_model=ScoreResponse)
def score(body: ScoreRequest) -> ScoreResponse:
    try:
        total, breakdown, reason = service.score_place(body.place, body.preferences, body.user_location)
    except PreferenceValidationError as exc:
        raise _invalid(exc) from exc
    return ScoreResponse(
        place=body.place.name,
        score=round(total, 2),
        breakdown={k: round(v, 2) for k, v in breakdown.items()},
        match_reason=reason,
    )


@app.get("/recommendations/time-based")
def time_based(
    latitude: float = Query(..., ge=-90.0, le=90.0),
    longitude: float = Query(..., ge=-180.0, le=180.0),
    hour: int | None = Query(default=None, ge=0, le=23),
) -> dict:
    now = datetime.now()
    if hour is not None:
        now = now.replace(hour=hour)
    preset = time_based_preferences(now.hour)
    response = service.get_recommendations(
        RawPreferences.model_validate(preset),
        _catalog(),
        UserLocation(latitude=latitude, longitude=longitude),
        limit=5,
        now=now,
    )
    return {
        "recommendations": [item.model_dump(mode="json") for item in response.recommendations],
        "time_based_preferences": preset,
        "current_hour": now.hour,
    }


# ── Ride endpoints ───────────────────────────────────────────────────────


@app.post("/rides/link", response_model=RideLink)
def ride_link(body: RideLinkRequest) -> RideLink:
    if body.pickup is None:
        return build_destination_link(body.destination, product_id=body.product_id)
    return build_ride_link(body.pickup, body.destination, product_id=body.product_id)


@app.post("/rides/itinerary", response_model=list[ItineraryRide])
def ride_itinerary(body: ItineraryRidesRequest) -> list[ItineraryRide]:
    return itinerary_rides(body.places, body.user_location)
