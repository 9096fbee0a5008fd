from __future__ import annotations

import logging
from typing import Iterable, Sequence
from urllib.parse import quote

from ..geo import HasCoordinates, distance_km
from .config import DEFAULT_RIDE_CONFIG, RideConfig
from .models import FareEstimate, ItineraryRide, RideLink, TimeEstimate

logger = logging.getLogger(__name__)

# Distance assumed when the pickup point is unknown (current-location rides).
_UNKNOWN_PICKUP_KM = 5.0


def _validate(point: HasCoordinates | None, label: str) -> None:
    if point is None:
        raise ValueError(f"{label} location is required")
    lat = getattr(point, "latitude", None)
    lon = getattr(point, "longitude", None)
    if not isinstance(lat, (int, float)) or not isinstance(lon, (int, float)):
        raise ValueError(f"{label} location must have numeric latitude and longitude")
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
        raise ValueError(f"{label} location is out of range: ({lat}, {lon})")


def _query(params: Iterable[tuple[str, object]]) -> str:
    # Brackets stay literal; the ride app expects pickup[latitude]=... keys.
    return "&".join(f"{key}={quote(str(value), safe='')}" for key, value in params)


def _pickup_params(point: HasCoordinates) -> list[tuple[str, object]]:
    return [("pickup[latitude]", point.latitude), ("pickup[longitude]", point.longitude)]


def _dropoff_params(point: HasCoordinates) -> list[tuple[str, object]]:
    return [("dropoff[latitude]", point.latitude), ("dropoff[longitude]", point.longitude)]


def estimate_fares(km: float, config: RideConfig = DEFAULT_RIDE_CONFIG) -> list[FareEstimate]:
    base = max(config.minimum_fare, km * config.fare_per_km)
    estimates = []
    for product in config.products:
        low = round(base * product.fare_low)
        high = round(base * product.fare_high)
        estimates.append(FareEstimate(
            product_id=product.product_id,
            display_name=product.display_name,
            currency_code=config.currency_code,
            estimate=f"${low}-{high}",
            low_estimate=low,
            high_estimate=high,
            duration_minutes=round(km * product.duration_per_km),
        ))
    return estimates


def estimate_pickup_times(km: float, config: RideConfig = DEFAULT_RIDE_CONFIG) -> list[TimeEstimate]:
    base = max(config.minimum_pickup_minutes, km * config.minutes_per_km)
    return [
        TimeEstimate(
            product_id=product.product_id,
            display_name=product.display_name,
            estimate_minutes=round(base * product.pickup_factor),
        )
        for product in config.products
    ]


def build_ride_link(
    pickup: HasCoordinates,
    destination: HasCoordinates,
    product_id: str | None = None,
    dropoff_nickname: str | None = None,
    config: RideConfig = DEFAULT_RIDE_CONFIG,
) -> RideLink:
    """Deep link, web fallback and estimates for a ride between two points."""
    _validate(pickup, "Pickup")
    _validate(destination, "Destination")

    params: list[tuple[str, object]] = [("action", "setPickup")]
    params += _pickup_params(pickup) + _dropoff_params(destination)
    if dropoff_nickname:
        params.append(("dropoff[nickname]", dropoff_nickname))
    if product_id:
        params.append(("product_id", product_id))

    km = distance_km(pickup, destination)
    return RideLink(
        deep_link=f"{config.deep_link_base}?{_query(params)}",
        web_url=f"{config.web_base}?{_query(_pickup_params(pickup) + _dropoff_params(destination))}",
        distance_km=round(km, 2),
        fare_estimates=estimate_fares(km, config),
        time_estimates=estimate_pickup_times(km, config),
    )


def build_destination_link(
    destination: HasCoordinates,
    product_id: str | None = None,
    config: RideConfig = DEFAULT_RIDE_CONFIG,
) -> RideLink:
    """Link that lets the ride app pick the rider up wherever they are."""
    _validate(destination, "Destination")

    params: list[tuple[str, object]] = [("action", "setDropoff")] + _dropoff_params(destination)
    if product_id:
        params.append(("product_id", product_id))

    return RideLink(
        deep_link=f"{config.deep_link_base}?{_query(params)}",
        web_url=f"{config.web_base}?{_query(_dropoff_params(destination))}",
        fare_estimates=estimate_fares(_UNKNOWN_PICKUP_KM, config),
        time_estimates=estimate_pickup_times(_UNKNOWN_PICKUP_KM, config),
    )


def itinerary_rides(
    places: Sequence,
    user_location: HasCoordinates | None,
    config: RideConfig = DEFAULT_RIDE_CONFIG,
) -> list[ItineraryRide]:
    """Rides from the user to the first stop, then between consecutive stops."""
    rides: list[ItineraryRide] = []
    if not places:
        return rides

    if user_location is not None:
        rides.append(ItineraryRide(
            origin="Your Location",
            destination=places[0].name,
            ride=build_ride_link(user_location, places[0], dropoff_nickname=places[0].name, config=config),
        ))

    for current, nxt in zip(places, places[1:]):
        rides.append(ItineraryRide(
            origin=current.name,
            destination=nxt.name,
            ride=build_ride_link(current, nxt, dropoff_nickname=nxt.name, config=config),
        ))

    logger.debug("Built %d itinerary rides", len(rides))
    return rides
