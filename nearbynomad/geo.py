from __future__ import annotations

import math
from typing import Protocol

import numpy as np

EARTH_RADIUS_M = 6371e3


class HasCoordinates(Protocol):
    latitude: float
    longitude: float


def distance_meters(a: HasCoordinates, b: HasCoordinates) -> float:
    """Great-circle (haversine) distance between two points, in meters.

    Coordinates are expected to be valid; range checks happen where the
    points enter the system.
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    d_phi = math.radians(b.latitude - a.latitude)
    d_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def distance_km(a: HasCoordinates, b: HasCoordinates) -> float:
    return distance_meters(a, b) / 1000.0


def distances_km(latitudes, longitudes, origin: HasCoordinates) -> np.ndarray:
    """Vectorised haversine from ``origin`` to every (lat, lon) pair."""
    lat = np.radians(np.asarray(latitudes, dtype=float))
    lon = np.radians(np.asarray(longitudes, dtype=float))
    lat0 = math.radians(origin.latitude)
    lon0 = math.radians(origin.longitude)

    h = np.sin((lat - lat0) / 2) ** 2 + math.cos(lat0) * np.cos(lat) * np.sin((lon - lon0) / 2) ** 2
    return EARTH_RADIUS_M * 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h)) / 1000.0
