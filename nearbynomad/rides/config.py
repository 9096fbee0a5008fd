from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class RideProduct:
    product_id: str
    display_name: str
    fare_low: float
    fare_high: float
    pickup_factor: float
    duration_per_km: float = 2.0


@dataclass(frozen=True)
class RideConfig:
    client_id: str = os.getenv("UBER_CLIENT_ID", "")
    deep_link_base: str = "uber://"
    web_base: str = "https://m.uber.com/ul/"
    currency_code: str = "USD"
    fare_per_km: float = 0.5
    minimum_fare: float = 5.0
    minutes_per_km: float = 1.5
    minimum_pickup_minutes: float = 5.0
    products: tuple[RideProduct, ...] = (
        RideProduct("uberx", "UberX", 1.0, 1.3, 1.0),
        RideProduct("uberxl", "UberXL", 1.5, 1.8, 1.1),
        RideProduct("uberpool", "UberPool", 0.7, 0.9, 1.3, duration_per_km=2.5),
        RideProduct("uberblack", "UberBlack", 2.5, 3.0, 0.9),
    )


DEFAULT_RIDE_CONFIG = RideConfig()
