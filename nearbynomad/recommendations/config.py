from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_DEFAULT_CATALOG = Path(__file__).resolve().parent.parent / "data" / "places.json"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


@dataclass(frozen=True)
class ScoringWeights:
    """Multipliers applied to each scoring term."""

    mood: float = 30.0
    interest: float = 20.0
    distance: float = 20.0
    distance_penalty_per_km: float = 2.0
    energy_match: float = 15.0
    budget: float = 15.0
    budget_penalty_per_level: float = 5.0
    transport: float = 10.0
    social_mode: float = 15.0
    social_keyword: float = 5.0
    accessibility_match: float = 10.0
    accessibility_miss: float = 25.0
    food_type: float = 15.0
    rating: float = 5.0
    rating_midpoint: float = 3.0
    time_of_day: float = 10.0


@dataclass(frozen=True)
class EngineConfig:
    catalog_path: Path = Path(os.getenv("NEARBYNOMAD_CATALOG_PATH", str(_DEFAULT_CATALOG)))
    top_n: int = _env_int("NEARBYNOMAD_TOP_N", 6)
    randomization_spread: float = _env_float("NEARBYNOMAD_RANDOM_SPREAD", 0.1)
    rotation_probability: float = _env_float("NEARBYNOMAD_ROTATION_PROBABILITY", 0.3)
    surprise_count: int = 3
    # Raw budget amounts below these bounds map to low / medium, else high.
    budget_low_below: float = _env_float("NEARBYNOMAD_BUDGET_LOW_BELOW", 20.0)
    budget_medium_below: float = _env_float("NEARBYNOMAD_BUDGET_MEDIUM_BELOW", 100.0)
    weights: ScoringWeights = field(default_factory=ScoringWeights)


DEFAULT_ENGINE_CONFIG = EngineConfig()
