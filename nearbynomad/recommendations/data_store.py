from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import pandas as pd
from pydantic import ValidationError

from .config import DEFAULT_ENGINE_CONFIG
from .errors import CatalogError
from .models import Place

logger = logging.getLogger(__name__)

_LIST_COLUMNS = ("tags", "transport_modes", "social_modes", "food_types", "accessibility")
_COLUMN_ALIASES = {
    "priceLevel": "price_level",
    "price": "price_level",
    "wheelchairAccessible": "wheelchair_accessible",
    "petFriendly": "pet_friendly",
    "kidFriendly": "kid_friendly",
    "transportModes": "transport_modes",
    "socialModes": "social_modes",
    "foodTypes": "food_types",
    "energyLevel": "energy_level",
    "lat": "latitude",
    "lng": "longitude",
    "lon": "longitude",
}
_ACCESSIBILITY_FLAGS = {
    "wheelchair": "wheelchair_accessible",
    "pet": "pet_friendly",
    "pets": "pet_friendly",
    "kid": "kid_friendly",
    "kids": "kid_friendly",
}

_catalog: tuple[Place, ...] | None = None


def _split_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        # CSV exports keep list columns as "a; b" or "a, b"
        sep = ";" if ";" in value else ","
        return [v.strip() for v in value.split(sep) if v.strip()]
    return [str(v).strip() for v in value if str(v).strip()]


def _read_frame(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")
    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            df = pd.read_json(path, orient="records", dtype=False)
        elif suffix == ".csv":
            df = pd.read_csv(path)
        else:
            raise CatalogError(f"Unsupported catalog format: {suffix}")
    except ValueError as exc:
        raise CatalogError(f"Could not parse catalog {path}: {exc}") from exc

    # Accept the camelCase keys the web client's data file uses.
    df = df.rename(columns={k: v for k, v in _COLUMN_ALIASES.items() if k in df.columns and v not in df.columns})
    return df.astype(object).where(df.notna(), None)


def _to_record(row: dict[str, Any]) -> dict[str, Any]:
    record = {k: v for k, v in row.items() if v is not None}
    for column in _LIST_COLUMNS:
        if column in record:
            record[column] = _split_list(record[column])
    for need in record.pop("accessibility", []):
        flag = _ACCESSIBILITY_FLAGS.get(need.lower())
        if flag:
            record.setdefault(flag, True)
    return record


def places_from_records(records: Iterable[dict[str, Any]]) -> tuple[Place, ...]:
    """Validate raw rows into ``Place`` records, skipping the malformed ones."""
    places: list[Place] = []
    seen: set[str] = set()
    for row in records:
        try:
            place = Place.model_validate(_to_record(row))
        except ValidationError as exc:
            logger.warning("Skipping malformed place %r: %s", row.get("name") or row.get("id"), exc.errors()[0]["msg"])
            continue
        if place.id in seen:
            logger.warning("Skipping duplicate place id %s", place.id)
            continue
        seen.add(place.id)
        places.append(place)
    return tuple(places)


def load_catalog(path: Path | str) -> tuple[Place, ...]:
    df = _read_frame(Path(path))
    places = places_from_records(df.to_dict(orient="records"))
    logger.info("Loaded %d places from %s", len(places), path)
    return places


def get_catalog() -> tuple[Place, ...]:
    """Return the in-memory place catalog, loading it on first call."""
    global _catalog
    if _catalog is None:
        _catalog = load_catalog(DEFAULT_ENGINE_CONFIG.catalog_path)
    return _catalog


def reload_catalog(path: Path | str | None = None) -> tuple[Place, ...]:
    """Swap in a fresh snapshot; callers holding the old tuple keep it intact."""
    global _catalog
    _catalog = load_catalog(path or DEFAULT_ENGINE_CONFIG.catalog_path)
    return _catalog
