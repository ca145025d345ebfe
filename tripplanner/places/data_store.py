from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from ..config import DEFAULT_APP_CONFIG
from ..errors import StorageError
from .models import PlaceOut

logger = logging.getLogger(__name__)

CATALOG_COLUMNS = ["id", "name", "location", "tags", "lat", "lon"]
TAG_SEPARATOR = "|"

_df: pd.DataFrame | None = None


def _prepare(df: pd.DataFrame) -> pd.DataFrame:
    missing = [c for c in CATALOG_COLUMNS if c not in df.columns]
    if missing:
        raise StorageError(f"Place catalog is missing columns: {', '.join(missing)}")

    df = df.reset_index(drop=True)
    df["id"] = df["id"].astype(str)
    df["name"] = df["name"].fillna("").astype(str)
    df["location"] = df["location"].fillna("").astype(str)

    # Pre-parse tags into lists and lowercase sets for matching
    df["tags_list"] = (
        df["tags"]
        .fillna("")
        .astype(str)
        .apply(lambda s: [t.strip() for t in s.split(TAG_SEPARATOR) if t.strip()])
    )
    df["tags_lower"] = df["tags_list"].apply(lambda tl: {t.lower() for t in tl})

    df["name_lower"] = df["name"].str.lower()
    df["location_lower"] = df["location"].str.lower()

    df["lat"] = pd.to_numeric(df["lat"], errors="coerce")
    df["lon"] = pd.to_numeric(df["lon"], errors="coerce")
    return df


def _load(path: Path) -> pd.DataFrame:
    try:
        raw = pd.read_csv(path, dtype={"id": str})
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        logger.error("Could not read place catalog from %s", path, exc_info=True)
        raise StorageError(f"Could not read place catalog: {exc}") from exc
    df = _prepare(raw)
    logger.info("Loaded %d places from %s", len(df), path)
    return df


def get_dataframe() -> pd.DataFrame:
    """Return the in-memory place DataFrame, loading it on first call."""
    global _df
    if _df is None:
        _df = _load(DEFAULT_APP_CONFIG.places_csv)
    return _df


def set_dataframe(df: pd.DataFrame) -> None:
    """Replace the in-memory catalog with *df* (raw catalog columns)."""
    global _df
    _df = _prepare(df.copy())


def reset_catalog() -> None:
    """Forget the in-memory catalog so the next lookup reloads it from disk."""
    global _df
    _df = None


def _optional_float(value) -> float | None:
    if value is None or pd.isna(value):
        return None
    return float(value)


def row_to_place(row: pd.Series) -> PlaceOut:
    return PlaceOut(
        id=str(row["id"]),
        name=row["name"],
        location=row["location"],
        tags=list(row["tags_list"]),
        lat=_optional_float(row["lat"]),
        lon=_optional_float(row["lon"]),
    )


def frame_to_places(df: pd.DataFrame) -> list[PlaceOut]:
    return [row_to_place(row) for _, row in df.iterrows()]
