"""
Place query service.

Every lookup reads the in-memory catalog from ``data_store``. Filters are
applied with pandas masks in catalog order; distance ranking happens last,
on the already capped candidates, so limits mean the same thing with or
without a reference coordinate.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator

import pandas as pd

from ..config import DEFAULT_APP_CONFIG
from ..errors import NotFoundError, StorageError
from ..geo.distance import Coordinate
from ..geo.ranking import rank_by_distance
from .data_store import frame_to_places, get_dataframe, row_to_place
from .models import PlaceOut

logger = logging.getLogger(__name__)


@contextmanager
def _catalog_lookup(operation: str) -> Iterator[None]:
    try:
        yield
    except StorageError:
        raise
    except (KeyError, AttributeError, TypeError, ValueError) as exc:
        logger.error("Catalog lookup failed in %s", operation, exc_info=True)
        raise StorageError(f"Catalog lookup failed: {exc}") from exc


def _contains(column: pd.Series, needle: str) -> pd.Series:
    return column.str.contains(needle.strip().lower(), regex=False, na=False)


def _has_any_tag(df: pd.DataFrame, tags: Iterable[str]) -> pd.Series:
    wanted = {t.strip().lower() for t in tags if t and t.strip()}
    return df["tags_lower"].apply(lambda tl: bool(wanted & tl)).astype(bool)


def find_nearby(
    reference: Coordinate | None = None,
    limit: int = DEFAULT_APP_CONFIG.nearby_limit,
) -> list[PlaceOut]:
    with _catalog_lookup("find_nearby"):
        places = frame_to_places(get_dataframe())
    return rank_by_distance(places, reference)[:limit]


def find_by_popular_names(
    names: Iterable[str] = DEFAULT_APP_CONFIG.popular_places,
    limit: int = DEFAULT_APP_CONFIG.popular_limit,
) -> list[PlaceOut]:
    with _catalog_lookup("find_by_popular_names"):
        df = get_dataframe()
        matches = df.loc[df["name"].isin(list(names))].head(limit)
        return frame_to_places(matches)


def search(name_substring: str | None = None) -> list[PlaceOut]:
    """Case-insensitive substring match on name. An empty pattern matches everything."""
    with _catalog_lookup("search"):
        df = get_dataframe()
        if name_substring and name_substring.strip():
            df = df.loc[_contains(df["name_lower"], name_substring)]
        return frame_to_places(df)


def parse_tags(tags: str | None) -> list[str]:
    """Split a comma-separated tag string, dropping blank entries."""
    if not tags:
        return []
    return [t.strip() for t in tags.split(",") if t.strip()]


def search_by_location_and_tags(
    location: str | None = None,
    tags: str | None = None,
) -> list[PlaceOut]:
    with _catalog_lookup("search_by_location_and_tags"):
        df = get_dataframe()
        mask = pd.Series(True, index=df.index)

        if location and location.strip():
            mask = mask & _contains(df["location_lower"], location)

        tag_list = parse_tags(tags)
        if tag_list:
            mask = mask & _has_any_tag(df, tag_list)

        return frame_to_places(df.loc[mask])


def recommend(
    user_interests: Iterable[str],
    reference: Coordinate | None = None,
    candidate_limit: int = DEFAULT_APP_CONFIG.recommend_candidate_limit,
    result_limit: int = DEFAULT_APP_CONFIG.recommend_result_limit,
) -> list[PlaceOut]:
    """Places tagged with any of the user's interests, nearest first.

    With no interests every place is a candidate. Candidates are capped in
    catalog order before ranking.
    """
    interests = list(user_interests)
    with _catalog_lookup("recommend"):
        df = get_dataframe()
        if interests:
            df = df.loc[_has_any_tag(df, interests)]
        candidates = frame_to_places(df.head(candidate_limit))

    logger.debug(
        "recommend: %d candidates for %d interests (ranked=%s)",
        len(candidates), len(interests), reference is not None,
    )
    return rank_by_distance(candidates, reference)[:result_limit]


def get_place(place_id: str) -> PlaceOut:
    with _catalog_lookup("get_place"):
        df = get_dataframe()
        matches = df.loc[df["id"] == place_id]
        if matches.empty:
            raise NotFoundError("Place not found")
        return row_to_place(matches.iloc[0])
