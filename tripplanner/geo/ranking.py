from __future__ import annotations

import math
from typing import Any, Sequence, TypeVar

from .distance import Coordinate, haversine_km

T = TypeVar("T")


def _coord(place: Any, name: str) -> float | None:
    if isinstance(place, dict):
        value = place.get(name)
    else:
        value = getattr(place, name, None)
    if value is None:
        return None
    value = float(value)
    # pandas hands back NaN for empty CSV cells
    return None if math.isnan(value) else value


def distance_to(place: Any, reference: Coordinate) -> float:
    """Distance in km from *reference*, or ``inf`` when the place lacks a coordinate."""
    lat = _coord(place, "lat")
    lon = _coord(place, "lon")
    if lat is None or lon is None:
        return math.inf
    return haversine_km(reference.lat, reference.lon, lat, lon)


def rank_by_distance(places: Sequence[T], reference: Coordinate | None) -> list[T]:
    """Return a new list of *places* ordered nearest first.

    Places are read through ``lat`` / ``lon`` attributes or dict keys. The
    sort is stable, so places at equal distance (including every place with
    no coordinates) keep their input order. With no *reference* the input
    order is returned unchanged.
    """
    if reference is None:
        return list(places)
    return sorted(places, key=lambda p: distance_to(p, reference))
