from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone

from ..errors import ValidationError
from ..places.models import TripKind, TripOut
from ..places.service import get_place
from .store import get_user

logger = logging.getLogger(__name__)

_lock = threading.Lock()


def _trip_list(user_id: str, kind: TripKind) -> list[dict]:
    return get_user(user_id)[f"{kind.value}_trips"]


def get_trips(user_id: str, kind: TripKind) -> list[TripOut]:
    """Return the user's trips of *kind* with their places filled in."""
    return [
        TripOut(place=get_place(t["place_id"]), added_at=t["added_at"])
        for t in _trip_list(user_id, kind)
    ]


def add_trip(user_id: str, kind: TripKind, place_id: str) -> list[TripOut]:
    """Append *place_id* to the user's *kind* list and return the updated list.

    A place already on the list is rejected and the list left untouched.
    """
    get_place(place_id)
    with _lock:
        trips = _trip_list(user_id, kind)
        if any(t["place_id"] == place_id for t in trips):
            logger.info("Rejected duplicate %s trip %s for user %s", kind.value, place_id, user_id)
            raise ValidationError(f"Place already in {kind.value} trips")
        trips.append({"place_id": place_id, "added_at": datetime.now(timezone.utc)})
    return get_trips(user_id, kind)
