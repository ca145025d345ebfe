from __future__ import annotations

import logging
from typing import Any

from ..validation import Invalid, Ok, Result
from .store import get_user

logger = logging.getLogger(__name__)

INTEREST_TAGS: tuple[str, ...] = (
    "Adventure",
    "Architecture",
    "Art",
    "Beach",
    "Cities",
    "Culture",
    "Eco Tourism",
    "Festivals",
    "Food & Wine",
    "History",
    "Local Experience",
    "Mountains",
    "Music",
    "Nature",
    "Nightlife",
    "Photography",
    "Relaxation",
    "Shopping",
    "Sports",
    "Wildlife",
)

# Older clients send the singular form
_ALIASES = {"Sport": "Sports"}


def validate_interests(raw: list[Any]) -> Result[list[str]]:
    """Check *raw* against ``INTEREST_TAGS``.

    Entries are trimmed, aliases normalized and duplicates dropped, keeping
    first-seen order.
    """
    cleaned: list[str] = []
    invalid: list[str] = []
    for item in raw:
        if not isinstance(item, str):
            invalid.append(str(item))
            continue
        tag = _ALIASES.get(item.strip(), item.strip())
        if tag not in INTEREST_TAGS:
            invalid.append(item)
        elif tag not in cleaned:
            cleaned.append(tag)

    if invalid:
        return Invalid(f"Invalid interests: {', '.join(invalid)}")
    return Ok(cleaned)


def get_user_interests(user_id: str) -> set[str]:
    return set(get_user(user_id)["interests"])


def update_interests(user_id: str, interests: list[str]) -> list[str]:
    """Replace the user's interests with an already validated list."""
    record = get_user(user_id)
    record["interests"] = list(interests)
    logger.info("Updated interests for user %s: %s", user_id, interests)
    return list(record["interests"])
