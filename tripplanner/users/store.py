from __future__ import annotations

import logging
import threading
import uuid
from datetime import date, datetime, timezone
from typing import Any

import bcrypt

from ..errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_users: dict[str, dict[str, Any]] = {}
_ids_by_email: dict[str, str] = {}
_lock = threading.Lock()

# bcrypt only looks at the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72


def password_too_long(plain: str) -> bool:
    return len(plain.encode()) > MAX_PASSWORD_BYTES


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def public_user(record: dict[str, Any]) -> dict[str, Any]:
    """Strip the password hash and trip lists from a user record."""
    return {
        "id": record["id"],
        "name": record["name"],
        "email": record["email"],
        "date_of_birth": record["date_of_birth"],
        "interests": list(record["interests"]),
        "created_at": record["created_at"],
    }


def register(
    name: str,
    email: str,
    password: str,
    date_of_birth: date | None = None,
) -> dict[str, Any]:
    """Create a user. Raises ``ValidationError`` if the email is taken."""
    if password_too_long(password):
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")

    key = email.strip().lower()
    if key in _ids_by_email:
        raise ValidationError("User already exists")

    password_hash = _hash_password(password)
    user_id = uuid.uuid4().hex
    with _lock:
        if key in _ids_by_email:
            raise ValidationError("User already exists")
        _users[user_id] = {
            "id": user_id,
            "name": name,
            "email": email.strip(),
            "password_hash": password_hash,
            "date_of_birth": date_of_birth,
            "interests": [],
            "upcoming_trips": [],
            "completed_trips": [],
            "created_at": datetime.now(timezone.utc),
        }
        _ids_by_email[key] = user_id
    logger.info("Registered user %s", user_id)
    return public_user(_users[user_id])


def authenticate(email: str, password: str) -> dict[str, Any] | None:
    """Verify credentials. Returns the public user dict or ``None``."""
    if password_too_long(password):
        return None
    user_id = _ids_by_email.get(email.strip().lower())
    record = _users.get(user_id) if user_id else None
    if record and _verify_password(password, record["password_hash"]):
        return public_user(record)
    return None


def get_user(user_id: str) -> dict[str, Any]:
    """Return the full user record. Raises ``NotFoundError`` if unknown."""
    record = _users.get(user_id)
    if record is None:
        raise NotFoundError("User not found")
    return record


def delete_user(user_id: str) -> None:
    """Remove a user and free their email. Admin hook; no route exposes it."""
    with _lock:
        record = _users.pop(user_id, None)
        if record:
            _ids_by_email.pop(record["email"].lower(), None)


def _seed_users() -> None:
    """Pre-seed a demo user on import."""
    register("Demo Traveller", "demo@example.com", "demo123")
    demo_id = _ids_by_email["demo@example.com"]
    _users[demo_id]["interests"] = ["Beach", "Culture"]


_seed_users()
