from __future__ import annotations

from dataclasses import dataclass

from fastapi import HTTPException, Request

from ..users.store import get_user


@dataclass(frozen=True)
class RequestContext:
    """The authenticated caller, handed explicitly to route handlers."""

    user_id: str
    name: str
    email: str


def get_current_user(request: Request) -> dict | None:
    """Return the user dict from the session, or ``None``."""
    return request.session.get("user")


def require_user(request: Request) -> RequestContext:
    """Raise 401 if nobody is logged in, 404 if the session user is gone."""
    user = get_current_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    record = get_user(user["id"])
    return RequestContext(user_id=record["id"], name=record["name"], email=record["email"])
