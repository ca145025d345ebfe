"""
Tagged results for request validation.

Validators return ``Ok(value)`` or ``Invalid(message)`` instead of raising,
so route handlers decide in one place how a rejection becomes a response.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from .errors import ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Invalid:
    message: str


Result = Union[Ok[T], Invalid]


def unwrap_or_raise(result: Result[T]) -> T:
    """Return the validated value, or raise ``ValidationError`` for ``Invalid``."""
    if isinstance(result, Invalid):
        raise ValidationError(result.message)
    return result.value


def validate_place_id(raw: str | None) -> Result[str]:
    place_id = (raw or "").strip()
    if not place_id:
        return Invalid("placeId is required")
    return Ok(place_id)
