"""Exceptions raised by the services and serialized by the route layer."""
from __future__ import annotations


class TripPlannerError(Exception):
    """Base error. ``status_code`` is the HTTP status the API answers with."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TripPlannerError):
    """Bad input shape or a rejected update such as a duplicate trip."""

    status_code = 400


class NotFoundError(TripPlannerError):
    """A referenced user or place does not exist."""

    status_code = 404


class StorageError(TripPlannerError):
    """The place catalog could not be loaded or queried."""

    status_code = 500
