from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PlaceOut(BaseModel):
    id: str
    name: str
    location: str
    tags: list[str]
    lat: float | None = None
    lon: float | None = None


class TripKind(str, Enum):
    upcoming = "upcoming"
    completed = "completed"


class TripRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    place_id: str = Field(..., alias="placeId")


class TripOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    place: PlaceOut
    added_at: datetime = Field(..., alias="addedAt")


class TripsResponse(BaseModel):
    upcoming: list[TripOut]
    completed: list[TripOut]
