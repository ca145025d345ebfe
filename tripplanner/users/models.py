from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=72)
    date_of_birth: date | None = Field(default=None, alias="dateOfBirth")


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class InterestsUpdate(BaseModel):
    interests: list[str]


class UserOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    email: str
    date_of_birth: date | None = Field(default=None, alias="dateOfBirth")
    interests: list[str] = Field(default_factory=list)
    created_at: datetime = Field(..., alias="createdAt")


class InterestsResponse(BaseModel):
    message: str
    interests: list[str]
