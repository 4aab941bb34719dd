# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class ProfileResponse(BaseModel):
    """A user's team and leave counters."""

    user_id: uuid.UUID
    station_name: str
    team_name: str
    total_annual_leave: float
    used_annual_leave: float
    total_sick_leave: float
    used_sick_leave: float
    total_special_leave: float
    used_special_leave: float
    used_extra_days_off: float
    version: int
    updated_at: datetime


class UpdateProfileRequest(BaseModel):
    """Full replacement of a user's profile."""

    station_name: str = Field(default="", max_length=255)
    team_name: str = Field(min_length=1, max_length=20)
    total_annual_leave: float = Field(ge=0)
    used_annual_leave: float = Field(ge=0)
    total_sick_leave: float = Field(ge=0)
    used_sick_leave: float = Field(ge=0)
    total_special_leave: float = Field(ge=0)
    used_special_leave: float = Field(ge=0)
    used_extra_days_off: float = Field(ge=0)
