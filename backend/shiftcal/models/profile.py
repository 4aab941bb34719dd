# ruff: noqa: TC003
from __future__ import annotations

import uuid

from sqlmodel import Field

from shiftcal.models.base import TimestampMixin, UUIDBase


class LeaveProfile(UUIDBase, TimestampMixin, table=True):
    """Per-user team assignment and leave counters.

    Used counters are mutated by shift changes; totals only by the user.
    """

    __tablename__ = "leave_profile"

    user_id: uuid.UUID = Field(unique=True, index=True)
    station_name: str = Field(default="", max_length=255)
    team_name: str = Field(max_length=20)
    total_annual_leave: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    used_annual_leave: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    total_sick_leave: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    used_sick_leave: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    total_special_leave: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    used_special_leave: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    used_extra_days_off: float = Field(default=0.0, sa_column_kwargs={"server_default": "0"})
    version: int = Field(default=1, sa_column_kwargs={"server_default": "1"})
