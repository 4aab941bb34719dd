# ruff: noqa: TC003
from __future__ import annotations

import datetime
import uuid

import sqlalchemy as sa
from sqlmodel import Field

from shiftcal.models.base import TimestampMixin, UUIDBase


class WorkSchedule(UUIDBase, TimestampMixin, table=True):
    """Explicit shift or leave override for one user on one calendar day."""

    __tablename__ = "work_schedule"
    __table_args__ = (sa.UniqueConstraint("user_id", "date", name="uq_work_schedule_user_date"),)

    user_id: uuid.UUID = Field(index=True)
    date: datetime.date = Field(index=True)
    shift_type: str = Field(max_length=20)
