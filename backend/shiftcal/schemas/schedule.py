# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel

from shiftcal.models.enums import LeaveBucket, PaymentOption, ShiftKind
from shiftcal.schemas.profile import ProfileResponse

# ---------------------------------------------------------------------------
# Stored overrides
# ---------------------------------------------------------------------------


class WorkScheduleResponse(BaseModel):
    """A stored shift override."""

    id: uuid.UUID
    date: date
    shift_type: ShiftKind
    updated_at: datetime


class WorkScheduleListResponse(BaseModel):
    """Stored overrides in a date range, ordered by date."""

    items: list[WorkScheduleResponse]
    total: int


class EffectiveShiftResponse(BaseModel):
    """The shift that applies to a day and where it comes from."""

    date: date
    shift_type: ShiftKind
    source: Literal["override", "rotation"]
    team_name: str
    holiday_name: str | None


# ---------------------------------------------------------------------------
# Shift changes
# ---------------------------------------------------------------------------


class ShiftChangeRequest(BaseModel):
    """Request body for setting a day to a shift or leave kind."""

    date: date
    shift_type: ShiftKind
    payment: PaymentOption = PaymentOption.SINGLE


class DeductionEntry(BaseModel):
    """Amount taken from or given back to one leave bucket."""

    bucket: LeaveBucket
    amount: float


class ScheduleWriteEntry(BaseModel):
    """One day written by a shift change."""

    date: date
    shift_type: ShiftKind


class ShiftChangeResponse(BaseModel):
    """Outcome of a shift change, or its preview."""

    date: date
    previous_shift: ShiftKind
    requested_shift: ShiftKind
    payment: PaymentOption
    paired: bool
    schedule_writes: list[ScheduleWriteEntry]
    restored: list[DeductionEntry]
    charged: list[DeductionEntry]
    applied: bool
    profile: ProfileResponse | None = None


class ShiftResetResponse(BaseModel):
    """Outcome of removing an override."""

    date: date
    removed_shift: ShiftKind
    shift_type: ShiftKind
    restored: list[DeductionEntry]
    profile: ProfileResponse
