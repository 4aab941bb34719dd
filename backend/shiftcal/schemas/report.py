# ruff: noqa: TC001, TC003
from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from shiftcal.models.enums import ShiftKind


class MonthlyDayEntry(BaseModel):
    """Effective shift of one day in a monthly report."""

    date: date
    shift_type: ShiftKind
    modified: bool
    holiday_name: str | None


class RemainingBalances(BaseModel):
    """Remaining amount per leave bucket."""

    annual: float
    sick: float
    special: float
    extra: float


class ExtraDayOffBudget(BaseModel):
    """Inputs and result of the monthly extra-day-off budget."""

    weekend_days: int
    legal_holidays: int
    holiday_shifts: int
    used_extra_days_off: float
    budget: float


class MonthlyStatsResponse(BaseModel):
    """Shift counts of one month."""

    month: str
    first_day: date
    last_day: date
    counts: dict[ShiftKind, int]
    total_work_days: int
    days: list[MonthlyDayEntry]


class MonthlySummaryResponse(BaseModel):
    """Monthly statistics together with balances."""

    stats: MonthlyStatsResponse
    extra_day_off: ExtraDayOffBudget
    remaining: RemainingBalances
