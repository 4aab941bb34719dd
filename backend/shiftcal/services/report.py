"""Monthly aggregator: shift counts and the derived extra-day-off budget."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from shiftcal.models.enums import WORK_PATTERN_KINDS, LeaveBucket, ShiftKind
from shiftcal.schemas.report import (
    ExtraDayOffBudget,
    MonthlyDayEntry,
    MonthlyStatsResponse,
    MonthlySummaryResponse,
    RemainingBalances,
)
from shiftcal.services import holiday as holiday_oracle
from shiftcal.services.month import format_month, iter_days, month_bounds, parse_month
from shiftcal.services.profile import balances_of, get_or_create_profile
from shiftcal.services.schedule import overrides_by_date, resolve_effective_shift

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from shiftcal.models.profile import LeaveProfile


# ---------------------------------------------------------------------------
# Pure computation helpers (no DB)
# ---------------------------------------------------------------------------


def count_weekend_days(first_day: date, last_day: date) -> int:
    """Saturdays and Sundays between two days, both inclusive."""
    return sum(1 for day in iter_days(first_day, last_day) if day.weekday() >= 5)


def extra_day_off_capacity(weekend_days: int, legal_holidays: int, holiday_shifts: int) -> float:
    """Rest days a regular worker gets beyond the holidays already on the schedule."""
    return float(max(0, weekend_days + legal_holidays - holiday_shifts))


def extra_day_off_budget(
    weekend_days: int,
    legal_holidays: int,
    holiday_shifts: int,
    used_extra_days_off: float,
) -> float:
    """Extra days off still available in a month, never negative."""
    capacity = extra_day_off_capacity(weekend_days, legal_holidays, holiday_shifts)
    return max(0.0, capacity - used_extra_days_off)


@dataclass
class MonthShifts:
    """Effective shift of every day of one month."""

    first_day: date
    last_day: date
    shifts: dict[date, ShiftKind] = field(default_factory=dict)
    overrides: dict[date, ShiftKind] = field(default_factory=dict)

    def counts(self) -> dict[ShiftKind, int]:
        result = dict.fromkeys(ShiftKind, 0)
        for kind in self.shifts.values():
            result[kind] += 1
        return result

    @property
    def weekend_days(self) -> int:
        return count_weekend_days(self.first_day, self.last_day)

    @property
    def legal_holidays(self) -> int:
        return holiday_oracle.monthly_holiday_count(self.first_day.year, self.first_day.month)

    @property
    def holiday_shifts(self) -> int:
        return sum(1 for kind in self.shifts.values() if kind == ShiftKind.HOLIDAY)

    def extra_capacity(self) -> float:
        return extra_day_off_capacity(self.weekend_days, self.legal_holidays, self.holiday_shifts)


def build_month_shifts(
    first_day: date,
    last_day: date,
    overrides: dict[date, ShiftKind],
    team: str,
) -> MonthShifts:
    shifts = {day: resolve_effective_shift(day, overrides, team) for day in iter_days(first_day, last_day)}
    return MonthShifts(first_day=first_day, last_day=last_day, shifts=shifts, overrides=overrides)


async def load_month_shifts(
    session: AsyncSession,
    profile: LeaveProfile,
    day: date,
) -> MonthShifts:
    """Effective shifts of the month containing day."""
    first_day, last_day = month_bounds(day.year, day.month)
    overrides = await overrides_by_date(session, profile.user_id, first_day, last_day)
    return build_month_shifts(first_day, last_day, overrides, profile.team_name)


# ---------------------------------------------------------------------------
# Response builders
# ---------------------------------------------------------------------------


def _build_stats_response(month_shifts: MonthShifts) -> MonthlyStatsResponse:
    counts = month_shifts.counts()
    days = [
        MonthlyDayEntry(
            date=day,
            shift_type=kind,
            modified=day in month_shifts.overrides,
            holiday_name=holiday_oracle.holiday_name(day),
        )
        for day, kind in sorted(month_shifts.shifts.items())
    ]
    return MonthlyStatsResponse(
        month=format_month(month_shifts.first_day),
        first_day=month_shifts.first_day,
        last_day=month_shifts.last_day,
        counts=counts,
        total_work_days=sum(counts[kind] for kind in WORK_PATTERN_KINDS),
        days=days,
    )


def _build_budget(month_shifts: MonthShifts, profile: LeaveProfile) -> ExtraDayOffBudget:
    weekend_days = month_shifts.weekend_days
    legal_holidays = month_shifts.legal_holidays
    holiday_shifts = month_shifts.holiday_shifts
    return ExtraDayOffBudget(
        weekend_days=weekend_days,
        legal_holidays=legal_holidays,
        holiday_shifts=holiday_shifts,
        used_extra_days_off=profile.used_extra_days_off,
        budget=extra_day_off_budget(weekend_days, legal_holidays, holiday_shifts, profile.used_extra_days_off),
    )


async def _load(session: AsyncSession, user_id: uuid.UUID, month: str) -> tuple[LeaveProfile, MonthShifts]:
    first_day, _ = parse_month(month)
    profile = await get_or_create_profile(session, user_id)
    month_shifts = await load_month_shifts(session, profile, first_day)
    await session.commit()
    return profile, month_shifts


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def monthly_stats(session: AsyncSession, user_id: uuid.UUID, month: str) -> MonthlyStatsResponse:
    """Count effective shifts per kind over a "YYYY-MM" month."""
    _, month_shifts = await _load(session, user_id, month)
    return _build_stats_response(month_shifts)


async def monthly_extra_day_off_budget(
    session: AsyncSession,
    user_id: uuid.UUID,
    month: str,
) -> ExtraDayOffBudget:
    """Extra days off available in a "YYYY-MM" month."""
    profile, month_shifts = await _load(session, user_id, month)
    return _build_budget(month_shifts, profile)


async def monthly_summary(session: AsyncSession, user_id: uuid.UUID, month: str) -> MonthlySummaryResponse:
    """Statistics, extra-day-off budget and remaining balances of a month."""
    profile, month_shifts = await _load(session, user_id, month)
    budget = _build_budget(month_shifts, profile)
    balances = balances_of(profile)
    return MonthlySummaryResponse(
        stats=_build_stats_response(month_shifts),
        extra_day_off=budget,
        remaining=RemainingBalances(
            annual=balances.available(LeaveBucket.ANNUAL),
            sick=balances.available(LeaveBucket.SICK),
            special=balances.available(LeaveBucket.SPECIAL),
            extra=budget.budget,
        ),
    )
