"""Schedule store: per-user, per-day shift overrides."""

# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import date
from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlmodel import col

from shiftcal.config import get_settings
from shiftcal.models.enums import ShiftKind
from shiftcal.models.schedule import WorkSchedule
from shiftcal.schemas.schedule import EffectiveShiftResponse, WorkScheduleListResponse, WorkScheduleResponse
from shiftcal.services import holiday as holiday_oracle
from shiftcal.services.audit import model_to_audit_dict
from shiftcal.services.month import parse_month
from shiftcal.services.profile import get_or_create_profile
from shiftcal.services.rotation import default_shift

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.ext.asyncio import AsyncSession


def _build_schedule_response(schedule: WorkSchedule) -> WorkScheduleResponse:
    return WorkScheduleResponse(
        id=schedule.id,
        date=schedule.date,
        shift_type=ShiftKind(schedule.shift_type),
        updated_at=schedule.updated_at,
    )


# ---------------------------------------------------------------------------
# Store operations
# ---------------------------------------------------------------------------


async def list_overrides(
    session: AsyncSession,
    user_id: uuid.UUID,
    start: date,
    end: date,
) -> list[WorkSchedule]:
    """Stored overrides between start and end (inclusive), ordered by date."""
    result = await session.execute(
        select(WorkSchedule)
        .where(
            col(WorkSchedule.user_id) == user_id,
            col(WorkSchedule.date) >= start,
            col(WorkSchedule.date) <= end,
        )
        .order_by(col(WorkSchedule.date))
    )
    return list(result.scalars().all())


async def overrides_by_date(
    session: AsyncSession,
    user_id: uuid.UUID,
    start: date,
    end: date,
) -> dict[date, ShiftKind]:
    """Stored overrides between start and end keyed by day."""
    return {s.date: ShiftKind(s.shift_type) for s in await list_overrides(session, user_id, start, end)}


async def get_override(session: AsyncSession, user_id: uuid.UUID, day: date) -> WorkSchedule | None:
    result = await session.execute(
        select(WorkSchedule).where(
            col(WorkSchedule.user_id) == user_id,
            col(WorkSchedule.date) == day,
        )
    )
    return result.scalar_one_or_none()


async def upsert_override(
    session: AsyncSession,
    user_id: uuid.UUID,
    day: date,
    shift_type: ShiftKind,
) -> tuple[WorkSchedule, dict[str, Any] | None]:
    """Insert or update the override of a day without flushing.

    Returns the stored row and, for updates, the audit snapshot of the row
    as it was before.
    """
    schedule = await get_override(session, user_id, day)
    if schedule is None:
        schedule = WorkSchedule(user_id=user_id, date=day, shift_type=shift_type.value)
        session.add(schedule)
        return schedule, None

    before = model_to_audit_dict(schedule)
    schedule.shift_type = shift_type.value
    return schedule, before


async def delete_override(session: AsyncSession, schedule: WorkSchedule) -> None:
    await session.delete(schedule)


# ---------------------------------------------------------------------------
# Effective shift
# ---------------------------------------------------------------------------


def resolve_effective_shift(
    day: date,
    overrides: Mapping[date, ShiftKind],
    team: str,
    reference: date | None = None,
) -> ShiftKind:
    """Stored override of a day, else the team's rotation default."""
    stored = overrides.get(day)
    if stored is not None:
        return stored
    if reference is None:
        reference = get_settings().rotation_reference_date
    return default_shift(day, team, reference)


async def list_schedules(
    session: AsyncSession,
    user_id: uuid.UUID,
    month: str,
) -> WorkScheduleListResponse:
    """Stored overrides of one "YYYY-MM" month."""
    first_day, last_day = parse_month(month)
    schedules = await list_overrides(session, user_id, first_day, last_day)
    return WorkScheduleListResponse(
        items=[_build_schedule_response(s) for s in schedules],
        total=len(schedules),
    )


async def get_effective_shift(
    session: AsyncSession,
    user_id: uuid.UUID,
    day: date,
) -> EffectiveShiftResponse:
    """Shift that applies to a day for a user."""
    profile = await get_or_create_profile(session, user_id)
    schedule = await get_override(session, user_id, day)
    await session.commit()

    if schedule is not None:
        shift_type = ShiftKind(schedule.shift_type)
    else:
        shift_type = resolve_effective_shift(day, {}, profile.team_name)

    return EffectiveShiftResponse(
        date=day,
        shift_type=shift_type,
        source="override" if schedule is not None else "rotation",
        team_name=profile.team_name,
        holiday_name=holiday_oracle.holiday_name(day),
    )
