# ruff: noqa: B008, TC003
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query, status

from shiftcal.api.deps import AuthDep
from shiftcal.db import SessionDep
from shiftcal.schemas.schedule import (
    EffectiveShiftResponse,
    ShiftChangeRequest,
    ShiftChangeResponse,
    ShiftResetResponse,
    WorkScheduleListResponse,
)
from shiftcal.services import schedule as schedule_service
from shiftcal.services import shift_change as shift_change_service

schedules_router = APIRouter(prefix="/schedules", tags=["schedules"])


@schedules_router.get("", response_model=WorkScheduleListResponse)
async def list_schedules(
    session: SessionDep,
    auth: AuthDep,
    month: str = Query(pattern=r"^\d{4}-\d{2}$"),
) -> WorkScheduleListResponse:
    """List the caller's stored overrides of a month."""
    return await schedule_service.list_schedules(session, auth.user_id, month)


@schedules_router.post("", response_model=ShiftChangeResponse, status_code=status.HTTP_200_OK)
async def change_shift(
    payload: ShiftChangeRequest,
    session: SessionDep,
    auth: AuthDep,
) -> ShiftChangeResponse:
    """Set a day to a shift or leave kind."""
    return await shift_change_service.apply_shift_change(session, auth.user_id, payload)


@schedules_router.post("/preview", response_model=ShiftChangeResponse)
async def preview_shift_change(
    payload: ShiftChangeRequest,
    session: SessionDep,
    auth: AuthDep,
) -> ShiftChangeResponse:
    """Show what a change would do without storing it."""
    return await shift_change_service.preview_shift_change(session, auth.user_id, payload)


@schedules_router.get("/{day}/effective", response_model=EffectiveShiftResponse)
async def get_effective_shift(
    day: date,
    session: SessionDep,
    auth: AuthDep,
) -> EffectiveShiftResponse:
    """Get the shift that applies to a day."""
    return await schedule_service.get_effective_shift(session, auth.user_id, day)


@schedules_router.delete("/{day}", response_model=ShiftResetResponse)
async def reset_shift(
    day: date,
    session: SessionDep,
    auth: AuthDep,
) -> ShiftResetResponse:
    """Remove a day's override so the rotation applies again."""
    return await shift_change_service.reset_shift(session, auth.user_id, day)
