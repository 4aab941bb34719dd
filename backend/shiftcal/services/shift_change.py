"""Shift change coordinator: plans a change and applies it in one transaction."""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import TYPE_CHECKING

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError

from shiftcal.config import get_settings
from shiftcal.exceptions import AppError, LedgerStoreError, PersistenceError, ScheduleStoreError
from shiftcal.models.enums import AuditAction, AuditEntityType, ShiftKind
from shiftcal.schemas.schedule import (
    DeductionEntry,
    ScheduleWriteEntry,
    ShiftChangeResponse,
    ShiftResetResponse,
)
from shiftcal.services.audit import model_to_audit_dict, write_audit_log
from shiftcal.services.leave_rules import ShiftChangePlan, plan_reset, plan_shift_change
from shiftcal.services.profile import (
    balances_of,
    build_profile_response,
    get_or_create_profile,
    store_balances,
)
from shiftcal.services.report import load_month_shifts
from shiftcal.services.rotation import default_shift
from shiftcal.services.schedule import (
    delete_override,
    get_override,
    overrides_by_date,
    resolve_effective_shift,
    upsert_override,
)

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from shiftcal.models.profile import LeaveProfile
    from shiftcal.schemas.schedule import ShiftChangeRequest
    from shiftcal.services.leave_rules import Deduction, LeaveBalances

logger = logging.getLogger(__name__)

_NOTHING_APPLIED = "the change was rolled back and nothing was applied"


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _deduction_entries(deduction: Deduction) -> list[DeductionEntry]:
    return [DeductionEntry(bucket=bucket, amount=amount) for bucket, amount in deduction.items() if amount]


def _build_change_response(
    plan: ShiftChangePlan,
    *,
    applied: bool,
    profile: LeaveProfile | None = None,
) -> ShiftChangeResponse:
    return ShiftChangeResponse(
        date=plan.target,
        previous_shift=plan.current,
        requested_shift=plan.requested,
        payment=plan.payment,
        paired=plan.paired,
        schedule_writes=[ScheduleWriteEntry(date=w.date, shift_type=w.shift_type) for w in plan.schedule_writes],
        restored=_deduction_entries(plan.restored),
        charged=_deduction_entries(plan.charged),
        applied=applied,
        profile=build_profile_response(profile) if profile is not None else None,
    )


async def _build_plan(
    session: AsyncSession,
    profile: LeaveProfile,
    payload: ShiftChangeRequest,
) -> ShiftChangePlan:
    """Gather the stored state a change depends on and plan it."""
    target = payload.date
    next_day = target + timedelta(days=1)
    overrides = await overrides_by_date(session, profile.user_id, target, next_day)
    month_shifts = await load_month_shifts(session, profile, target)
    reference = get_settings().rotation_reference_date

    return plan_shift_change(
        target=target,
        requested=payload.shift_type,
        current=resolve_effective_shift(target, overrides, profile.team_name, reference),
        stored=overrides.get(target),
        next_stored=overrides.get(next_day),
        next_default=default_shift(next_day, profile.team_name, reference),
        balances=balances_of(profile),
        extra_capacity=month_shifts.extra_capacity(),
        payment=payload.payment,
    )


async def _write_schedules(session: AsyncSession, user_id: uuid.UUID, plan: ShiftChangePlan) -> None:
    """Upsert every override of a plan and audit each one."""
    for write in plan.schedule_writes:
        schedule, before = await upsert_override(session, user_id, write.date, write.shift_type)
        await session.flush()
        await write_audit_log(
            session,
            user_id=user_id,
            entity_type=AuditEntityType.SCHEDULE,
            entity_id=schedule.id,
            action=AuditAction.CREATE if before is None else AuditAction.UPDATE,
            before_json=before,
            after_json=model_to_audit_dict(schedule),
        )


async def _write_balances(session: AsyncSession, profile: LeaveProfile, balances: LeaveBalances) -> None:
    """Store new used counters on the profile and audit the change."""
    before = model_to_audit_dict(profile)
    store_balances(profile, balances)
    await session.flush()
    await write_audit_log(
        session,
        user_id=profile.user_id,
        entity_type=AuditEntityType.PROFILE,
        entity_id=profile.id,
        action=AuditAction.UPDATE,
        before_json=before,
        after_json=model_to_audit_dict(profile),
    )


async def _commit(session: AsyncSession, target: date) -> None:
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Commit failed for shift change on %s", target)
        raise PersistenceError(f"Could not store the change for {target}: {_NOTHING_APPLIED}") from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


async def preview_shift_change(
    session: AsyncSession,
    user_id: uuid.UUID,
    payload: ShiftChangeRequest,
) -> ShiftChangeResponse:
    """Plan a change without writing anything."""
    profile = await get_or_create_profile(session, user_id)
    plan = await _build_plan(session, profile, payload)
    await session.commit()
    return _build_change_response(plan, applied=False)


async def apply_shift_change(
    session: AsyncSession,
    user_id: uuid.UUID,
    payload: ShiftChangeRequest,
) -> ShiftChangeResponse:
    """Set a day (and, for paired leave, the day after) to a shift or leave kind.

    Flow:
    1. Lock the profile row
    2. Plan: restore any stored leave, check legality and balances
    3. Upsert the override(s)
    4. Store the combined deduction once
    5. Write audit log entries
    6. Commit

    Every check happens in step 2. A failure in steps 3-6 rolls back the
    whole transaction, so a paired change is never left half applied.
    """
    profile = await get_or_create_profile(session, user_id, for_update=True)
    plan = await _build_plan(session, profile, payload)

    try:
        await _write_schedules(session, user_id, plan)
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Schedule write failed for user %s on %s", user_id, plan.target)
        raise ScheduleStoreError(f"Could not store the shift for {plan.target}: {_NOTHING_APPLIED}") from exc

    if plan.changes_ledger:
        try:
            await _write_balances(session, profile, plan.balances_after)
        except SQLAlchemyError as exc:
            await session.rollback()
            logger.exception("Ledger write failed for user %s on %s", user_id, plan.target)
            raise LedgerStoreError(f"Could not update leave balances for {plan.target}: {_NOTHING_APPLIED}") from exc

    await _commit(session, plan.target)
    await session.refresh(profile)

    logger.info(
        "User %s set %s from %s to %s (paired=%s, restored=%s, charged=%s)",
        user_id,
        plan.target,
        plan.current,
        plan.requested,
        plan.paired,
        plan.restored,
        plan.charged,
    )
    return _build_change_response(plan, applied=True, profile=profile)


async def reset_shift(
    session: AsyncSession,
    user_id: uuid.UUID,
    day: date,
) -> ShiftResetResponse:
    """Remove the override of a day so the rotation default applies again.

    A stored leave is given back, measured against the rotation default.
    """
    profile = await get_or_create_profile(session, user_id, for_update=True)
    schedule = await get_override(session, user_id, day)
    if schedule is None:
        raise AppError(f"No stored shift for {day}", status_code=status.HTTP_404_NOT_FOUND)

    stored = ShiftKind(schedule.shift_type)
    default = default_shift(day, profile.team_name, get_settings().rotation_reference_date)
    restored, balances_after = plan_reset(stored=stored, default=default, balances=balances_of(profile))
    before = model_to_audit_dict(schedule)

    try:
        await delete_override(session, schedule)
        await session.flush()
        await write_audit_log(
            session,
            user_id=user_id,
            entity_type=AuditEntityType.SCHEDULE,
            entity_id=schedule.id,
            action=AuditAction.DELETE,
            before_json=before,
        )
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Schedule delete failed for user %s on %s", user_id, day)
        raise ScheduleStoreError(f"Could not remove the shift for {day}: {_NOTHING_APPLIED}") from exc

    if restored:
        try:
            await _write_balances(session, profile, balances_after)
        except SQLAlchemyError as exc:
            await session.rollback()
            logger.exception("Ledger write failed for user %s on %s", user_id, day)
            raise LedgerStoreError(f"Could not update leave balances for {day}: {_NOTHING_APPLIED}") from exc

    await _commit(session, day)
    await session.refresh(profile)

    return ShiftResetResponse(
        date=day,
        removed_shift=stored,
        shift_type=default,
        restored=_deduction_entries(restored),
        profile=build_profile_response(profile),
    )
