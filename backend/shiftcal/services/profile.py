"""Leave ledger: the per-user profile holding team and leave counters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import select
from sqlmodel import col

from shiftcal.config import get_settings
from shiftcal.models.enums import AuditAction, AuditEntityType
from shiftcal.models.profile import LeaveProfile
from shiftcal.schemas.profile import ProfileResponse
from shiftcal.services.audit import model_to_audit_dict, write_audit_log
from shiftcal.services.leave_rules import LeaveBalances

if TYPE_CHECKING:
    import uuid

    from sqlalchemy.ext.asyncio import AsyncSession

    from shiftcal.schemas.profile import UpdateProfileRequest

logger = logging.getLogger(__name__)


def build_profile_response(profile: LeaveProfile) -> ProfileResponse:
    """Map a profile model to its response schema."""
    return ProfileResponse(
        user_id=profile.user_id,
        station_name=profile.station_name,
        team_name=profile.team_name,
        total_annual_leave=profile.total_annual_leave,
        used_annual_leave=profile.used_annual_leave,
        total_sick_leave=profile.total_sick_leave,
        used_sick_leave=profile.used_sick_leave,
        total_special_leave=profile.total_special_leave,
        used_special_leave=profile.used_special_leave,
        used_extra_days_off=profile.used_extra_days_off,
        version=profile.version,
        updated_at=profile.updated_at,
    )


def balances_of(profile: LeaveProfile) -> LeaveBalances:
    """Read the leave counters of a profile."""
    return LeaveBalances(
        total_annual=profile.total_annual_leave,
        used_annual=profile.used_annual_leave,
        total_sick=profile.total_sick_leave,
        used_sick=profile.used_sick_leave,
        total_special=profile.total_special_leave,
        used_special=profile.used_special_leave,
        used_extra=profile.used_extra_days_off,
    )


def store_balances(profile: LeaveProfile, balances: LeaveBalances) -> None:
    """Copy used counters back onto the profile and bump its version.

    Totals are owned by the user and are left untouched.
    """
    profile.used_annual_leave = balances.used_annual
    profile.used_sick_leave = balances.used_sick
    profile.used_special_leave = balances.used_special
    profile.used_extra_days_off = balances.used_extra
    profile.version += 1


async def get_or_create_profile(
    session: AsyncSession,
    user_id: uuid.UUID,
    *,
    for_update: bool = False,
) -> LeaveProfile:
    """Fetch a user's profile, creating it with configured defaults on first access.

    With ``for_update`` the row is locked for the rest of the transaction.
    """
    query = select(LeaveProfile).where(col(LeaveProfile.user_id) == user_id)
    if for_update:
        query = query.with_for_update()
    result = await session.execute(query)
    profile = result.scalar_one_or_none()

    if profile is None:
        settings = get_settings()
        profile = LeaveProfile(
            user_id=user_id,
            team_name=settings.default_team_name,
            total_annual_leave=settings.default_total_annual_leave,
            total_sick_leave=settings.default_total_sick_leave,
            total_special_leave=settings.default_total_special_leave,
        )
        session.add(profile)
        await session.flush()
        logger.info("Created leave profile for user %s", user_id)

    return profile


async def get_profile(session: AsyncSession, user_id: uuid.UUID) -> ProfileResponse:
    """Return a user's profile."""
    profile = await get_or_create_profile(session, user_id)
    await session.commit()
    return build_profile_response(profile)


async def put_profile(
    session: AsyncSession,
    user_id: uuid.UUID,
    payload: UpdateProfileRequest,
) -> ProfileResponse:
    """Replace every editable field of a user's profile."""
    profile = await get_or_create_profile(session, user_id, for_update=True)
    before = model_to_audit_dict(profile)

    for key, value in payload.model_dump().items():
        setattr(profile, key, value)
    profile.version += 1
    await session.flush()

    await write_audit_log(
        session,
        user_id=user_id,
        entity_type=AuditEntityType.PROFILE,
        entity_id=profile.id,
        action=AuditAction.UPDATE,
        before_json=before,
        after_json=model_to_audit_dict(profile),
    )

    await session.commit()
    await session.refresh(profile)
    return build_profile_response(profile)
