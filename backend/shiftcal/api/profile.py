from __future__ import annotations

from fastapi import APIRouter

from shiftcal.api.deps import AuthDep
from shiftcal.db import SessionDep
from shiftcal.schemas.profile import ProfileResponse, UpdateProfileRequest
from shiftcal.services import profile as profile_service

profile_router = APIRouter(prefix="/profile", tags=["profile"])


@profile_router.get("", response_model=ProfileResponse)
async def get_profile(session: SessionDep, auth: AuthDep) -> ProfileResponse:
    """Get the caller's profile, creating it with defaults on first access."""
    return await profile_service.get_profile(session, auth.user_id)


@profile_router.put("", response_model=ProfileResponse)
async def put_profile(
    payload: UpdateProfileRequest,
    session: SessionDep,
    auth: AuthDep,
) -> ProfileResponse:
    """Replace the caller's profile."""
    return await profile_service.put_profile(session, auth.user_id, payload)
