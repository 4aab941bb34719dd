# ruff: noqa: B008, TC001
from __future__ import annotations

from fastapi import APIRouter, Query

from shiftcal.api.deps import AuthDep
from shiftcal.db import SessionDep
from shiftcal.models.enums import AuditAction, AuditEntityType
from shiftcal.schemas.audit import AuditLogListResponse
from shiftcal.schemas.report import ExtraDayOffBudget, MonthlyStatsResponse, MonthlySummaryResponse
from shiftcal.services import audit as audit_service
from shiftcal.services import report as report_service

reports_router = APIRouter(prefix="/reports", tags=["reports"])


@reports_router.get("/monthly", response_model=MonthlySummaryResponse)
async def get_monthly_summary(
    session: SessionDep,
    auth: AuthDep,
    month: str = Query(pattern=r"^\d{4}-\d{2}$"),
) -> MonthlySummaryResponse:
    """Shift counts, extra-day-off budget and remaining balances of a month."""
    return await report_service.monthly_summary(session, auth.user_id, month)


@reports_router.get("/monthly/stats", response_model=MonthlyStatsResponse)
async def get_monthly_stats(
    session: SessionDep,
    auth: AuthDep,
    month: str = Query(pattern=r"^\d{4}-\d{2}$"),
) -> MonthlyStatsResponse:
    """Shift counts of a month."""
    return await report_service.monthly_stats(session, auth.user_id, month)


@reports_router.get("/monthly/extra-days-off", response_model=ExtraDayOffBudget)
async def get_extra_day_off_budget(
    session: SessionDep,
    auth: AuthDep,
    month: str = Query(pattern=r"^\d{4}-\d{2}$"),
) -> ExtraDayOffBudget:
    """Extra days off still available in a month."""
    return await report_service.monthly_extra_day_off_budget(session, auth.user_id, month)


@reports_router.get("/audit-log", response_model=AuditLogListResponse)
async def query_audit_log(
    session: SessionDep,
    auth: AuthDep,
    entity_type: AuditEntityType | None = Query(default=None),
    action: AuditAction | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> AuditLogListResponse:
    """The caller's schedule and profile changes, newest first."""
    return await audit_service.list_audit_log(
        session,
        auth.user_id,
        entity_type=entity_type,
        action=action,
        offset=offset,
        limit=limit,
    )
