import logging
from datetime import date
from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from shiftcal.config import get_settings
from shiftcal.db import SessionDep
from shiftcal.services import holiday as holiday_oracle

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response.

    ``lunar_holidays`` is false when the holiday table does not cover the
    current year; monthly holiday counts and extra-day-off budgets then miss
    설날, 추석 and 부처님오신날.
    """

    status: Literal["ok", "degraded", "error"]
    version: str
    environment: str
    lunar_holidays: bool


@router.get("/health", response_model=HealthResponse)
async def health(session: SessionDep) -> HealthResponse:
    """Report database connectivity and holiday data coverage."""
    settings = get_settings()
    status: Literal["ok", "degraded", "error"] = "ok"

    try:
        await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.exception("Health check: database connectivity failed")
        status = "degraded"

    return HealthResponse(
        status=status,
        version=settings.app_version,
        environment=settings.environment,
        lunar_holidays=holiday_oracle.is_lunar_supported(date.today().year),
    )
