# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query

from shiftcal.schemas.holiday import HolidayListResponse, HolidayLookupResponse, HolidayResponse
from shiftcal.services import holiday as holiday_oracle

holidays_router = APIRouter(prefix="/holidays", tags=["holidays"])


@holidays_router.get("", response_model=HolidayListResponse)
async def list_holidays(
    year: int = Query(ge=1900, le=2999),
) -> HolidayListResponse:
    """List the public holidays of a year."""
    holidays = holiday_oracle.holidays_for_year(year)
    return HolidayListResponse(
        year=year,
        items=[HolidayResponse(date=h.date, name=h.name) for h in holidays],
        total=len(holidays),
        lunar_supported=holiday_oracle.is_lunar_supported(year),
    )


@holidays_router.get("/{day}", response_model=HolidayLookupResponse)
async def lookup_holiday(day: date) -> HolidayLookupResponse:
    """Tell whether a day is a public holiday."""
    name = holiday_oracle.holiday_name(day)
    return HolidayLookupResponse(date=day, is_holiday=name is not None, name=name)
