# ruff: noqa: TC003
from __future__ import annotations

from datetime import date

from pydantic import BaseModel


class HolidayResponse(BaseModel):
    """A public holiday."""

    date: date
    name: str


class HolidayListResponse(BaseModel):
    """Public holidays of one year."""

    year: int
    items: list[HolidayResponse]
    total: int
    lunar_supported: bool


class HolidayLookupResponse(BaseModel):
    """Holiday status of a single day."""

    date: date
    is_holiday: bool
    name: str | None
