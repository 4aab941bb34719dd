"""Month selector parsing and day iteration."""

from __future__ import annotations

import re
from calendar import monthrange
from datetime import date, timedelta
from typing import TYPE_CHECKING

from fastapi import status

from shiftcal.exceptions import AppError

if TYPE_CHECKING:
    from collections.abc import Iterator

_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def parse_month(month: str) -> tuple[date, date]:
    """Resolve a "YYYY-MM" selector to its first and last day (inclusive)."""
    match = _MONTH_PATTERN.match(month)
    if match is None:
        raise AppError(f"Invalid month {month!r}, expected YYYY-MM", status_code=status.HTTP_400_BAD_REQUEST)
    year, month_number = int(match.group(1)), int(match.group(2))
    if not 1 <= month_number <= 12:
        raise AppError(f"Invalid month {month!r}, expected YYYY-MM", status_code=status.HTTP_400_BAD_REQUEST)
    return month_bounds(year, month_number)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    _, days_in_month = monthrange(year, month)
    return date(year, month, 1), date(year, month, days_in_month)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every day from start to end, both inclusive."""
    current = start
    one_day = timedelta(days=1)
    while current <= end:
        yield current
        current += one_day


def format_month(day: date) -> str:
    return f"{day.year:04d}-{day.month:02d}"
