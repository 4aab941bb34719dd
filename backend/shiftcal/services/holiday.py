"""Korean public holiday oracle: fixed-date, lunar and substitute holidays."""

# ruff: noqa: TC003
from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

logger = logging.getLogger(__name__)

SUBSTITUTE_SUFFIX = " 대체공휴일"

# (month, day, name)
_FIXED_HOLIDAYS: tuple[tuple[int, int, str], ...] = (
    (1, 1, "신정"),
    (3, 1, "삼일절"),
    (5, 5, "어린이날"),
    (6, 6, "현충일"),
    (8, 15, "광복절"),
    (10, 3, "개천절"),
    (10, 9, "한글날"),
    (12, 25, "크리스마스"),
)

_SEOLLAL_NAMES = ("설날 연휴 (설날 전날)", "설날", "설날 연휴 (설날 다음날)")
_SEOLLAL_EXTRA_NAME = "설날 대체공휴일"
_CHUSEOK_NAMES = ("추석 연휴 (추석 전날)", "추석", "추석 연휴 (추석 다음날)")
_BUDDHA_BIRTHDAY_NAME = "부처님오신날"


class Holiday(BaseModel):
    """A public holiday on a calendar day."""

    date: date
    name: str


class LunarHolidays(BaseModel):
    """Solar dates of the lunar holidays of one year."""

    seollal: list[date]
    chuseok: list[date]
    buddha_birthday: date


@runtime_checkable
class LunarHolidaySource(Protocol):
    """Interface for looking up lunar holiday dates."""

    def lunar_holidays(self, year: int) -> LunarHolidays | None:
        """Return the lunar holidays of a year, or None when the year is not covered."""
        ...


class StaticLunarHolidaySource:
    """Hand-maintained lunar holiday table.

    Dates are not computed astronomically; years missing from the table
    yield None.
    """

    def __init__(self, table: dict[int, LunarHolidays] | None = None) -> None:
        self._table: dict[int, LunarHolidays] = dict(table) if table is not None else dict(_DEFAULT_LUNAR_TABLE)

    def seed(self, year: int, holidays: LunarHolidays) -> None:
        """Add or replace the entry for a year."""
        self._table[year] = holidays

    def lunar_holidays(self, year: int) -> LunarHolidays | None:
        return self._table.get(year)


_DEFAULT_LUNAR_TABLE: dict[int, LunarHolidays] = {
    2024: LunarHolidays(
        seollal=[date(2024, 2, 9), date(2024, 2, 10), date(2024, 2, 11), date(2024, 2, 12)],
        chuseok=[date(2024, 9, 16), date(2024, 9, 17), date(2024, 9, 18)],
        buddha_birthday=date(2024, 5, 15),
    ),
    2025: LunarHolidays(
        seollal=[date(2025, 1, 28), date(2025, 1, 29), date(2025, 1, 30)],
        chuseok=[date(2025, 10, 5), date(2025, 10, 6), date(2025, 10, 7)],
        buddha_birthday=date(2025, 5, 5),
    ),
    2026: LunarHolidays(
        seollal=[date(2026, 2, 16), date(2026, 2, 17), date(2026, 2, 18)],
        chuseok=[date(2026, 9, 24), date(2026, 9, 25), date(2026, 9, 26)],
        buddha_birthday=date(2026, 5, 24),
    ),
}

_lunar_source: LunarHolidaySource = StaticLunarHolidaySource()
_warned_years: set[int] = set()


def get_lunar_holiday_source() -> LunarHolidaySource:
    """Return the active lunar holiday source."""
    return _lunar_source


def set_lunar_holiday_source(source: LunarHolidaySource) -> None:
    """Override the source (for testing or production wiring)."""
    global _lunar_source
    _lunar_source = source
    _warned_years.clear()


# ---------------------------------------------------------------------------
# Year computation
# ---------------------------------------------------------------------------


def _lunar_holidays_for_year(year: int) -> list[Holiday]:
    data = _lunar_source.lunar_holidays(year)
    if data is None:
        if year not in _warned_years:
            _warned_years.add(year)
            logger.warning("No lunar holiday data for %d; lunar holidays are omitted", year)
        return []

    result: list[Holiday] = []
    for index, day in enumerate(data.seollal):
        name = _SEOLLAL_NAMES[index] if index < len(_SEOLLAL_NAMES) else _SEOLLAL_EXTRA_NAME
        result.append(Holiday(date=day, name=name))
    for index, day in enumerate(data.chuseok[: len(_CHUSEOK_NAMES)]):
        result.append(Holiday(date=day, name=_CHUSEOK_NAMES[index]))
    result.append(Holiday(date=data.buddha_birthday, name=_BUDDHA_BIRTHDAY_NAME))
    return result


def _substitute_holidays(holidays: list[Holiday]) -> list[Holiday]:
    """Return substitutes for weekend holidays.

    Sunday moves to the next day and Saturday to the Monday after, unless
    that day is already a holiday. Substitutes are not checked against
    each other.
    """
    taken = {h.date for h in holidays}
    substitutes: list[Holiday] = []
    for holiday in holidays:
        weekday = holiday.date.weekday()
        if weekday == 6:
            candidate = holiday.date + timedelta(days=1)
        elif weekday == 5:
            candidate = holiday.date + timedelta(days=2)
        else:
            continue
        if candidate not in taken:
            substitutes.append(Holiday(date=candidate, name=f"{holiday.name}{SUBSTITUTE_SUFFIX}"))
    return substitutes


def holidays_for_year(year: int) -> list[Holiday]:
    """Return every public holiday of a year, ordered by date."""
    holidays = [Holiday(date=date(year, month, day), name=name) for month, day, name in _FIXED_HOLIDAYS]
    holidays.extend(_lunar_holidays_for_year(year))
    holidays.extend(_substitute_holidays(holidays))
    return sorted(holidays, key=lambda h: h.date)


def is_lunar_supported(year: int) -> bool:
    """Whether lunar holidays are known for a year."""
    return _lunar_source.lunar_holidays(year) is not None


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def is_holiday(day: date) -> bool:
    """Whether a calendar day is a public holiday."""
    return any(h.date == day for h in holidays_for_year(day.year))


def holiday_name(day: date) -> str | None:
    """Name of the first holiday on a day, or None."""
    for holiday in holidays_for_year(day.year):
        if holiday.date == day:
            return holiday.name
    return None


def monthly_holiday_count(year: int, month: int) -> int:
    """Number of holiday entries in a month (1-12).

    Two holidays on the same day count twice.
    """
    return sum(1 for h in holidays_for_year(year) if h.date.month == month)


def holidays_in_range(start: date, end: date) -> list[Holiday]:
    """Holidays between start and end, both inclusive."""
    result: list[Holiday] = []
    for year in range(start.year, end.year + 1):
        result.extend(h for h in holidays_for_year(year) if start <= h.date <= end)
    return result
