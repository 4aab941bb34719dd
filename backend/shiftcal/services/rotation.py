"""4-team/3-shift rotation: default shift of a team on any calendar day."""

from __future__ import annotations

from datetime import date

from shiftcal.models.enums import ShiftKind, Team

REFERENCE_DATE = date(2024, 5, 29)

PATTERN: tuple[ShiftKind, ...] = (ShiftKind.DAY, ShiftKind.NIGHT, ShiftKind.OFF, ShiftKind.HOLIDAY)

# Phase of each team on the reference date.
TEAM_OFFSETS: dict[str, int] = {
    Team.A: 0,
    Team.D: 1,
    Team.C: 2,
    Team.B: 3,
}


def team_offset(team: str) -> int:
    """Pattern phase of a team; unknown teams use phase 0."""
    return TEAM_OFFSETS.get(team, 0)


def default_shift(target: date, team: str, reference: date = REFERENCE_DATE) -> ShiftKind:
    """Shift the rotation assigns to a team on a day."""
    days = (target - reference).days
    return PATTERN[(days + team_offset(team)) % len(PATTERN)]
