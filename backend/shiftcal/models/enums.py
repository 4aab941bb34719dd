from __future__ import annotations

import enum


class ShiftKind(enum.StrEnum):
    """Shift or leave kind that applies to a calendar day."""

    DAY = "day"
    NIGHT = "night"
    OFF = "off"
    HOLIDAY = "holiday"
    ANNUAL = "annual"
    ANNUAL_HALF = "annual_half"
    SPECIAL = "special"
    SICK = "sick"
    EXTRA_HALF = "extra_half"

    @property
    def is_leave(self) -> bool:
        return self in LEAVE_KINDS


WORK_PATTERN_KINDS = frozenset({ShiftKind.DAY, ShiftKind.NIGHT, ShiftKind.OFF, ShiftKind.HOLIDAY})
LEAVE_KINDS = frozenset(
    {ShiftKind.ANNUAL, ShiftKind.ANNUAL_HALF, ShiftKind.SPECIAL, ShiftKind.SICK, ShiftKind.EXTRA_HALF}
)


class LeaveBucket(enum.StrEnum):
    """Balance a leave deduction is charged against."""

    ANNUAL = "annual"
    SICK = "sick"
    SPECIAL = "special"
    EXTRA = "extra"


class PaymentOption(enum.StrEnum):
    """How a two-day leave on a night or off day is paid for.

    ``single`` spends the requested kind's own bucket. The other options
    spend annual leave and apply to annual leave or holiday requests only.
    """

    SINGLE = "single"
    ANNUAL = "annual"
    MIXED_ANNUAL_EXTRA = "mixed_annual_extra"
    MIXED_EXTRA_ANNUAL = "mixed_extra_annual"


class Team(enum.StrEnum):
    """Rotation groups of the 4-team/3-shift pattern."""

    A = "A조"
    B = "B조"
    C = "C조"
    D = "D조"


class AuditEntityType(enum.StrEnum):
    """Entity type recorded in the audit log."""

    SCHEDULE = "SCHEDULE"
    PROFILE = "PROFILE"


class AuditAction(enum.StrEnum):
    """Action recorded in the audit log."""

    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
