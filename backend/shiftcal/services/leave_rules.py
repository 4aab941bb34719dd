"""Leave accounting rules for shift overrides.

Everything here is pure: callers pass in the current effective shift,
whatever overrides are stored, the balances and the month's extra-day-off
capacity, and get back a ``ShiftChangePlan`` describing every write the
change needs. Applying a plan is the job of ``shiftcal.services.shift_change``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, timedelta

from shiftcal.exceptions import IllegalTransitionError, InsufficientBalanceError
from shiftcal.models.enums import LEAVE_KINDS, LeaveBucket, PaymentOption, ShiftKind

Deduction = dict[LeaveBucket, float]

_BASE_DEDUCTIONS: dict[ShiftKind, tuple[LeaveBucket, float]] = {
    ShiftKind.ANNUAL: (LeaveBucket.ANNUAL, 1.0),
    ShiftKind.ANNUAL_HALF: (LeaveBucket.ANNUAL, 0.5),
    ShiftKind.SPECIAL: (LeaveBucket.SPECIAL, 1.0),
    ShiftKind.SICK: (LeaveBucket.SICK, 1.0),
    ShiftKind.EXTRA_HALF: (LeaveBucket.EXTRA, 0.5),
    ShiftKind.HOLIDAY: (LeaveBucket.EXTRA, 1.0),
}

# Taking one of these on a night or off day covers two calendar days.
# EXTRA_HALF never gets there: can_change_shift rejects half-day leave on
# night and off days first.
_DOUBLED_KINDS = frozenset(
    {ShiftKind.ANNUAL, ShiftKind.SPECIAL, ShiftKind.SICK, ShiftKind.EXTRA_HALF, ShiftKind.HOLIDAY}
)
_PAIRING_SHIFTS = frozenset({ShiftKind.NIGHT, ShiftKind.OFF})
_HALF_DAY_KINDS = frozenset({ShiftKind.ANNUAL_HALF, ShiftKind.EXTRA_HALF})
_NO_HALF_DAY_SHIFTS = frozenset({ShiftKind.NIGHT, ShiftKind.OFF, ShiftKind.HOLIDAY})
_CHARGED_HOLIDAY_SHIFTS = frozenset({ShiftKind.DAY, ShiftKind.NIGHT, ShiftKind.OFF})

# Payments that spend annual leave instead of the requested kind's bucket.
_ANNUAL_PAYMENTS = frozenset(
    {PaymentOption.ANNUAL, PaymentOption.MIXED_ANNUAL_EXTRA, PaymentOption.MIXED_EXTRA_ANNUAL}
)
_ANNUAL_PAYABLE_KINDS = frozenset({ShiftKind.ANNUAL, ShiftKind.HOLIDAY})

RULE_LEAVE_ON_HOLIDAY = "leave_on_holiday"
RULE_HALF_LEAVE_REQUIRES_DAY = "half_leave_requires_day"
RULE_PAYMENT_REQUIRES_PAIR = "payment_requires_pair"
RULE_PAYMENT_REQUIRES_ANNUAL_OR_HOLIDAY = "payment_requires_annual_or_holiday"


# ---------------------------------------------------------------------------
# Balances
# ---------------------------------------------------------------------------

_USED_FIELDS: dict[LeaveBucket, str] = {
    LeaveBucket.ANNUAL: "used_annual",
    LeaveBucket.SICK: "used_sick",
    LeaveBucket.SPECIAL: "used_special",
    LeaveBucket.EXTRA: "used_extra",
}
_TOTAL_FIELDS: dict[LeaveBucket, str] = {
    LeaveBucket.ANNUAL: "total_annual",
    LeaveBucket.SICK: "total_sick",
    LeaveBucket.SPECIAL: "total_special",
}


@dataclass(frozen=True)
class LeaveBalances:
    """Snapshot of a user's leave counters.

    The extra-day-off bucket has no stored total; its ceiling is the
    monthly capacity passed to ``available``.
    """

    total_annual: float = 0.0
    used_annual: float = 0.0
    total_sick: float = 0.0
    used_sick: float = 0.0
    total_special: float = 0.0
    used_special: float = 0.0
    used_extra: float = 0.0

    def used(self, bucket: LeaveBucket) -> float:
        return float(getattr(self, _USED_FIELDS[bucket]))

    def available(self, bucket: LeaveBucket, extra_capacity: float = 0.0) -> float:
        """Remaining amount in a bucket, never negative."""
        if bucket == LeaveBucket.EXTRA:
            return max(0.0, extra_capacity - self.used_extra)
        total = float(getattr(self, _TOTAL_FIELDS[bucket]))
        return max(0.0, total - self.used(bucket))

    def restore(self, deduction: Deduction) -> LeaveBalances:
        """Give a deduction back, clamping used counters at zero."""
        changes = {_USED_FIELDS[b]: max(0.0, self.used(b) - amount) for b, amount in deduction.items()}
        return replace(self, **changes)

    def charge(self, deduction: Deduction) -> LeaveBalances:
        changes = {_USED_FIELDS[b]: self.used(b) + amount for b, amount in deduction.items()}
        return replace(self, **changes)


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def _merge(target: Deduction, other: Deduction) -> Deduction:
    for bucket, amount in other.items():
        target[bucket] = target.get(bucket, 0.0) + amount
    return target


def is_paired(requested: ShiftKind, current: ShiftKind) -> bool:
    """Whether the change covers the selected day and the day after."""
    return current in _PAIRING_SHIFTS and requested in _DOUBLED_KINDS


def can_change_shift(current: ShiftKind, requested: ShiftKind) -> None:
    """Raise IllegalTransitionError when requested cannot replace current."""
    if current == ShiftKind.HOLIDAY and requested in LEAVE_KINDS:
        raise IllegalTransitionError(
            "Leave cannot be taken on a holiday",
            rule=RULE_LEAVE_ON_HOLIDAY,
            current=current.value,
            requested=requested.value,
        )
    if requested in _HALF_DAY_KINDS and current in _NO_HALF_DAY_SHIFTS:
        raise IllegalTransitionError(
            "Half-day leave is only allowed on a day shift",
            rule=RULE_HALF_LEAVE_REQUIRES_DAY,
            current=current.value,
            requested=requested.value,
        )


def deduction_for(requested: ShiftKind, current: ShiftKind) -> Deduction:
    """Leave consumed by setting requested on a day whose shift is current."""
    if requested == ShiftKind.HOLIDAY and current not in _CHARGED_HOLIDAY_SHIFTS:
        return {}

    base = _BASE_DEDUCTIONS.get(requested)
    if base is None:
        return {}
    bucket, amount = base
    if is_paired(requested, current):
        amount *= 2
    return {bucket: amount}


def day_share(stored: ShiftKind, default: ShiftKind) -> Deduction:
    """Leave a single stored day accounts for, against its rotation default.

    Never doubled: a day that is one half of a paired change carries half
    of the pair's deduction.
    """
    if stored == ShiftKind.HOLIDAY and default == ShiftKind.HOLIDAY:
        return {}
    base = _BASE_DEDUCTIONS.get(stored)
    if base is None:
        return {}
    bucket, amount = base
    return {bucket: amount}


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScheduleWrite:
    """One override to upsert."""

    date: date
    shift_type: ShiftKind


@dataclass(frozen=True)
class ShiftChangePlan:
    """All writes of one shift change, computed before anything is stored."""

    target: date
    requested: ShiftKind
    current: ShiftKind
    payment: PaymentOption
    paired: bool
    schedule_writes: tuple[ScheduleWrite, ...]
    balances_before: LeaveBalances
    balances_after: LeaveBalances
    restored: Deduction = field(default_factory=dict)
    charged: Deduction = field(default_factory=dict)

    @property
    def changes_ledger(self) -> bool:
        return self.balances_after != self.balances_before


def _paired_writes(
    target: date,
    requested: ShiftKind,
    current: ShiftKind,
    payment: PaymentOption,
) -> tuple[tuple[ScheduleWrite, ...], Deduction]:
    next_day = target + timedelta(days=1)

    if payment == PaymentOption.SINGLE:
        writes = (ScheduleWrite(target, requested), ScheduleWrite(next_day, requested))
        return writes, deduction_for(requested, current)

    if payment == PaymentOption.ANNUAL:
        writes = (ScheduleWrite(target, ShiftKind.ANNUAL), ScheduleWrite(next_day, ShiftKind.ANNUAL))
        return writes, deduction_for(ShiftKind.ANNUAL, current)

    charged: Deduction = {LeaveBucket.ANNUAL: 1.0, LeaveBucket.EXTRA: 1.0}
    if payment == PaymentOption.MIXED_ANNUAL_EXTRA:
        writes = (ScheduleWrite(target, ShiftKind.ANNUAL), ScheduleWrite(next_day, ShiftKind.HOLIDAY))
    else:
        writes = (ScheduleWrite(target, ShiftKind.HOLIDAY), ScheduleWrite(next_day, ShiftKind.ANNUAL))
    return writes, charged


def plan_shift_change(
    *,
    target: date,
    requested: ShiftKind,
    current: ShiftKind,
    stored: ShiftKind | None,
    next_stored: ShiftKind | None,
    next_default: ShiftKind,
    balances: LeaveBalances,
    extra_capacity: float,
    payment: PaymentOption = PaymentOption.SINGLE,
) -> ShiftChangePlan:
    """Decide whether a change is allowed and what it writes.

    ``current`` is the effective shift of ``target`` (the stored override,
    else the rotation default). ``stored`` and ``next_stored`` are the
    overrides of ``target`` and the following day, if any, and
    ``next_default`` is the rotation shift of the following day.

    A stored leave on ``target`` is given back before the new deduction is
    checked, using the requested kind as the shift it is measured against.
    A paired change also gives back the following day's stored leave, as
    its ``day_share`` against ``next_default``.
    """
    can_change_shift(current, requested)

    paired = is_paired(requested, current)
    if payment != PaymentOption.SINGLE and not paired:
        raise IllegalTransitionError(
            "Split payment only applies to leave taken on a night or off day",
            rule=RULE_PAYMENT_REQUIRES_PAIR,
            current=current.value,
            requested=requested.value,
        )
    if payment in _ANNUAL_PAYMENTS and requested not in _ANNUAL_PAYABLE_KINDS:
        raise IllegalTransitionError(
            "Paying with annual leave only applies to annual leave or a holiday",
            rule=RULE_PAYMENT_REQUIRES_ANNUAL_OR_HOLIDAY,
            current=current.value,
            requested=requested.value,
        )

    restored: Deduction = {}
    if stored is not None:
        _merge(restored, deduction_for(stored, requested))

    if paired:
        writes, charged = _paired_writes(target, requested, current, payment)
        if next_stored is not None:
            _merge(restored, day_share(next_stored, next_default))
    else:
        writes = (ScheduleWrite(target, requested),)
        charged = deduction_for(requested, current)

    after_restore = balances.restore(restored)
    for bucket, amount in charged.items():
        available = after_restore.available(bucket, extra_capacity)
        if amount > available:
            raise InsufficientBalanceError(bucket.value, amount, available)

    return ShiftChangePlan(
        target=target,
        requested=requested,
        current=current,
        payment=payment,
        paired=paired,
        schedule_writes=writes,
        balances_before=balances,
        balances_after=after_restore.charge(charged),
        restored=restored,
        charged=charged,
    )


def plan_reset(
    *,
    stored: ShiftKind,
    default: ShiftKind,
    balances: LeaveBalances,
) -> tuple[Deduction, LeaveBalances]:
    """Deduction given back when an override is removed in favour of the rotation."""
    restored = deduction_for(stored, default)
    return restored, balances.restore(restored)
