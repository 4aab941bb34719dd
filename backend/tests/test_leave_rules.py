"""Unit tests for leave deduction rules and shift change planning (no DB)."""

from __future__ import annotations

from datetime import date

import pytest

from shiftcal.exceptions import IllegalTransitionError, InsufficientBalanceError
from shiftcal.models.enums import LeaveBucket, PaymentOption, ShiftKind
from shiftcal.services.leave_rules import (
    LeaveBalances,
    ScheduleWrite,
    ShiftChangePlan,
    can_change_shift,
    day_share,
    deduction_for,
    is_paired,
    plan_reset,
    plan_shift_change,
)

TARGET = date(2024, 6, 11)
NEXT_DAY = date(2024, 6, 12)
BALANCES = LeaveBalances(total_annual=15, total_sick=5, total_special=3)


def _plan(
    requested: ShiftKind,
    current: ShiftKind,
    *,
    stored: ShiftKind | None = None,
    next_stored: ShiftKind | None = None,
    next_default: ShiftKind = ShiftKind.OFF,
    balances: LeaveBalances = BALANCES,
    extra_capacity: float = 3.0,
    payment: PaymentOption = PaymentOption.SINGLE,
) -> ShiftChangePlan:
    return plan_shift_change(
        target=TARGET,
        requested=requested,
        current=current,
        stored=stored,
        next_stored=next_stored,
        next_default=next_default,
        balances=balances,
        extra_capacity=extra_capacity,
        payment=payment,
    )


# ---------------------------------------------------------------------------
# Deductions
# ---------------------------------------------------------------------------


class TestDeductionFor:
    @pytest.mark.parametrize(
        ("requested", "current", "expected"),
        [
            (ShiftKind.ANNUAL, ShiftKind.DAY, {LeaveBucket.ANNUAL: 1.0}),
            (ShiftKind.ANNUAL, ShiftKind.NIGHT, {LeaveBucket.ANNUAL: 2.0}),
            (ShiftKind.ANNUAL, ShiftKind.OFF, {LeaveBucket.ANNUAL: 2.0}),
            (ShiftKind.ANNUAL_HALF, ShiftKind.DAY, {LeaveBucket.ANNUAL: 0.5}),
            (ShiftKind.SPECIAL, ShiftKind.NIGHT, {LeaveBucket.SPECIAL: 2.0}),
            (ShiftKind.SICK, ShiftKind.DAY, {LeaveBucket.SICK: 1.0}),
            (ShiftKind.EXTRA_HALF, ShiftKind.DAY, {LeaveBucket.EXTRA: 0.5}),
            (ShiftKind.EXTRA_HALF, ShiftKind.OFF, {LeaveBucket.EXTRA: 1.0}),
            (ShiftKind.HOLIDAY, ShiftKind.DAY, {LeaveBucket.EXTRA: 1.0}),
            (ShiftKind.HOLIDAY, ShiftKind.NIGHT, {LeaveBucket.EXTRA: 2.0}),
            (ShiftKind.HOLIDAY, ShiftKind.OFF, {LeaveBucket.EXTRA: 2.0}),
            (ShiftKind.HOLIDAY, ShiftKind.HOLIDAY, {}),
            (ShiftKind.HOLIDAY, ShiftKind.ANNUAL, {}),
            (ShiftKind.DAY, ShiftKind.NIGHT, {}),
            (ShiftKind.OFF, ShiftKind.DAY, {}),
        ],
    )
    def test_deduction(self, requested: ShiftKind, current: ShiftKind, expected: dict[LeaveBucket, float]) -> None:
        assert deduction_for(requested, current) == expected

    def test_half_annual_is_never_doubled(self) -> None:
        assert not is_paired(ShiftKind.ANNUAL_HALF, ShiftKind.NIGHT)
        assert deduction_for(ShiftKind.ANNUAL_HALF, ShiftKind.OFF) == {LeaveBucket.ANNUAL: 0.5}

    @pytest.mark.parametrize("current", [ShiftKind.NIGHT, ShiftKind.OFF])
    def test_holiday_pairs_on_night_and_off(self, current: ShiftKind) -> None:
        assert is_paired(ShiftKind.HOLIDAY, current)
        assert not is_paired(ShiftKind.HOLIDAY, ShiftKind.DAY)


class TestDayShare:
    @pytest.mark.parametrize(
        ("stored", "default", "expected"),
        [
            (ShiftKind.ANNUAL, ShiftKind.OFF, {LeaveBucket.ANNUAL: 1.0}),
            (ShiftKind.SICK, ShiftKind.NIGHT, {LeaveBucket.SICK: 1.0}),
            (ShiftKind.ANNUAL_HALF, ShiftKind.DAY, {LeaveBucket.ANNUAL: 0.5}),
            (ShiftKind.HOLIDAY, ShiftKind.DAY, {LeaveBucket.EXTRA: 1.0}),
            (ShiftKind.HOLIDAY, ShiftKind.OFF, {LeaveBucket.EXTRA: 1.0}),
            (ShiftKind.HOLIDAY, ShiftKind.HOLIDAY, {}),
            (ShiftKind.DAY, ShiftKind.OFF, {}),
        ],
    )
    def test_day_share(self, stored: ShiftKind, default: ShiftKind, expected: dict[LeaveBucket, float]) -> None:
        assert day_share(stored, default) == expected


# ---------------------------------------------------------------------------
# Legality
# ---------------------------------------------------------------------------


class TestCanChangeShift:
    @pytest.mark.parametrize(
        "requested",
        [ShiftKind.ANNUAL, ShiftKind.ANNUAL_HALF, ShiftKind.SPECIAL, ShiftKind.SICK, ShiftKind.EXTRA_HALF],
    )
    def test_no_leave_on_holiday(self, requested: ShiftKind) -> None:
        with pytest.raises(IllegalTransitionError) as exc_info:
            can_change_shift(ShiftKind.HOLIDAY, requested)
        assert exc_info.value.rule == "leave_on_holiday"
        assert exc_info.value.status_code == 409

    @pytest.mark.parametrize("current", [ShiftKind.NIGHT, ShiftKind.OFF])
    @pytest.mark.parametrize("requested", [ShiftKind.ANNUAL_HALF, ShiftKind.EXTRA_HALF])
    def test_half_day_leave_needs_day_shift(self, current: ShiftKind, requested: ShiftKind) -> None:
        with pytest.raises(IllegalTransitionError) as exc_info:
            can_change_shift(current, requested)
        assert exc_info.value.rule == "half_leave_requires_day"
        assert exc_info.value.context == {
            "rule": "half_leave_requires_day",
            "current": current.value,
            "requested": requested.value,
        }

    @pytest.mark.parametrize(
        ("current", "requested"),
        [
            (ShiftKind.DAY, ShiftKind.ANNUAL_HALF),
            (ShiftKind.DAY, ShiftKind.EXTRA_HALF),
            (ShiftKind.HOLIDAY, ShiftKind.DAY),
            (ShiftKind.HOLIDAY, ShiftKind.HOLIDAY),
            (ShiftKind.NIGHT, ShiftKind.ANNUAL),
            (ShiftKind.ANNUAL, ShiftKind.SICK),
        ],
    )
    def test_allowed(self, current: ShiftKind, requested: ShiftKind) -> None:
        can_change_shift(current, requested)


# ---------------------------------------------------------------------------
# Balances
# ---------------------------------------------------------------------------


class TestLeaveBalances:
    def test_restore_clamps_at_zero(self) -> None:
        balances = LeaveBalances(total_annual=15, used_annual=1)
        assert balances.restore({LeaveBucket.ANNUAL: 2.0}).used_annual == 0.0

    def test_available_extra_uses_capacity(self) -> None:
        balances = LeaveBalances(used_extra=1)
        assert balances.available(LeaveBucket.EXTRA, extra_capacity=4) == 3.0
        assert balances.available(LeaveBucket.EXTRA, extra_capacity=0) == 0.0

    def test_charge_adds_to_used(self) -> None:
        balances = LeaveBalances(total_sick=5, used_sick=1).charge({LeaveBucket.SICK: 2.0})
        assert balances.used_sick == 3.0
        assert balances.available(LeaveBucket.SICK) == 2.0


# ---------------------------------------------------------------------------
# Planning
# ---------------------------------------------------------------------------


class TestPlanShiftChange:
    def test_annual_on_day_is_single(self) -> None:
        plan = _plan(ShiftKind.ANNUAL, ShiftKind.DAY)
        assert not plan.paired
        assert plan.schedule_writes == (ScheduleWrite(TARGET, ShiftKind.ANNUAL),)
        assert plan.charged == {LeaveBucket.ANNUAL: 1.0}
        assert plan.balances_after.used_annual == 1.0

    def test_annual_on_night_writes_both_days(self) -> None:
        plan = _plan(ShiftKind.ANNUAL, ShiftKind.NIGHT)
        assert plan.paired
        assert plan.schedule_writes == (
            ScheduleWrite(TARGET, ShiftKind.ANNUAL),
            ScheduleWrite(NEXT_DAY, ShiftKind.ANNUAL),
        )
        assert plan.balances_after.used_annual == 2.0

    def test_mixed_annual_extra(self) -> None:
        plan = _plan(ShiftKind.ANNUAL, ShiftKind.NIGHT, payment=PaymentOption.MIXED_ANNUAL_EXTRA)
        assert plan.schedule_writes == (
            ScheduleWrite(TARGET, ShiftKind.ANNUAL),
            ScheduleWrite(NEXT_DAY, ShiftKind.HOLIDAY),
        )
        assert plan.charged == {LeaveBucket.ANNUAL: 1.0, LeaveBucket.EXTRA: 1.0}
        assert plan.balances_after.used_annual == 1.0
        assert plan.balances_after.used_extra == 1.0

    def test_mixed_extra_annual(self) -> None:
        plan = _plan(ShiftKind.ANNUAL, ShiftKind.OFF, payment=PaymentOption.MIXED_EXTRA_ANNUAL)
        assert plan.schedule_writes == (
            ScheduleWrite(TARGET, ShiftKind.HOLIDAY),
            ScheduleWrite(NEXT_DAY, ShiftKind.ANNUAL),
        )
        assert plan.charged == {LeaveBucket.ANNUAL: 1.0, LeaveBucket.EXTRA: 1.0}

    def test_mixed_payment_requires_pair(self) -> None:
        with pytest.raises(IllegalTransitionError) as exc_info:
            _plan(ShiftKind.ANNUAL, ShiftKind.DAY, payment=PaymentOption.MIXED_ANNUAL_EXTRA)
        assert exc_info.value.rule == "payment_requires_pair"

    def test_mixed_payment_needs_extra_capacity(self) -> None:
        with pytest.raises(InsufficientBalanceError) as exc_info:
            _plan(
                ShiftKind.ANNUAL,
                ShiftKind.NIGHT,
                payment=PaymentOption.MIXED_ANNUAL_EXTRA,
                extra_capacity=0.0,
            )
        assert exc_info.value.bucket == "extra"

    def test_holiday_on_day_uses_extra_budget(self) -> None:
        plan = _plan(ShiftKind.HOLIDAY, ShiftKind.DAY)
        assert plan.charged == {LeaveBucket.EXTRA: 1.0}
        assert plan.balances_after.used_extra == 1.0

    def test_holiday_on_rotation_holiday_is_free(self) -> None:
        plan = _plan(ShiftKind.HOLIDAY, ShiftKind.HOLIDAY, extra_capacity=0.0)
        assert not plan.paired
        assert plan.charged == {}
        assert not plan.changes_ledger

    @pytest.mark.parametrize("current", [ShiftKind.NIGHT, ShiftKind.OFF])
    def test_holiday_on_night_or_off_pays_two_extra_days(self, current: ShiftKind) -> None:
        plan = _plan(ShiftKind.HOLIDAY, current)
        assert plan.paired
        assert plan.schedule_writes == (
            ScheduleWrite(TARGET, ShiftKind.HOLIDAY),
            ScheduleWrite(NEXT_DAY, ShiftKind.HOLIDAY),
        )
        assert plan.charged == {LeaveBucket.EXTRA: 2.0}
        assert plan.balances_after.used_extra == 2.0

    def test_holiday_on_night_paid_with_annual(self) -> None:
        plan = _plan(ShiftKind.HOLIDAY, ShiftKind.NIGHT, payment=PaymentOption.ANNUAL)
        assert plan.schedule_writes == (
            ScheduleWrite(TARGET, ShiftKind.ANNUAL),
            ScheduleWrite(NEXT_DAY, ShiftKind.ANNUAL),
        )
        assert plan.charged == {LeaveBucket.ANNUAL: 2.0}
        assert plan.balances_after.used_extra == 0.0

    def test_holiday_on_night_paid_one_of_each(self) -> None:
        annual_first = _plan(ShiftKind.HOLIDAY, ShiftKind.NIGHT, payment=PaymentOption.MIXED_ANNUAL_EXTRA)
        extra_first = _plan(ShiftKind.HOLIDAY, ShiftKind.NIGHT, payment=PaymentOption.MIXED_EXTRA_ANNUAL)

        assert annual_first.schedule_writes == (
            ScheduleWrite(TARGET, ShiftKind.ANNUAL),
            ScheduleWrite(NEXT_DAY, ShiftKind.HOLIDAY),
        )
        assert extra_first.schedule_writes == (
            ScheduleWrite(TARGET, ShiftKind.HOLIDAY),
            ScheduleWrite(NEXT_DAY, ShiftKind.ANNUAL),
        )
        for plan in (annual_first, extra_first):
            assert plan.charged == {LeaveBucket.ANNUAL: 1.0, LeaveBucket.EXTRA: 1.0}

    def test_holiday_on_night_needs_two_extra_days(self) -> None:
        with pytest.raises(InsufficientBalanceError) as exc_info:
            _plan(ShiftKind.HOLIDAY, ShiftKind.NIGHT, extra_capacity=1.0)
        assert exc_info.value.context == {"bucket": "extra", "required": 2.0, "available": 1.0}

    @pytest.mark.parametrize("requested", [ShiftKind.SICK, ShiftKind.SPECIAL])
    @pytest.mark.parametrize(
        "payment",
        [PaymentOption.ANNUAL, PaymentOption.MIXED_ANNUAL_EXTRA, PaymentOption.MIXED_EXTRA_ANNUAL],
    )
    def test_annual_payment_rejected_for_other_kinds(self, requested: ShiftKind, payment: PaymentOption) -> None:
        with pytest.raises(IllegalTransitionError) as exc_info:
            _plan(requested, ShiftKind.NIGHT, payment=payment)
        assert exc_info.value.rule == "payment_requires_annual_or_holiday"

    @pytest.mark.parametrize("current", [ShiftKind.NIGHT, ShiftKind.OFF])
    def test_half_extra_day_off_never_pairs(self, current: ShiftKind) -> None:
        with pytest.raises(IllegalTransitionError) as exc_info:
            _plan(ShiftKind.EXTRA_HALF, current)
        assert exc_info.value.rule == "half_leave_requires_day"

    def test_holiday_over_stored_annual_costs_nothing(self) -> None:
        # The stored annual is the effective shift, so the holiday is measured
        # against it and charges nothing while the annual day is given back.
        balances = LeaveBalances(total_annual=15, used_annual=1)
        plan = _plan(ShiftKind.HOLIDAY, ShiftKind.ANNUAL, stored=ShiftKind.ANNUAL, balances=balances)
        assert plan.restored == {LeaveBucket.ANNUAL: 1.0}
        assert plan.charged == {}
        assert plan.balances_after == LeaveBalances(total_annual=15)

    def test_holiday_on_day_without_budget(self) -> None:
        with pytest.raises(InsufficientBalanceError) as exc_info:
            _plan(ShiftKind.HOLIDAY, ShiftKind.DAY, extra_capacity=0.0)
        assert exc_info.value.context == {"bucket": "extra", "required": 1.0, "available": 0.0}

    def test_insufficient_balance_message(self) -> None:
        balances = LeaveBalances(total_annual=15, used_annual=14)
        with pytest.raises(InsufficientBalanceError) as exc_info:
            _plan(ShiftKind.ANNUAL, ShiftKind.NIGHT, balances=balances)
        assert exc_info.value.message == "Insufficient annual balance: requires 2, available 1"
        assert exc_info.value.status_code == 400

    def test_sick_with_zero_total(self) -> None:
        with pytest.raises(InsufficientBalanceError) as exc_info:
            _plan(ShiftKind.SICK, ShiftKind.DAY, balances=LeaveBalances(total_annual=15))
        assert exc_info.value.bucket == "sick"
        assert exc_info.value.available == 0.0

    def test_restore_happens_before_balance_check(self) -> None:
        # The only annual day left is the one stored on the target.
        balances = LeaveBalances(total_annual=1, used_annual=1)
        plan = _plan(ShiftKind.ANNUAL, ShiftKind.ANNUAL, stored=ShiftKind.ANNUAL, balances=balances)
        assert plan.restored == {LeaveBucket.ANNUAL: 1.0}
        assert plan.balances_after.used_annual == 1.0

    def test_switching_leave_kind_moves_the_deduction(self) -> None:
        balances = LeaveBalances(total_annual=15, used_annual=1, total_sick=5)
        plan = _plan(ShiftKind.SICK, ShiftKind.ANNUAL, stored=ShiftKind.ANNUAL, balances=balances)
        assert plan.balances_after.used_annual == 0.0
        assert plan.balances_after.used_sick == 1.0

    def test_restore_is_measured_against_requested_kind(self) -> None:
        # Annual stored over a night was charged 2, but going back to night
        # measures the restore against "night" and gives back 2 as well,
        # while going back to day gives back only 1.
        balances = LeaveBalances(total_annual=15, used_annual=2)
        to_night = _plan(ShiftKind.NIGHT, ShiftKind.ANNUAL, stored=ShiftKind.ANNUAL, balances=balances)
        to_day = _plan(ShiftKind.DAY, ShiftKind.ANNUAL, stored=ShiftKind.ANNUAL, balances=balances)
        assert to_night.balances_after.used_annual == 0.0
        assert to_day.balances_after.used_annual == 1.0

    def test_paired_change_restores_next_day(self) -> None:
        balances = LeaveBalances(total_annual=15, used_annual=1)
        plan = _plan(ShiftKind.ANNUAL, ShiftKind.NIGHT, next_stored=ShiftKind.ANNUAL, balances=balances)
        assert plan.restored == {LeaveBucket.ANNUAL: 1.0}
        assert plan.balances_after.used_annual == 2.0

    def test_paired_change_restores_next_day_holiday(self) -> None:
        balances = LeaveBalances(total_annual=15, used_extra=1)
        plan = _plan(ShiftKind.ANNUAL, ShiftKind.NIGHT, next_stored=ShiftKind.HOLIDAY, balances=balances)
        assert plan.restored == {LeaveBucket.EXTRA: 1.0}
        assert plan.balances_after.used_extra == 0.0
        assert plan.balances_after.used_annual == 2.0

    def test_next_day_holiday_on_rotation_holiday_restores_nothing(self) -> None:
        balances = LeaveBalances(total_annual=15, used_extra=1)
        plan = _plan(
            ShiftKind.ANNUAL,
            ShiftKind.NIGHT,
            next_stored=ShiftKind.HOLIDAY,
            next_default=ShiftKind.HOLIDAY,
            balances=balances,
        )
        assert plan.restored == {}
        assert plan.balances_after.used_extra == 1.0

    def test_leave_on_holiday_rejected_before_balances(self) -> None:
        with pytest.raises(IllegalTransitionError):
            _plan(ShiftKind.SICK, ShiftKind.HOLIDAY, balances=LeaveBalances())


class TestPlanReset:
    def test_reset_restores_against_default(self) -> None:
        balances = LeaveBalances(total_annual=15, used_annual=1)
        restored, after = plan_reset(stored=ShiftKind.ANNUAL, default=ShiftKind.DAY, balances=balances)
        assert restored == {LeaveBucket.ANNUAL: 1.0}
        assert after.used_annual == 0.0

    def test_reset_of_work_shift_restores_nothing(self) -> None:
        restored, after = plan_reset(stored=ShiftKind.NIGHT, default=ShiftKind.DAY, balances=BALANCES)
        assert restored == {}
        assert after == BALANCES
