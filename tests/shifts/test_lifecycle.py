from dataclasses import replace
from datetime import datetime

import pytest

from src.shiftpay.shiftpay.core.enums import RateMultiplier, ShiftStatus
from src.shiftpay.shiftpay.core.exceptions import InvalidLifecycleTransitionError, ValidationError
from src.shiftpay.shiftpay.shifts.lifecycle import ShiftLifecycle
from src.shiftpay.shiftpay.shifts.model import Shift


def _shift(**kwargs) -> Shift:
    values = dict(scheduled_start=datetime(2024, 1, 10, 9, 0), scheduled_end=datetime(2024, 1, 10, 17, 0))
    values.update(kwargs)
    return Shift(**values)


def test_clock_in_returns_new_in_progress_shift(clock):
    lifecycle = ShiftLifecycle(clock=clock)
    shift = _shift()

    started = lifecycle.clock_in(shift, datetime(2024, 1, 10, 8, 55))

    assert started.status == ShiftStatus.IN_PROGRESS
    assert started.actual_start == datetime(2024, 1, 10, 8, 55)
    assert shift.status == ShiftStatus.SCHEDULED
    assert shift.actual_start is None


def test_clock_in_defaults_to_clock_now(clock, fixed_now):
    started = ShiftLifecycle(clock=clock).clock_in(_shift())
    assert started.actual_start == fixed_now


def test_clock_out_completes_and_recalculates_paid_minutes(clock):
    lifecycle = ShiftLifecycle(clock=clock)
    started = lifecycle.clock_in(_shift(), datetime(2024, 1, 10, 9, 0))

    done = lifecycle.clock_out(started, datetime(2024, 1, 10, 17, 30))

    assert done.status == ShiftStatus.COMPLETED
    assert done.actual_end == datetime(2024, 1, 10, 17, 30)
    assert done.paid_minutes == 510 - 30
    assert done.premium_minutes == 0


def test_clock_out_marks_premium_minutes_for_premium_rate(clock):
    lifecycle = ShiftLifecycle(clock=clock)
    started = lifecycle.clock_in(_shift(rate_multiplier=1.5), datetime(2024, 1, 10, 9, 0))

    done = lifecycle.clock_out(started, datetime(2024, 1, 10, 17, 0))

    assert done.paid_minutes == 450
    assert done.premium_minutes == 450


def test_clock_out_of_scheduled_shift_is_rejected(clock):
    with pytest.raises(InvalidLifecycleTransitionError):
        ShiftLifecycle(clock=clock).clock_out(_shift())


def test_clock_in_twice_is_rejected(clock):
    lifecycle = ShiftLifecycle(clock=clock)
    started = lifecycle.clock_in(_shift())
    with pytest.raises(InvalidLifecycleTransitionError):
        lifecycle.clock_in(started)


def test_clock_out_before_clock_in_time_is_invalid(clock):
    lifecycle = ShiftLifecycle(clock=clock)
    started = lifecycle.clock_in(_shift(), datetime(2024, 1, 10, 9, 0))
    with pytest.raises(ValidationError):
        lifecycle.clock_out(started, datetime(2024, 1, 10, 8, 0))


@pytest.mark.parametrize("status", [ShiftStatus.COMPLETED, ShiftStatus.CANCELLED])
def test_terminal_shifts_cannot_be_cancelled(clock, status):
    with pytest.raises(InvalidLifecycleTransitionError):
        ShiftLifecycle(clock=clock).cancel(_shift(status=status))


def test_cancel_in_progress_shift(clock):
    lifecycle = ShiftLifecycle(clock=clock)
    cancelled = lifecycle.cancel(lifecycle.clock_in(_shift()))
    assert cancelled.status == ShiftStatus.CANCELLED
    assert cancelled.status.is_terminal


@pytest.mark.parametrize(
    "start, end, actual, break_minutes, expected",
    [
        ((9, 0), (17, 0), None, 30, 450),
        ((9, 0), (17, 0), ((9, 0), (18, 0)), 30, 510),
        ((9, 0), (17, 0), None, 0, 480),
        ((9, 0), (9, 20), None, 30, 0),
        ((9, 0), (17, 0), ((9, 0), (9, 10)), 60, 0),
    ],
)
def test_paid_minutes_never_negative(clock, start, end, actual, break_minutes, expected):
    def at(hm):
        return datetime(2024, 1, 10, *hm)

    shift = _shift(scheduled_start=at(start), scheduled_end=at(end), break_minutes=break_minutes)
    if actual:
        shift = replace(shift, actual_start=at(actual[0]), actual_end=at(actual[1]))

    recalculated = ShiftLifecycle(clock=clock).recalculate_paid_minutes(shift)

    assert recalculated.paid_minutes == max(0, recalculated.effective_duration_minutes - recalculated.break_minutes)
    assert recalculated.paid_minutes == expected


def test_set_rate_does_not_touch_premium_minutes(clock):
    lifecycle = ShiftLifecycle(clock=clock)
    shift = _shift(paid_minutes=450, premium_minutes=0)

    rated = lifecycle.set_rate(shift, 1.5, "Extra")

    assert rated.rate_multiplier == 1.5
    assert rated.rate_label == "Extra"
    assert rated.premium_minutes == 0
    assert rated.updated_at == clock.now()


@pytest.mark.parametrize("multiplier", [0, -1.5])
def test_set_rate_requires_positive_multiplier(clock, multiplier):
    with pytest.raises(ValidationError):
        ShiftLifecycle(clock=clock).set_rate(_shift(), multiplier)


def test_set_standard_rate_uses_display_name(clock):
    rated = ShiftLifecycle(clock=clock).set_standard_rate(_shift(), RateMultiplier.BANK_HOLIDAY)
    assert (rated.rate_multiplier, rated.rate_label) == (2.0, "Bank Holiday")
    assert rated.rate_display_label == "Bank Holiday"


def test_quick_shift_is_additional_and_starts_now(clock, fixed_now):
    shift = ShiftLifecycle(clock=clock).quick_shift()

    assert shift.is_additional_shift
    assert shift.scheduled_start == fixed_now
    assert shift.scheduled_duration_minutes == 8 * 60
    assert shift.paid_minutes == 450
    assert shift.created_at == fixed_now


def test_soft_delete_and_restore(clock):
    lifecycle = ShiftLifecycle(clock=clock)
    deleted = lifecycle.soft_delete(_shift())
    assert deleted.is_deleted
    assert not lifecycle.restore(deleted).is_deleted
