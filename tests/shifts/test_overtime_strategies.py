from datetime import datetime

from src.shiftpay.shiftpay.core.enums import ShiftStatus
from src.shiftpay.shiftpay.shifts.lifecycle import ShiftLifecycle
from src.shiftpay.shiftpay.shifts.model import Shift
from src.shiftpay.shiftpay.shifts.overtime.cancelled_strategy import CancelledOvertimeStrategy
from src.shiftpay.shiftpay.shifts.overtime.completed_strategy import CompletedOvertimeStrategy
from src.shiftpay.shiftpay.shifts.overtime.factory import OvertimeStrategyFactory
from src.shiftpay.shiftpay.shifts.overtime.in_progress_strategy import InProgressOvertimeStrategy
from src.shiftpay.shiftpay.shifts.overtime.scheduled_strategy import ScheduledOvertimeStrategy

START = datetime(2024, 1, 10, 9, 0)
END = datetime(2024, 1, 10, 17, 0)


def _at(hour, minute=0) -> datetime:
    return datetime(2024, 1, 10, hour, minute)


def _overtime(shift: Shift, at: datetime, clock) -> int:
    return ShiftLifecycle(clock=clock).overtime_minutes(shift, at)


def test_factory_picks_strategy_by_status():
    factory = OvertimeStrategyFactory()
    assert isinstance(factory.for_status(ShiftStatus.SCHEDULED), ScheduledOvertimeStrategy)
    assert isinstance(factory.for_status(ShiftStatus.IN_PROGRESS), InProgressOvertimeStrategy)
    assert isinstance(factory.for_status(ShiftStatus.COMPLETED), CompletedOvertimeStrategy)
    assert isinstance(factory.for_status(ShiftStatus.CANCELLED), CancelledOvertimeStrategy)


def test_completed_regular_shift_reports_time_beyond_schedule(clock):
    shift = Shift(
        scheduled_start=START,
        scheduled_end=END,
        actual_start=START,
        actual_end=_at(18),
        status=ShiftStatus.COMPLETED,
        paid_minutes=510,
    )
    assert shift.scheduled_duration_minutes == 480
    assert shift.actual_duration_minutes == 540
    assert _overtime(shift, _at(20), clock) == 60


def test_completed_shift_within_schedule_has_no_overtime(clock):
    shift = Shift(
        scheduled_start=START,
        scheduled_end=END,
        actual_start=START,
        actual_end=_at(16),
        status=ShiftStatus.COMPLETED,
        paid_minutes=390,
    )
    assert _overtime(shift, _at(20), clock) == 0


def test_completed_shift_prefers_premium_minutes(clock):
    shift = Shift(
        scheduled_start=START,
        scheduled_end=END,
        actual_start=START,
        actual_end=END,
        break_minutes=0,
        status=ShiftStatus.COMPLETED,
        paid_minutes=480,
        premium_minutes=450,
        rate_multiplier=1.5,
    )
    assert _overtime(shift, _at(20), clock) == 450


def test_completed_premium_minutes_are_capped_at_paid_minutes(clock):
    shift = Shift(
        scheduled_start=START,
        scheduled_end=END,
        status=ShiftStatus.COMPLETED,
        paid_minutes=300,
        premium_minutes=450,
    )
    assert _overtime(shift, _at(20), clock) == 300


def test_completed_additional_shift_is_overtime_in_full(clock):
    shift = Shift(
        scheduled_start=START,
        scheduled_end=END,
        actual_start=START,
        actual_end=END,
        status=ShiftStatus.COMPLETED,
        paid_minutes=450,
        is_additional_shift=True,
    )
    assert _overtime(shift, _at(20), clock) == 450


def test_scheduled_regular_shift_has_no_overtime(clock):
    assert _overtime(Shift(scheduled_start=START, scheduled_end=END), _at(8), clock) == 0


def test_scheduled_additional_shift_reports_paid_minutes(clock):
    shift = Shift(scheduled_start=START, scheduled_end=END, is_additional_shift=True)
    assert _overtime(shift, _at(8), clock) == 450


def test_scheduled_premium_shift_reports_paid_minutes(clock):
    shift = Shift(scheduled_start=START, scheduled_end=END, rate_multiplier=2.0, paid_minutes=450)
    assert _overtime(shift, _at(8), clock) == 450


def test_in_progress_regular_shift_counts_only_excess(clock):
    shift = Shift(scheduled_start=START, scheduled_end=END, actual_start=START, status=ShiftStatus.IN_PROGRESS)
    assert _overtime(shift, _at(16), clock) == 0
    assert _overtime(shift, _at(17, 30), clock) == 30


def test_in_progress_additional_shift_counts_elapsed_minus_break(clock):
    shift = Shift(
        scheduled_start=START,
        scheduled_end=END,
        actual_start=START,
        status=ShiftStatus.IN_PROGRESS,
        is_additional_shift=True,
    )
    assert _overtime(shift, _at(11), clock) == 90
    assert _overtime(shift, _at(9, 10), clock) == 0


def test_in_progress_premium_shift_without_actual_start_uses_paid_minutes(clock):
    shift = Shift(
        scheduled_start=START,
        scheduled_end=END,
        status=ShiftStatus.IN_PROGRESS,
        rate_multiplier=1.5,
        paid_minutes=450,
    )
    assert _overtime(shift, _at(11), clock) == 450


def test_cancelled_shift_never_has_overtime(clock):
    shift = Shift(
        scheduled_start=START,
        scheduled_end=END,
        status=ShiftStatus.CANCELLED,
        is_additional_shift=True,
        paid_minutes=450,
    )
    assert _overtime(shift, _at(20), clock) == 0


def test_overtime_defaults_to_clock_now(clock):
    shift = Shift(
        scheduled_start=datetime(2024, 1, 10, 9, 0),
        scheduled_end=datetime(2024, 1, 10, 11, 0),
        actual_start=datetime(2024, 1, 10, 9, 0),
        status=ShiftStatus.IN_PROGRESS,
    )
    # clock is at 12:00, one hour past the scheduled two
    assert ShiftLifecycle(clock=clock).overtime_minutes(shift) == 60
