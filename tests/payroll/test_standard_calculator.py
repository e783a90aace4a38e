from datetime import datetime

from src.shiftpay.shiftpay.core.enums import ShiftStatus
from src.shiftpay.shiftpay.payroll.calculator.standard_calculator import StandardPaidMinutesCalculator
from src.shiftpay.shiftpay.shifts.model import Shift


def _shift(**kwargs) -> Shift:
    return Shift(
        scheduled_start=datetime(2024, 1, 10, 7, 0),
        scheduled_end=datetime(2024, 1, 10, 19, 0),
        **kwargs,
    )


def test_standard_calculator_subtracts_break():
    shift = _shift(
        actual_start=datetime(2024, 1, 10, 7, 0),
        actual_end=datetime(2024, 1, 10, 19, 0),
        break_minutes=30,
        status=ShiftStatus.COMPLETED,
    )

    assert StandardPaidMinutesCalculator().paid_minutes(shift) == 690


def test_falls_back_to_scheduled_window_without_actual_times():
    assert StandardPaidMinutesCalculator().paid_minutes(_shift(break_minutes=60)) == 660


def test_break_longer_than_worked_time_never_goes_negative():
    shift = _shift(
        actual_start=datetime(2024, 1, 10, 7, 0),
        actual_end=datetime(2024, 1, 10, 7, 10),
        break_minutes=30,
    )

    assert StandardPaidMinutesCalculator().paid_minutes(shift) == 0


def test_premium_minutes_follow_the_multiplier():
    calc = StandardPaidMinutesCalculator()

    assert calc.premium_minutes(_shift(rate_multiplier=1.5), 600) == 600
    assert calc.premium_minutes(_shift(rate_multiplier=1.0), 600) == 0


def test_negative_break_is_treated_as_no_break():
    shift = _shift(break_minutes=-60)

    assert StandardPaidMinutesCalculator().paid_minutes(shift) == 720
