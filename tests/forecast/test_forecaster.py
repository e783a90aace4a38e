from datetime import date, datetime

import pytest

from src.shiftpay.shiftpay.core.enums import ForecastStatus, PayPeriodType, ShiftStatus
from src.shiftpay.shiftpay.core.exceptions import ValidationError
from src.shiftpay.shiftpay.forecast.service import OvertimeForecaster
from src.shiftpay.shiftpay.payroll.aggregator import PayPeriodAggregator
from src.shiftpay.shiftpay.shifts.model import Shift


def _shift(day, hours, *, status=ShiftStatus.SCHEDULED, break_minutes=0, **kwargs) -> Shift:
    start = datetime(2024, 1, day, 8)
    end = datetime(2024, 1, day, 8 + hours)
    completed = status == ShiftStatus.COMPLETED
    return Shift(
        scheduled_start=start,
        scheduled_end=end,
        actual_start=start if completed else None,
        actual_end=end if completed else None,
        break_minutes=break_minutes,
        status=status,
        paid_minutes=hours * 60 - break_minutes if completed else 0,
        **kwargs,
    )


@pytest.fixture()
def period(clock):
    return PayPeriodAggregator(clock=clock).period_for(date(2024, 1, 10), PayPeriodType.WEEKLY)


@pytest.fixture()
def forecaster(clock):
    return OvertimeForecaster(clock=clock)


def test_completed_plus_scheduled_hours_approaching(forecaster, period):
    shifts = [
        _shift(8, 8, status=ShiftStatus.COMPLETED),
        _shift(9, 8, status=ShiftStatus.COMPLETED),
        _shift(10, 8, status=ShiftStatus.COMPLETED),
        _shift(11, 8, break_minutes=30),
        _shift(12, 8, break_minutes=30),
    ]

    forecast = forecaster.forecast(shifts, period, 40)

    assert forecast.completed_hours == pytest.approx(24.0)
    assert forecast.scheduled_hours == pytest.approx(15.0)
    assert forecast.projected_hours == pytest.approx(39.0)
    assert forecast.status == ForecastStatus.APPROACHING
    assert forecast.message == "Approaching limit: 39.0 of 40.0 hours projected, 1.0 hours left."
    assert forecast.days_remaining == 4


def test_safe_and_exceeded(forecaster, period):
    safe = forecaster.forecast([_shift(8, 8, status=ShiftStatus.COMPLETED)], period, 40)
    exceeded = forecaster.forecast([_shift(d, 10) for d in (8, 9, 10, 11)], period, 40)

    assert safe.status == ForecastStatus.SAFE
    assert exceeded.status == ForecastStatus.EXCEEDED
    assert exceeded.excess_hours == pytest.approx(0.0)
    assert exceeded.message.startswith("Over limit: 40.0 hours projected")


def test_cancelled_deleted_and_outside_shifts_do_not_count(forecaster, period):
    shifts = [
        _shift(8, 8, status=ShiftStatus.CANCELLED),
        _shift(9, 8, deleted_at=datetime(2024, 1, 9)),
        _shift(2, 8),
        _shift(10, 8),
    ]

    assert forecaster.forecast(shifts, period, 40).projected_hours == pytest.approx(8.0)


@pytest.mark.parametrize("threshold", [0, -5, None])
def test_threshold_must_be_positive(forecaster, period, threshold):
    with pytest.raises(ValidationError):
        forecaster.forecast([], period, threshold)


def test_custom_ratios(clock, period):
    strict = OvertimeForecaster(clock=clock, approaching_ratio=0.5, exceeded_ratio=0.9)

    assert strict.forecast([_shift(8, 10), _shift(9, 10)], period, 40).status == ForecastStatus.APPROACHING
    assert strict.forecast([_shift(d, 12) for d in (8, 9, 10)], period, 40).status == ForecastStatus.EXCEEDED


def test_ratios_are_checked(clock):
    with pytest.raises(ValidationError):
        OvertimeForecaster(clock=clock, approaching_ratio=1.2, exceeded_ratio=1.0)
    with pytest.raises(ValidationError):
        OvertimeForecaster(clock=clock, approaching_ratio=0)


def test_days_remaining_outside_the_period(forecaster, period):
    assert forecaster.forecast([], period, 40, now=datetime(2024, 1, 20)).days_remaining == 0
    assert forecaster.forecast([], period, 40, now=datetime(2024, 1, 1)).days_remaining == 7


@pytest.mark.parametrize(
    "current,target,expected",
    [(30, 40, 2), (35, 40, 1), (45, 40, 0)],
)
def test_suggest_shifts(current, target, expected):
    suggestion = OvertimeForecaster.suggest_shifts(current, target)

    assert suggestion.shifts_needed == expected


def test_suggestion_messages():
    assert OvertimeForecaster.suggest_shifts(35, 40).message == "Schedule 1 more 8-hour shift to reach the target."
    assert OvertimeForecaster.suggest_shifts(45, 40).message == "Target already met, 5.0 hours over."


def test_pace_projection(forecaster, period):
    shifts = [_shift(d, 8, status=ShiftStatus.COMPLETED) for d in (8, 9, 10)]

    pace = forecaster.pace_projection(period, shifts, target_hours=40, now=datetime(2024, 1, 11, 12))

    assert pace.current_hours == pytest.approx(24.0)
    assert pace.days_remaining == 4
    assert pace.average_hours_per_day == pytest.approx(8.0)
    assert pace.projected_hours == pytest.approx(56.0)
    assert pace.recommended_daily_hours == pytest.approx(4.0)
