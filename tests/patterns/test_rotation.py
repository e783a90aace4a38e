from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from src.shiftpay.shiftpay.core.exceptions import InvalidPatternError
from src.shiftpay.shiftpay.patterns.rotation import day_index_in_cycle


@pytest.mark.parametrize("cycle_length", [1, 2, 7, 8, 14, 28])
def test_day_before_cycle_start_is_last_index(cycle_length):
    start = date(2024, 1, 1)
    assert day_index_in_cycle(start - timedelta(days=1), start, cycle_length) == cycle_length - 1


def test_index_wraps_forward():
    start = date(2024, 1, 1)
    assert day_index_in_cycle(date(2024, 1, 1), start, 8) == 0
    assert day_index_in_cycle(date(2024, 1, 8), start, 8) == 7
    assert day_index_in_cycle(date(2024, 1, 9), start, 8) == 0


def test_index_wraps_backward_over_several_cycles():
    assert day_index_in_cycle(date(2023, 12, 20), date(2024, 1, 1), 8) == 4


def test_counts_calendar_days_across_spring_forward():
    # 2024-03-10 is 23 hours long in New York.
    tz = ZoneInfo("America/New_York")
    assert day_index_in_cycle(datetime(2024, 3, 10, 23, 30, tzinfo=tz), date(2024, 3, 9), 8) == 1
    assert day_index_in_cycle(datetime(2024, 3, 11, 0, 30, tzinfo=tz), date(2024, 3, 9), 8) == 2


def test_counts_calendar_days_across_fall_back():
    tz = ZoneInfo("America/New_York")
    assert day_index_in_cycle(datetime(2024, 11, 3, 23, 59, tzinfo=tz), date(2024, 11, 3), 8) == 0
    assert day_index_in_cycle(datetime(2024, 11, 4, 0, 0, tzinfo=tz), date(2024, 11, 3), 8) == 1


@pytest.mark.parametrize("cycle_length", [0, -3])
def test_non_positive_cycle_length_is_invalid(cycle_length):
    with pytest.raises(InvalidPatternError):
        day_index_in_cycle(date(2024, 1, 1), date(2024, 1, 1), cycle_length)
