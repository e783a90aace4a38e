from datetime import date

import pytest

from src.shiftpay.shiftpay.core.enums import Weekday
from src.shiftpay.shiftpay.patterns.model import PatternDefinition, PatternInstance, RotationDay
from src.shiftpay.shiftpay.patterns.resolver import PatternResolver, code_for_shift_name

WEEKDAYS = [Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY]


def _cycling(rotation_days, *, cycle_start=date(2024, 1, 1), **kwargs) -> PatternInstance:
    definition = PatternDefinition.cycling("Rotation", rotation_days, **kwargs)
    return PatternInstance(definition=definition, cycle_start_date=cycle_start)


def test_weekly_pattern_uses_weekday_membership():
    pattern = PatternInstance(definition=PatternDefinition.weekly("Office", WEEKDAYS))
    resolver = PatternResolver()

    assert resolver.is_scheduled(pattern, date(2024, 1, 1))  # Monday
    assert resolver.is_scheduled(pattern, date(2024, 1, 5))  # Friday
    assert not resolver.is_scheduled(pattern, date(2024, 1, 6))  # Saturday
    assert not resolver.is_scheduled(pattern, date(2024, 1, 7))  # Sunday


def test_weekly_pattern_without_days_is_never_scheduled():
    pattern = PatternInstance(definition=PatternDefinition.weekly("Empty", []))
    assert not PatternResolver().is_scheduled(pattern, date(2024, 1, 1))


def test_cycling_pattern_follows_rotation():
    pattern = _cycling([RotationDay.work(0), RotationDay.off(1)])
    resolver = PatternResolver()

    assert resolver.is_scheduled(pattern, date(2024, 1, 1))
    assert not resolver.is_scheduled(pattern, date(2024, 1, 2))
    assert resolver.is_scheduled(pattern, date(2024, 1, 3))
    assert not resolver.is_scheduled(pattern, date(2023, 12, 31))


def test_cycling_pattern_without_start_date_is_not_scheduled():
    pattern = _cycling([RotationDay.work(0)], cycle_start=None)
    assert not PatternResolver().is_scheduled(pattern, date(2024, 1, 1))


def test_cycling_pattern_without_rotation_is_not_scheduled():
    pattern = _cycling([])
    assert not PatternResolver().is_scheduled(pattern, date(2024, 1, 1))


def test_rotation_day_overrides_take_precedence():
    pattern = _cycling(
        [RotationDay.work(0, start_minute_of_day=19 * 60), RotationDay.work(1, duration_minutes=8 * 60)],
        start_minute_of_day=7 * 60,
        duration_minutes=12 * 60,
    )
    resolver = PatternResolver()

    assert resolver.effective_timing(pattern, date(2024, 1, 1)) == (19 * 60, 12 * 60)
    assert resolver.effective_timing(pattern, date(2024, 1, 2)) == (7 * 60, 8 * 60)


def test_weekly_pattern_always_uses_default_timing():
    pattern = PatternInstance(
        definition=PatternDefinition.weekly("Office", WEEKDAYS, start_minute_of_day=8 * 60, duration_minutes=9 * 60)
    )
    assert PatternResolver().effective_timing(pattern, date(2024, 1, 1)) == (8 * 60, 9 * 60)


@pytest.mark.parametrize(
    "name, code",
    [
        ("Early", "E"),
        ("Monday morning", "E"),
        ("Night", "N"),
        ("Late night", "N"),
        ("Afternoon", "L"),
        ("Day shift", "D"),
        ("Midday", "D"),
        ("Midweek", "M"),
        ("swing", "S"),
    ],
)
def test_code_for_shift_name_keyword_order(name, code):
    assert code_for_shift_name(name) == code


def test_display_code_falls_back_to_short_code_then_w():
    resolver = PatternResolver()
    with_code = _cycling([RotationDay.work(0)], short_code="X")
    without_code = _cycling([RotationDay.work(0)])
    named = _cycling([RotationDay.work(0, shift_name="Nights")], short_code="X")

    assert resolver.display_code(with_code, date(2024, 1, 1)) == "X"
    assert resolver.display_code(without_code, date(2024, 1, 1)) == "W"
    assert resolver.display_code(named, date(2024, 1, 1)) == "N"
    assert resolver.display_code(None, date(2024, 1, 1)) == "W"
