"""Ready-made rotations offered by the pattern builder."""

from __future__ import annotations

from ..core.enums import Weekday
from .model import PatternDefinition, rotation_from_flags

WEEKDAYS_NINE_TO_FIVE = PatternDefinition.weekly(
    "Weekdays 9-5",
    [Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY, Weekday.THURSDAY, Weekday.FRIDAY],
    start_minute_of_day=9 * 60,
    duration_minutes=8 * 60,
    notes="Standard weekday schedule.",
)

FOUR_ON_FOUR_OFF = PatternDefinition.cycling(
    "4-on / 4-off",
    rotation_from_flags([True] * 4 + [False] * 4, work_name="Work"),
    start_minute_of_day=7 * 60,
    duration_minutes=12 * 60,
    notes="Common 8-day rotation with 12-hour shifts.",
)

PITMAN = PatternDefinition.cycling(
    "Pitman",
    rotation_from_flags(
        [True, True, False, False, True, True, True, False, False, True, True, False, False, False],
        work_name="Work",
    ),
    start_minute_of_day=6 * 60,
    duration_minutes=12 * 60,
    notes="14-day Pitman rotation.",
)

CONTINENTAL = PatternDefinition.cycling(
    "2-2-3 Continental",
    rotation_from_flags(
        [True, True, False, False, True, True, True, False, False, True, True, False, False, False],
        work_name="Work",
    ),
    start_minute_of_day=7 * 60,
    duration_minutes=12 * 60,
    notes="Popular 2-2-3 schedule with a 14-day cycle.",
)

DUPONT = PatternDefinition.cycling(
    "DuPont",
    rotation_from_flags(
        [True] * 4 + [False] * 3 + [True] * 3 + [False] + [True] * 3 + [False] * 3 + [True] * 4 + [False] * 7,
        work_name="Work",
    ),
    start_minute_of_day=6 * 60,
    duration_minutes=12 * 60,
    notes="4-week DuPont rotation: 4 on, 3 off, 3 on, 1 off, 3 on, 3 off, 4 on, 7 off.",
)

ALL_TEMPLATES: dict[str, PatternDefinition] = {
    "weekdays_9_5": WEEKDAYS_NINE_TO_FIVE,
    "four_on_four_off": FOUR_ON_FOUR_OFF,
    "pitman": PITMAN,
    "continental": CONTINENTAL,
    "dupont": DUPONT,
}
