from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import DayLike, as_date
from ..core.enums import ScheduleType, Weekday
from .model import PatternInstance, RotationDay
from .rotation import day_index_in_cycle

# Checked in order; the first keyword found in the shift name wins.
SHIFT_CODE_KEYWORDS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("early", "morning"), "E"),
    (("night",), "N"),
    (("late", "afternoon"), "L"),
    (("day",), "D"),
    (("mid",), "M"),
)

DEFAULT_WORK_CODE = "W"


def code_for_shift_name(shift_name: str) -> str:
    name = shift_name.strip().lower()
    for keywords, code in SHIFT_CODE_KEYWORDS:
        if any(k in name for k in keywords):
            return code
    return name[:1].upper()


class PatternResolver:
    """Decides, per calendar day, whether a pattern works and with what timing.

    A cycling pattern without a cycle start date or without rotation days is
    a valid but unfinished pattern: it resolves to "not scheduled" instead of
    raising.
    """

    def rotation_day_for(self, pattern: PatternInstance, day: DayLike) -> Optional[RotationDay]:
        definition = pattern.definition
        if definition.kind != ScheduleType.CYCLING:
            return None
        if pattern.cycle_start_date is None or not definition.rotation_days:
            return None

        index = day_index_in_cycle(day, pattern.cycle_start_date, definition.cycle_length_days)
        for rotation_day in definition.sorted_rotation_days:
            if rotation_day.index == index:
                return rotation_day
        return None

    def is_scheduled(self, pattern: PatternInstance, day: DayLike) -> bool:
        definition = pattern.definition
        if definition.kind == ScheduleType.WEEKLY:
            return Weekday(as_date(day).weekday()) in definition.weekdays

        rotation_day = self.rotation_day_for(pattern, day)
        return bool(rotation_day and rotation_day.is_work_day)

    def effective_timing(self, pattern: PatternInstance, day: DayLike) -> tuple[int, int]:
        """(start minute of day, duration minutes) that apply on ``day``."""
        definition = pattern.definition
        start = definition.start_minute_of_day
        duration = definition.duration_minutes

        rotation_day = self.rotation_day_for(pattern, day)
        if rotation_day is None:
            return start, duration
        return rotation_day.effective_start_minute(start), rotation_day.effective_duration(duration)

    def display_code(self, pattern: Optional[PatternInstance], day: DayLike) -> str:
        if pattern is None:
            return DEFAULT_WORK_CODE

        rotation_day = self.rotation_day_for(pattern, day)
        if rotation_day is not None and rotation_day.shift_name and rotation_day.shift_name.strip():
            return code_for_shift_name(rotation_day.shift_name)

        return pattern.definition.short_code or DEFAULT_WORK_CODE

    def display_title(self, pattern: Optional[PatternInstance], day: DayLike) -> str:
        if pattern is None:
            return "Shift"

        rotation_day = self.rotation_day_for(pattern, day)
        if rotation_day is not None and rotation_day.shift_name and rotation_day.shift_name.strip():
            return rotation_day.shift_name.strip()
        return pattern.definition.name
