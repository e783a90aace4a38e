from __future__ import annotations

from typing import Iterable

from ..core.constants import MAX_RATE_MULTIPLIER, MAX_SHIFT_DURATION_HOURS, MIN_RATE_MULTIPLIER
from ..core.exceptions import ValidationError
from .model import Shift


class ShiftValidator:
    """Checks a shift before it is persisted: duration, break, rate, overlap."""

    def __init__(self, *, maximum_duration_hours: int = MAX_SHIFT_DURATION_HOURS):
        self._maximum_minutes = maximum_duration_hours * 60

    def validate(self, shift: Shift, existing: Iterable[Shift] = ()) -> None:
        self.validate_duration(shift)
        self.validate_break(shift)
        self.validate_rate(shift)
        self.validate_no_overlap(shift, existing)

    def validate_duration(self, shift: Shift) -> None:
        minutes = shift.scheduled_duration_minutes
        if minutes <= 0 or minutes > self._maximum_minutes:
            raise ValidationError("Shift duration is invalid")

    @staticmethod
    def validate_break(shift: Shift) -> None:
        if shift.break_minutes < 0 or shift.break_minutes >= shift.scheduled_duration_minutes:
            raise ValidationError("Break duration is invalid")

    @staticmethod
    def validate_rate(shift: Shift) -> None:
        if not MIN_RATE_MULTIPLIER <= shift.rate_multiplier <= MAX_RATE_MULTIPLIER:
            raise ValidationError("Rate multiplier is invalid")

    @staticmethod
    def validate_no_overlap(shift: Shift, existing: Iterable[Shift]) -> None:
        for other in existing:
            if other.shift_id == shift.shift_id or other.is_deleted:
                continue
            # Touching windows (one ends as the next starts) do not overlap.
            if shift.scheduled_start < other.scheduled_end and other.scheduled_start < shift.scheduled_end:
                raise ValidationError("This shift overlaps with an existing shift")
