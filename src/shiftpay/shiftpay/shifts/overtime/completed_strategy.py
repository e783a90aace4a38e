from __future__ import annotations

from datetime import datetime

from ..model import Shift
from .base import OvertimeStrategy, paid_or_computed


class CompletedOvertimeStrategy(OvertimeStrategy):
    """Finished shifts: explicit premium minutes first, then shift purpose,
    then time worked beyond the schedule."""

    def overtime_minutes(self, shift: Shift, *, at: datetime) -> int:
        paid = paid_or_computed(shift)
        if shift.premium_minutes > 0:
            return min(shift.premium_minutes, paid)
        if shift.is_additional_or_premium:
            return paid

        actual = shift.actual_duration_minutes
        if actual is not None and actual > shift.scheduled_duration_minutes:
            return actual - shift.scheduled_duration_minutes
        return 0
