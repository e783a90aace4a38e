from __future__ import annotations

from datetime import datetime

from ..model import Shift
from .base import OvertimeStrategy, elapsed_minutes, paid_or_computed


class InProgressOvertimeStrategy(OvertimeStrategy):
    """Clocked in: additional/premium shifts accrue overtime as they run;
    regular shifts only once they outrun their scheduled duration."""

    def overtime_minutes(self, shift: Shift, *, at: datetime) -> int:
        if shift.is_additional_or_premium:
            if shift.actual_start is not None:
                return max(0, elapsed_minutes(shift, at) - shift.break_minutes)
            return paid_or_computed(shift)

        if shift.actual_start is not None:
            elapsed = elapsed_minutes(shift, at)
            if elapsed > shift.scheduled_duration_minutes:
                return elapsed - shift.scheduled_duration_minutes
        return 0
