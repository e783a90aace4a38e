from __future__ import annotations

from datetime import datetime

from ..model import Shift
from .base import OvertimeStrategy, paid_or_computed


class ScheduledOvertimeStrategy(OvertimeStrategy):
    """Not started yet: additional/premium shifts are overtime in full."""

    def overtime_minutes(self, shift: Shift, *, at: datetime) -> int:
        if shift.is_additional_or_premium:
            return paid_or_computed(shift)
        return 0
