from __future__ import annotations

from .base import PaidMinutesCalculator
from ...shifts.model import Shift


class StandardPaidMinutesCalculator(PaidMinutesCalculator):
    """Standard rule: effective duration - break_minutes, not below 0.

    Every paid minute of a shift carrying a multiplier above 1.0 is premium.
    """

    def paid_minutes(self, shift: Shift) -> int:
        minutes = shift.effective_duration_minutes
        minutes -= max(0, int(shift.break_minutes or 0))
        return max(minutes, 0)

    def premium_minutes(self, shift: Shift, paid_minutes: int) -> int:
        return paid_minutes if shift.rate_multiplier > 1.0 else 0
