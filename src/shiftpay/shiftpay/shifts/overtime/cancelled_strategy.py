from __future__ import annotations

from datetime import datetime

from ..model import Shift
from .base import OvertimeStrategy


class CancelledOvertimeStrategy(OvertimeStrategy):
    def overtime_minutes(self, shift: Shift, *, at: datetime) -> int:
        return 0
