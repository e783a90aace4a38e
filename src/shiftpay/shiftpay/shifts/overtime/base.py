from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...common.datetime_utils import minutes_between
from ..model import Shift


class OvertimeStrategy(ABC):
    """Strategy Pattern: how many minutes of a shift count as overtime.

    What counts depends on why the shift exists (additional or premium-rated
    shifts are overtime in full) as much as on how long it ran.
    """

    @abstractmethod
    def overtime_minutes(self, shift: Shift, *, at: datetime) -> int:
        raise NotImplementedError


def paid_or_computed(shift: Shift) -> int:
    if shift.paid_minutes > 0:
        return shift.paid_minutes
    return max(0, shift.effective_duration_minutes - shift.break_minutes)


def elapsed_minutes(shift: Shift, at: datetime) -> int:
    return minutes_between(shift.actual_start, at)
