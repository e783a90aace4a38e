from __future__ import annotations

from dataclasses import dataclass

from ...core.enums import ShiftStatus
from .base import OvertimeStrategy
from .cancelled_strategy import CancelledOvertimeStrategy
from .completed_strategy import CompletedOvertimeStrategy
from .in_progress_strategy import InProgressOvertimeStrategy
from .scheduled_strategy import ScheduledOvertimeStrategy


@dataclass
class OvertimeStrategyFactory:
    """Factory Pattern: choose the overtime rule for a shift's status."""

    def for_status(self, status: ShiftStatus) -> OvertimeStrategy:
        if status == ShiftStatus.IN_PROGRESS:
            return InProgressOvertimeStrategy()
        if status == ShiftStatus.COMPLETED:
            return CompletedOvertimeStrategy()
        if status == ShiftStatus.CANCELLED:
            return CancelledOvertimeStrategy()
        return ScheduledOvertimeStrategy()
