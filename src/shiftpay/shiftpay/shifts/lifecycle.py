from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import add_minutes
from ..core.constants import DEFAULT_BREAK_MINUTES, DEFAULT_QUICK_SHIFT_HOURS
from ..core.enums import RateMultiplier, ShiftStatus
from ..core.exceptions import InvalidLifecycleTransitionError, ValidationError
from ..payroll.calculator.base import PaidMinutesCalculator
from ..payroll.calculator.standard_calculator import StandardPaidMinutesCalculator
from .model import Shift
from .overtime.factory import OvertimeStrategyFactory

logger = logging.getLogger(__name__)


class ShiftLifecycle:
    """State machine for a single shift: scheduled -> in progress -> completed/cancelled.

    Every operation returns a new Shift; the input record is never mutated.
    Transitions from the wrong status raise InvalidLifecycleTransitionError.
    """

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        calculator: Optional[PaidMinutesCalculator] = None,
        overtime_factory: Optional[OvertimeStrategyFactory] = None,
    ):
        self._clock = clock or SystemClock()
        self._calculator = calculator or StandardPaidMinutesCalculator()
        self._overtime = overtime_factory or OvertimeStrategyFactory()

    def _now(self, at: Optional[datetime]) -> datetime:
        return at if at is not None else self._clock.now()

    @staticmethod
    def _require_status(shift: Shift, allowed: tuple[ShiftStatus, ...], action: str) -> None:
        if shift.status not in allowed:
            raise InvalidLifecycleTransitionError(
                f"Cannot {action} a shift that is {shift.status.display_name.lower()}"
            )

    def clock_in(self, shift: Shift, at: Optional[datetime] = None) -> Shift:
        self._require_status(shift, (ShiftStatus.SCHEDULED,), "clock in")
        when = self._now(at)
        logger.debug("Clock in shift=%s at=%s", shift.shift_id, when)
        return replace(shift, actual_start=when, status=ShiftStatus.IN_PROGRESS, updated_at=when)

    def clock_out(self, shift: Shift, at: Optional[datetime] = None) -> Shift:
        self._require_status(shift, (ShiftStatus.IN_PROGRESS,), "clock out")
        if shift.actual_start is None:
            raise InvalidLifecycleTransitionError("Cannot clock out a shift that was never clocked in")

        when = self._now(at)
        if when < shift.actual_start:
            raise ValidationError("Clock-out time must not be earlier than clock-in time")

        ended = replace(shift, actual_end=when, status=ShiftStatus.COMPLETED, updated_at=when)
        paid = self._calculator.paid_minutes(ended)
        logger.debug("Clock out shift=%s at=%s paid_minutes=%s", shift.shift_id, when, paid)
        return replace(ended, paid_minutes=paid, premium_minutes=self._calculator.premium_minutes(ended, paid))

    def cancel(self, shift: Shift, at: Optional[datetime] = None) -> Shift:
        self._require_status(shift, (ShiftStatus.SCHEDULED, ShiftStatus.IN_PROGRESS), "cancel")
        return replace(shift, status=ShiftStatus.CANCELLED, updated_at=self._now(at))

    def recalculate_paid_minutes(self, shift: Shift) -> Shift:
        return replace(shift, paid_minutes=self._calculator.paid_minutes(shift))

    def recalculate_premium_minutes(self, shift: Shift) -> Shift:
        return replace(shift, premium_minutes=self._calculator.premium_minutes(shift, shift.paid_minutes))

    def overtime_minutes(self, shift: Shift, at: Optional[datetime] = None) -> int:
        strategy = self._overtime.for_status(shift.status)
        return strategy.overtime_minutes(shift, at=self._now(at))

    def set_rate(
        self,
        shift: Shift,
        multiplier: float,
        label: Optional[str] = None,
        at: Optional[datetime] = None,
    ) -> Shift:
        # Premium minutes are left alone; callers recalculate or re-aggregate.
        if multiplier is None or float(multiplier) <= 0:
            raise ValidationError("Rate multiplier must be greater than zero")
        return replace(shift, rate_multiplier=float(multiplier), rate_label=label, updated_at=self._now(at))

    def set_standard_rate(self, shift: Shift, rate: RateMultiplier, at: Optional[datetime] = None) -> Shift:
        return self.set_rate(shift, rate.value, rate.display_name, at=at)

    def soft_delete(self, shift: Shift, at: Optional[datetime] = None) -> Shift:
        when = self._now(at)
        return replace(shift, deleted_at=when, updated_at=when)

    def restore(self, shift: Shift, at: Optional[datetime] = None) -> Shift:
        return replace(shift, deleted_at=None, updated_at=self._now(at))

    def quick_shift(
        self,
        start: Optional[datetime] = None,
        *,
        duration_hours: int = DEFAULT_QUICK_SHIFT_HOURS,
        break_minutes: int = DEFAULT_BREAK_MINUTES,
        owner_id: Optional[int] = None,
    ) -> Shift:
        """Ad-hoc additional shift, not tied to any pattern."""
        now = self._clock.now()
        begin = start if start is not None else now
        shift = Shift(
            scheduled_start=begin,
            scheduled_end=add_minutes(begin, duration_hours * 60),
            break_minutes=break_minutes,
            is_additional_shift=True,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        return self.recalculate_paid_minutes(shift)
