from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Iterable, Optional

from ..common.clock import Clock, SystemClock
from ..common.validators import require_positive
from ..core.constants import DEFAULT_APPROACHING_RATIO, DEFAULT_EXCEEDED_RATIO
from ..core.enums import ForecastStatus, ShiftStatus
from ..core.exceptions import ValidationError
from ..payroll.model import PayPeriod
from ..shifts.model import Shift
from ..shifts.overtime.base import paid_or_computed
from .model import OvertimeForecast, PaceProjection, ShiftSuggestion

logger = logging.getLogger(__name__)

_MESSAGES = {
    ForecastStatus.SAFE: "On track: {projected:.1f} of {threshold:.1f} hours projected.",
    ForecastStatus.APPROACHING: (
        "Approaching limit: {projected:.1f} of {threshold:.1f} hours projected, {headroom:.1f} hours left."
    ),
    ForecastStatus.EXCEEDED: (
        "Over limit: {projected:.1f} hours projected, {excess:.1f} hours above the {threshold:.1f} hour threshold."
    ),
}


class OvertimeForecaster:
    """Projects where a pay period will land and classifies it against a threshold.

    Two ratios split the scale: at or above ``exceeded_ratio`` of the threshold
    the period is exceeded, at or above ``approaching_ratio`` it is approaching,
    anything lower is safe.
    """

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        approaching_ratio: float = DEFAULT_APPROACHING_RATIO,
        exceeded_ratio: float = DEFAULT_EXCEEDED_RATIO,
    ):
        require_positive(approaching_ratio, "approaching_ratio")
        require_positive(exceeded_ratio, "exceeded_ratio")
        if approaching_ratio > exceeded_ratio:
            raise ValidationError("approaching_ratio must not be greater than exceeded_ratio")

        self._clock = clock or SystemClock()
        self._approaching_ratio = approaching_ratio
        self._exceeded_ratio = exceeded_ratio

    def classify(self, projected_hours: float, threshold_hours: float) -> ForecastStatus:
        ratio = projected_hours / threshold_hours
        if ratio >= self._exceeded_ratio:
            return ForecastStatus.EXCEEDED
        if ratio >= self._approaching_ratio:
            return ForecastStatus.APPROACHING
        return ForecastStatus.SAFE

    def forecast(
        self,
        shifts: Iterable[Shift],
        period: PayPeriod,
        threshold_hours: float,
        *,
        now: Optional[datetime] = None,
    ) -> OvertimeForecast:
        if threshold_hours is None or threshold_hours <= 0:
            raise ValidationError("threshold_hours must be greater than zero")

        current = now if now is not None else self._clock.now()
        completed_minutes = 0
        scheduled_minutes = 0
        for shift in shifts:
            if shift.is_deleted or not period.contains(shift.scheduled_start):
                continue
            if shift.status == ShiftStatus.COMPLETED:
                completed_minutes += shift.paid_minutes
            elif shift.status in (ShiftStatus.SCHEDULED, ShiftStatus.IN_PROGRESS):
                scheduled_minutes += paid_or_computed(shift)

        completed_hours = completed_minutes / 60.0
        scheduled_hours = scheduled_minutes / 60.0
        projected = completed_hours + scheduled_hours
        status = self.classify(projected, threshold_hours)

        message = _MESSAGES[status].format(
            projected=projected,
            threshold=threshold_hours,
            headroom=max(0.0, threshold_hours - projected),
            excess=max(0.0, projected - threshold_hours),
        )
        logger.debug("Forecast %s: projected=%.2f threshold=%.2f", status.value, projected, threshold_hours)

        return OvertimeForecast(
            projected_hours=projected,
            completed_hours=completed_hours,
            scheduled_hours=scheduled_hours,
            threshold_hours=float(threshold_hours),
            status=status,
            message=message,
            days_remaining=_days_remaining(period, current),
        )

    def pace_projection(
        self,
        period: PayPeriod,
        shifts: Iterable[Shift],
        target_hours: Optional[float] = None,
        *,
        now: Optional[datetime] = None,
    ) -> PaceProjection:
        current = now if now is not None else self._clock.now()
        current_hours = (
            sum(
                s.paid_minutes
                for s in shifts
                if s.status == ShiftStatus.COMPLETED and not s.is_deleted and period.contains(s.scheduled_start)
            )
            / 60.0
        )

        if not period.is_current(current):
            return PaceProjection(
                current_hours=current_hours,
                projected_hours=current_hours,
                days_remaining=0,
                average_hours_per_day=0.0,
            )

        days_elapsed = max(1, (current.date() - period.start_date.date()).days)
        days_remaining = max(0, period.duration_days - days_elapsed)
        average = current_hours / days_elapsed

        recommended = None
        if target_hours is not None and days_remaining > 0:
            recommended = max(0.0, target_hours - current_hours) / days_remaining

        return PaceProjection(
            current_hours=current_hours,
            projected_hours=current_hours + average * days_remaining,
            days_remaining=days_remaining,
            average_hours_per_day=average,
            recommended_daily_hours=recommended,
        )

    @staticmethod
    def suggest_shifts(
        current_hours: float,
        target_hours: float,
        typical_shift_hours: float = 8.0,
    ) -> ShiftSuggestion:
        """How many more typical shifts close the gap to a target."""
        require_positive(typical_shift_hours, "typical_shift_hours")

        hours_needed = max(0.0, target_hours - current_hours)
        shifts_needed = int(math.ceil(hours_needed / typical_shift_hours))

        if hours_needed <= 0:
            message = f"Target already met, {current_hours - target_hours:.1f} hours over."
        elif shifts_needed == 1:
            message = f"Schedule 1 more {typical_shift_hours:g}-hour shift to reach the target."
        else:
            message = f"Schedule {shifts_needed} more shifts (about {hours_needed:.1f} hours) to reach the target."

        return ShiftSuggestion(shifts_needed=shifts_needed, hours_needed=hours_needed, message=message)


def _days_remaining(period: PayPeriod, now: datetime) -> int:
    if period.is_past(now):
        return 0
    if period.is_future(now):
        return period.duration_days
    return max(0, (period.effective_end_date.date() - now.date()).days)
