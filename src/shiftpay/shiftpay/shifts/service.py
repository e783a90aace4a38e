from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Optional

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import end_of_day, start_of_day
from ..core.constants import DEFAULT_BREAK_MINUTES, DEFAULT_QUICK_SHIFT_HOURS, MAX_SHIFT_DURATION_HOURS
from ..core.enums import ShiftStatus
from ..core.exceptions import NotFoundError
from ..patterns.model import PatternInstance
from ..payroll.rules import PayRuleset
from .generator import ShiftGenerator
from .lifecycle import ShiftLifecycle
from .model import Shift
from .repository import ShiftRepository
from .validator import ShiftValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShiftWithOvertime:
    shift: Shift
    overtime_minutes: int


class ShiftService:
    """Loads shifts, runs them through the lifecycle, and persists the result."""

    def __init__(
        self,
        shifts: ShiftRepository,
        *,
        lifecycle: Optional[ShiftLifecycle] = None,
        generator: Optional[ShiftGenerator] = None,
        validator: Optional[ShiftValidator] = None,
        ruleset: Optional[PayRuleset] = None,
        clock: Optional[Clock] = None,
    ):
        self._shifts = shifts
        self._clock = clock or SystemClock()
        self._lifecycle = lifecycle or ShiftLifecycle(clock=self._clock)
        self._generator = generator or ShiftGenerator()
        self._validator = validator or ShiftValidator()
        self._ruleset = ruleset or PayRuleset()

    def get(self, shift_id: str) -> Shift:
        shift = self._shifts.get_by_id(shift_id)
        if shift is None or shift.is_deleted:
            raise NotFoundError(f"Shift {shift_id} not found")
        return shift

    def list_range(self, start: datetime, end: datetime) -> list[Shift]:
        return list(self._shifts.list_range(start, end))

    def get_with_overtime(self, shift_id: str, *, now: Optional[datetime] = None) -> ShiftWithOvertime:
        shift = self.get(shift_id)
        return ShiftWithOvertime(shift=shift, overtime_minutes=self._lifecycle.overtime_minutes(shift, now))

    def generate_from_pattern(
        self,
        pattern: PatternInstance,
        from_date: date,
        to_date: date,
        owner_id: Optional[int] = None,
    ) -> list[Shift]:
        """Generate and persist, skipping starts that are already stored."""
        generated = self._generator.generate(pattern, from_date, to_date, owner_id, ruleset=self._ruleset)
        if not generated:
            return []

        existing = self._shifts.list_range(start_of_day(from_date), end_of_day(to_date))
        taken = {s.scheduled_start for s in existing}

        now = self._clock.now()
        created: list[Shift] = []
        for shift in generated:
            if shift.scheduled_start in taken:
                continue
            created.append(self._shifts.upsert(_stamped(shift, now)))

        logger.info(
            "Pattern %r: generated=%d created=%d skipped=%d",
            pattern.name,
            len(generated),
            len(created),
            len(generated) - len(created),
        )
        return created

    def clock_in(self, shift_id: str, *, at: Optional[datetime] = None) -> Shift:
        return self._shifts.upsert(self._lifecycle.clock_in(self.get(shift_id), at))

    def clock_out(self, shift_id: str, *, at: Optional[datetime] = None) -> Shift:
        return self._shifts.upsert(self._lifecycle.clock_out(self.get(shift_id), at))

    def cancel(self, shift_id: str, *, at: Optional[datetime] = None) -> Shift:
        return self._shifts.upsert(self._lifecycle.cancel(self.get(shift_id), at))

    def set_rate(self, shift_id: str, multiplier: float, label: Optional[str] = None) -> Shift:
        if label is None:
            label = self._ruleset.label_for(multiplier)
        shift = self._lifecycle.set_rate(self.get(shift_id), multiplier, label)
        self._validator.validate_rate(shift)
        if shift.status == ShiftStatus.COMPLETED:
            # Keep premium minutes in step with the new rate on finished shifts.
            shift = self._lifecycle.recalculate_premium_minutes(shift)
        return self._shifts.upsert(shift)

    def delete(self, shift_id: str) -> Shift:
        return self._shifts.upsert(self._lifecycle.soft_delete(self.get(shift_id)))

    def create_quick_shift(
        self,
        *,
        start: Optional[datetime] = None,
        duration_hours: int = DEFAULT_QUICK_SHIFT_HOURS,
        break_minutes: int = DEFAULT_BREAK_MINUTES,
        owner_id: Optional[int] = None,
        clock_in: bool = True,
    ) -> Shift:
        shift = self._lifecycle.quick_shift(
            start,
            duration_hours=duration_hours,
            break_minutes=break_minutes,
            owner_id=owner_id,
        )
        window = timedelta(hours=MAX_SHIFT_DURATION_HOURS)
        nearby = self._shifts.list_range(shift.scheduled_start - window, shift.scheduled_end)
        self._validator.validate(shift, nearby)

        if clock_in:
            shift = self._lifecycle.clock_in(shift, shift.scheduled_start)
        logger.info("Created quick shift %s starting %s", shift.shift_id, shift.scheduled_start)
        return self._shifts.upsert(shift)

    def toggle_current_shift(self, *, owner_id: Optional[int] = None) -> Shift:
        """Clock out the running shift, else clock in today's next one, else start a quick shift."""
        now = self._clock.now()
        # A running shift may have started the previous evening.
        recent = self._shifts.list_range(now - timedelta(hours=MAX_SHIFT_DURATION_HOURS), end_of_day(now))

        running = next((s for s in recent if s.status == ShiftStatus.IN_PROGRESS), None)
        if running is not None:
            return self.clock_out(running.shift_id, at=now)

        today = start_of_day(now)
        upcoming = next((s for s in recent if s.status == ShiftStatus.SCHEDULED and s.scheduled_start >= today), None)
        if upcoming is not None:
            return self.clock_in(upcoming.shift_id, at=now)

        return self.create_quick_shift(start=now, owner_id=owner_id)


def _stamped(shift: Shift, now: datetime) -> Shift:
    return replace(shift, created_at=now, updated_at=now)
