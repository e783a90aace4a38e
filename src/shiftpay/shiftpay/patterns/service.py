from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import add_minutes, at_minute, iter_days
from ..core.constants import MINUTES_PER_DAY
from ..core.enums import ScheduleType
from ..core.exceptions import InvalidPatternError
from .model import PatternDefinition, PatternInstance, ShiftPreview
from .resolver import PatternResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternValidationResult:
    errors: list[str]

    @property
    def is_valid(self) -> bool:
        return not self.errors


def structural_errors(definition: PatternDefinition) -> list[str]:
    """Errors that make a definition unusable for generation.

    Missing pieces of an unfinished pattern (no weekdays, no rotation days) are
    not structural: such a pattern simply produces no shifts.
    """
    errors: list[str] = []

    if definition.duration_minutes <= 0 or definition.duration_minutes > MINUTES_PER_DAY:
        errors.append("Shift duration must be between 1 and 24 hours.")
    if definition.start_minute_of_day < 0 or definition.start_minute_of_day >= MINUTES_PER_DAY:
        errors.append("Start time must be within the day (0-1439 minutes).")
    if definition.break_minutes is not None and definition.break_minutes < 0:
        errors.append("Break minutes must not be negative.")

    if definition.kind == ScheduleType.CYCLING and definition.rotation_days:
        indices = sorted(d.index for d in definition.rotation_days)
        if indices != list(range(len(indices))):
            errors.append("Rotation day indices must be unique and contiguous starting at 0.")
        for day in definition.rotation_days:
            if day.duration_minutes is not None and not 0 < day.duration_minutes <= MINUTES_PER_DAY:
                errors.append(f"{day.day_label}: duration must be between 1 and 24 hours.")
            if day.start_minute_of_day is not None and not 0 <= day.start_minute_of_day < MINUTES_PER_DAY:
                errors.append(f"{day.day_label}: start time must be within the day.")

    return errors


def ensure_generatable(definition: PatternDefinition) -> None:
    errors = structural_errors(definition)
    if errors:
        raise InvalidPatternError("; ".join(errors))


class PatternService:
    """Builder-side checks and previews for pattern definitions."""

    def __init__(self, resolver: Optional[PatternResolver] = None):
        self._resolver = resolver or PatternResolver()

    def validate(self, definition: PatternDefinition) -> PatternValidationResult:
        errors = structural_errors(definition)

        if definition.kind == ScheduleType.WEEKLY and not definition.weekdays:
            errors.append("Weekly patterns must include at least one weekday.")
        if definition.kind == ScheduleType.CYCLING:
            if not definition.rotation_days:
                errors.append("Rotating patterns must define cycle days.")
            elif definition.work_days_per_cycle == 0:
                errors.append("Rotating patterns must include at least one work day.")

        return PatternValidationResult(errors=errors)

    def build_instance(
        self,
        definition: PatternDefinition,
        *,
        owner_id: Optional[int] = None,
        cycle_start_date: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> PatternInstance:
        result = self.validate(definition)
        if not result.is_valid:
            raise InvalidPatternError("; ".join(result.errors))

        if definition.kind == ScheduleType.CYCLING and cycle_start_date is None and now is not None:
            cycle_start_date = now.date()

        logger.debug("Built pattern %r (%s) for owner=%s", definition.name, definition.kind.value, owner_id)
        return PatternInstance(
            definition=definition,
            owner_id=owner_id,
            cycle_start_date=cycle_start_date if definition.kind == ScheduleType.CYCLING else None,
            created_at=now,
        )

    def preview(self, pattern: PatternInstance, start: date, end: date) -> list[ShiftPreview]:
        ensure_generatable(pattern.definition)

        previews: list[ShiftPreview] = []
        for day in iter_days(start, end):
            if not self._resolver.is_scheduled(pattern, day):
                continue
            start_minute, duration = self._resolver.effective_timing(pattern, day)
            shift_start = at_minute(day, start_minute)
            previews.append(
                ShiftPreview(
                    day=day,
                    title=self._resolver.display_title(pattern, day),
                    start=shift_start,
                    end=add_minutes(shift_start, duration),
                    code=self._resolver.display_code(pattern, day),
                )
            )
        return previews
