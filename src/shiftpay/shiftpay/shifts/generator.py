from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, tzinfo
from typing import Optional

from ..common.datetime_utils import add_minutes, at_minute, iter_days
from ..core.constants import DEFAULT_BREAK_MINUTES
from ..patterns.model import PatternInstance
from ..patterns.resolver import PatternResolver
from ..patterns.service import ensure_generatable
from ..payroll.calculator.base import PaidMinutesCalculator
from ..payroll.calculator.standard_calculator import StandardPaidMinutesCalculator
from ..payroll.rules import PayRuleset
from .model import Shift

logger = logging.getLogger(__name__)


class ShiftGenerator:
    """Materializes a pattern into dated shifts for an inclusive day range.

    Generation does not look at shifts that already exist: regenerating a range
    yields the same starts/ends again and the caller is responsible for
    skipping the ones it has persisted.
    """

    def __init__(
        self,
        resolver: Optional[PatternResolver] = None,
        *,
        calculator: Optional[PaidMinutesCalculator] = None,
    ):
        self._resolver = resolver or PatternResolver()
        self._calculator = calculator or StandardPaidMinutesCalculator()

    def generate(
        self,
        pattern: PatternInstance,
        from_date: date,
        to_date: date,
        owner_id: Optional[int] = None,
        *,
        ruleset: Optional[PayRuleset] = None,
        tz: Optional[tzinfo] = None,
    ) -> list[Shift]:
        definition = pattern.definition
        ensure_generatable(definition)

        break_minutes = self._break_minutes(pattern, ruleset)
        owner = owner_id if owner_id is not None else pattern.owner_id

        shifts: list[Shift] = []
        for day in iter_days(from_date, to_date):
            if not self._resolver.is_scheduled(pattern, day):
                continue

            start_minute, duration = self._resolver.effective_timing(pattern, day)
            start = at_minute(day, start_minute, tz)
            rotation_day = self._resolver.rotation_day_for(pattern, day)

            shift = Shift(
                scheduled_start=start,
                scheduled_end=add_minutes(start, duration),
                break_minutes=break_minutes,
                owner_id=owner,
                pattern_id=pattern.pattern_id,
                notes=rotation_day.shift_name if rotation_day else None,
            )
            shifts.append(_with_paid_minutes(shift, self._calculator))

        shifts.sort(key=lambda s: s.scheduled_start)
        logger.debug(
            "Generated %d shift(s) for pattern %r between %s and %s",
            len(shifts),
            definition.name,
            from_date,
            to_date,
        )
        return shifts

    @staticmethod
    def _break_minutes(pattern: PatternInstance, ruleset: Optional[PayRuleset]) -> int:
        if pattern.definition.break_minutes is not None:
            return pattern.definition.break_minutes
        if ruleset is not None:
            return ruleset.unpaid_break_minutes
        return DEFAULT_BREAK_MINUTES


def _with_paid_minutes(shift: Shift, calculator: PaidMinutesCalculator) -> Shift:
    return replace(shift, paid_minutes=calculator.paid_minutes(shift))
