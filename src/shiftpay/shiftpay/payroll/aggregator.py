from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import replace
from datetime import date, datetime, timedelta, tzinfo
from typing import Iterable, Optional, Sequence

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import (
    DayLike,
    as_date,
    days_between,
    end_of_day,
    end_of_month,
    iter_days,
    start_of_day,
    start_of_month,
    start_of_week,
)
from ..core.constants import BIWEEKLY_BLOCK_DAYS
from ..core.enums import PayPeriodType, ShiftStatus, Weekday
from ..core.exceptions import ValidationError
from ..shifts.model import Shift
from ..shifts.overtime.base import paid_or_computed
from .model import DailyTotal, PayPeriod, PeriodSummary, RateBucket

logger = logging.getLogger(__name__)


def _completed(shifts: Iterable[Shift]) -> list[Shift]:
    return [s for s in shifts if s.status == ShiftStatus.COMPLETED and not s.is_deleted]


def estimate_pay_cents(base_rate_cents: int, shifts: Sequence[Shift]) -> int:
    """Base pay for every paid hour plus only the incremental premium on top.

    ``base * hours * multiplier`` would pay the base portion of premium hours
    twice, so premium minutes contribute ``base * hours * (multiplier - 1)``.
    """
    total_minutes = sum(s.paid_minutes for s in shifts)
    pay = base_rate_cents * (total_minutes / 60.0)
    for shift in shifts:
        if shift.premium_minutes > 0:
            pay += base_rate_cents * (shift.premium_minutes / 60.0) * (shift.rate_multiplier - 1.0)
    return int(round(pay))


class PayPeriodAggregator:
    """Buckets shifts into pay periods and rolls them up into hours and pay.

    Nothing here raises on missing data: no base rate means no pay estimate,
    no shifts means zero totals.
    """

    def __init__(
        self,
        *,
        clock: Optional[Clock] = None,
        first_weekday: Weekday = Weekday.MONDAY,
        tz: Optional[tzinfo] = None,
    ):
        self._clock = clock or SystemClock()
        self._first_weekday = first_weekday
        self._tz = tz

    def _now(self, now: Optional[datetime]) -> datetime:
        return now if now is not None else self._clock.now()

    def _make_period(self, start: date, end: date) -> PayPeriod:
        return PayPeriod(start_date=start_of_day(start, self._tz), end_date=end_of_day(end, self._tz))

    def period_for(
        self,
        day: DayLike,
        period_type: PayPeriodType,
        reference_date: Optional[DayLike] = None,
        *,
        now: Optional[datetime] = None,
    ) -> PayPeriod:
        target = as_date(day)

        if period_type == PayPeriodType.WEEKLY:
            start = start_of_week(target, self._first_weekday)
            return self._make_period(start, start + timedelta(days=6))

        if period_type == PayPeriodType.BIWEEKLY:
            # Blocks are anchored to the reference date; moving the reference
            # moves every boundary, including those of past periods.
            reference = as_date(reference_date) if reference_date is not None else self._now(now).date()
            block = days_between(reference, target) // BIWEEKLY_BLOCK_DAYS
            start = reference + timedelta(days=block * BIWEEKLY_BLOCK_DAYS)
            return self._make_period(start, start + timedelta(days=BIWEEKLY_BLOCK_DAYS - 1))

        return self._make_period(start_of_month(target), end_of_month(target))

    def current_period(
        self,
        period_type: PayPeriodType,
        reference_date: Optional[DayLike] = None,
        *,
        now: Optional[datetime] = None,
    ) -> PayPeriod:
        current = self._now(now)
        return self.period_for(current, period_type, reference_date, now=current)

    def recent_periods(
        self,
        count: int,
        period_type: PayPeriodType,
        reference_date: Optional[DayLike] = None,
        *,
        now: Optional[datetime] = None,
    ) -> list[PayPeriod]:
        """The current period followed by the ``count - 1`` periods before it."""
        current = self._now(now)
        periods: list[PayPeriod] = []
        cursor = current.date()
        for _ in range(max(0, int(count))):
            period = self.period_for(cursor, period_type, reference_date, now=current)
            periods.append(period)
            cursor = period.start_date.date() - timedelta(days=1)
        return periods

    def normalize_end_date(self, period: PayPeriod) -> PayPeriod:
        if period.effective_end_date == period.end_date:
            return period
        return replace(period, end_date=period.effective_end_date)

    def shifts_in(self, period: PayPeriod, all_shifts: Iterable[Shift]) -> list[Shift]:
        found = [s for s in all_shifts if not s.is_deleted and period.contains(s.scheduled_start)]
        found.sort(key=lambda s: s.scheduled_start)
        return found

    def summary(self, shifts: Iterable[Shift], base_rate_cents: Optional[int] = None) -> PeriodSummary:
        completed = _completed(shifts)
        total = sum(s.paid_minutes for s in completed)
        premium = sum(s.premium_minutes for s in completed)

        return PeriodSummary(
            total_minutes=total,
            premium_minutes=premium,
            regular_minutes=max(0, total - premium),
            estimated_pay_cents=estimate_pay_cents(base_rate_cents, completed) if base_rate_cents is not None else None,
        )

    def rate_breakdown(self, shifts: Iterable[Shift]) -> list[RateBucket]:
        minutes: dict[str, int] = defaultdict(int)
        multipliers: dict[str, float] = {}
        for shift in _completed(shifts):
            label = shift.rate_display_label
            minutes[label] += paid_or_computed(shift)
            multipliers.setdefault(label, shift.rate_multiplier)

        buckets = [RateBucket(label=label, multiplier=multipliers[label], minutes=m) for label, m in minutes.items()]
        buckets.sort(key=lambda b: (b.multiplier, b.label))
        return buckets

    def daily_totals(self, shifts: Iterable[Shift], period: PayPeriod) -> list[DailyTotal]:
        """One entry per day of the period, zero-hour days included."""
        per_day: dict[date, int] = defaultdict(int)
        for shift in shifts:
            if shift.is_deleted or shift.status == ShiftStatus.CANCELLED:
                continue
            per_day[shift.scheduled_start.date()] += paid_or_computed(shift)

        return [
            DailyTotal(day=day, minutes=per_day.get(day, 0))
            for day in iter_days(period.start_date, period.effective_end_date)
        ]

    def progress(self, period: PayPeriod, now: Optional[datetime] = None) -> float:
        current = self._now(now)
        if period.is_past(current):
            return 1.0
        if period.is_future(current):
            return 0.0

        total = (period.effective_end_date - period.start_date).total_seconds()
        if total <= 0:
            return 1.0
        elapsed = (current - period.start_date).total_seconds()
        return min(1.0, max(0.0, elapsed / total))

    def recompute_from_shifts(
        self,
        period: PayPeriod,
        all_shifts: Iterable[Shift],
        base_rate_cents: Optional[int] = None,
    ) -> PayPeriod:
        """Rebuild the cached totals from scratch.

        Shift changes never invalidate a period on their own; callers
        re-aggregate after any change that touches the period.
        """
        in_period = self.shifts_in(period, all_shifts)
        completed = _completed(in_period)
        summary = self.summary(completed, base_rate_cents)

        return replace(
            period,
            paid_minutes=summary.total_minutes,
            premium_minutes=summary.premium_minutes,
            additional_shift_minutes=sum(s.paid_minutes for s in completed if s.is_additional_shift),
            estimated_pay_cents=summary.estimated_pay_cents,
            shift_ids=tuple(s.shift_id for s in in_period),
        )

    def finalize(
        self,
        period: PayPeriod,
        all_shifts: Iterable[Shift],
        base_rate_cents: Optional[int] = None,
        *,
        now: Optional[datetime] = None,
    ) -> PayPeriod:
        current = self._now(now)
        if not period.is_past(current):
            raise ValidationError("A pay period can only be finalized after its end date has passed")

        finalized = replace(self.recompute_from_shifts(period, all_shifts, base_rate_cents), is_complete=True)
        logger.info(
            "Finalized pay period %s: paid_minutes=%s premium_minutes=%s",
            finalized.date_range_formatted,
            finalized.paid_minutes,
            finalized.premium_minutes,
        )
        return finalized
