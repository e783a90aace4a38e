from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.clock import Clock, SystemClock
from ..common.datetime_utils import DayLike
from ..core.constants import DEFAULT_OVERTIME_THRESHOLD_HOURS
from ..forecast.model import OvertimeForecast
from ..forecast.service import OvertimeForecaster
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .aggregator import PayPeriodAggregator
from .model import DailyTotal, PayPeriod, PeriodSummary, RateBucket
from .rules import PayRuleset

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "date",
    "start",
    "end",
    "status",
    "break_minutes",
    "paid_hours",
    "premium_hours",
    "rate",
    "additional",
    "notes",
]


@dataclass(frozen=True)
class PayPeriodReport:
    period: PayPeriod
    summary: PeriodSummary
    rate_breakdown: list[RateBucket]
    daily_totals: list[DailyTotal]
    progress: float
    shifts: list[Shift]


class PayPeriodService:
    """Builds the current pay period report and forecast from stored shifts.

    Periods are never stored; each call recomputes totals from the repository.
    """

    def __init__(
        self,
        shifts: ShiftRepository,
        *,
        ruleset: Optional[PayRuleset] = None,
        aggregator: Optional[PayPeriodAggregator] = None,
        forecaster: Optional[OvertimeForecaster] = None,
        base_rate_cents: Optional[int] = None,
        reference_date: Optional[date] = None,
        overtime_threshold_hours: float = DEFAULT_OVERTIME_THRESHOLD_HOURS,
        clock: Optional[Clock] = None,
    ):
        self._shifts = shifts
        self._clock = clock or SystemClock()
        self._ruleset = ruleset or PayRuleset()
        self._aggregator = aggregator or PayPeriodAggregator(clock=self._clock)
        self._forecaster = forecaster or OvertimeForecaster(clock=self._clock)
        self._base_rate_cents = base_rate_cents
        self._reference_date = reference_date
        self._threshold_hours = overtime_threshold_hours

    def period_for(self, day: DayLike, *, now: Optional[datetime] = None) -> PayPeriod:
        return self._aggregator.period_for(day, self._ruleset.pay_period_type, self._reference_date, now=now)

    def report_for(self, day: DayLike, *, now: Optional[datetime] = None) -> PayPeriodReport:
        current = now if now is not None else self._clock.now()
        period = self.period_for(day, now=current)
        shifts = self._aggregator.shifts_in(period, self._shifts.list_range(period.start_date, period.effective_end_date))

        period = self._aggregator.recompute_from_shifts(period, shifts, self._base_rate_cents)
        return PayPeriodReport(
            period=period,
            summary=self._aggregator.summary(shifts, self._base_rate_cents),
            rate_breakdown=self._aggregator.rate_breakdown(shifts),
            daily_totals=self._aggregator.daily_totals(shifts, period),
            progress=self._aggregator.progress(period, current),
            shifts=shifts,
        )

    def current_report(self, *, now: Optional[datetime] = None) -> PayPeriodReport:
        current = now if now is not None else self._clock.now()
        return self.report_for(current, now=current)

    def recent_periods(self, count: int = 6, *, now: Optional[datetime] = None) -> list[PayPeriod]:
        periods = self._aggregator.recent_periods(
            count, self._ruleset.pay_period_type, self._reference_date, now=now
        )
        return [
            self._aggregator.recompute_from_shifts(
                p, self._shifts.list_range(p.start_date, p.effective_end_date), self._base_rate_cents
            )
            for p in periods
        ]

    def forecast(
        self,
        *,
        threshold_hours: Optional[float] = None,
        now: Optional[datetime] = None,
    ) -> OvertimeForecast:
        current = now if now is not None else self._clock.now()
        period = self.period_for(current, now=current)
        shifts = self._shifts.list_range(period.start_date, period.effective_end_date)
        threshold = threshold_hours if threshold_hours is not None else self._threshold_hours
        return self._forecaster.forecast(shifts, period, threshold, now=current)

    def export_rows(
        self,
        report: Optional[PayPeriodReport] = None,
        *,
        now: Optional[datetime] = None,
    ) -> list[list[str]]:
        report = report or self.current_report(now=now)
        rows = [
            [
                s.scheduled_start.strftime("%Y-%m-%d"),
                s.effective_start.strftime("%H:%M"),
                s.effective_end.strftime("%H:%M"),
                s.status.value,
                str(s.break_minutes),
                f"{s.paid_hours:.2f}",
                f"{s.premium_hours:.2f}",
                s.rate_display_label,
                "yes" if s.is_additional_shift else "no",
                s.notes or "",
            ]
            for s in report.shifts
        ]
        logger.debug("Exporting %d shift row(s) for %s", len(rows), report.period.date_range_formatted)
        return rows
