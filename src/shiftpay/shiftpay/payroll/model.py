from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import end_of_day, is_midnight


@dataclass(frozen=True)
class PayPeriod:
    """Closed interval ``[start_date, end_date]`` and its aggregated totals.

    The minute totals are a cache over the period's shifts; they are never
    authoritative and can be rebuilt at any time from the shift set.
    """

    start_date: datetime
    end_date: datetime
    paid_minutes: int = 0
    premium_minutes: int = 0
    additional_shift_minutes: int = 0
    estimated_pay_cents: Optional[int] = None
    is_complete: bool = False
    shift_ids: tuple[str, ...] = ()
    deleted_at: Optional[datetime] = None

    @property
    def effective_end_date(self) -> datetime:
        # An end at exactly midnight means "through the end of that day".
        if is_midnight(self.end_date):
            return end_of_day(self.end_date)
        return self.end_date

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def paid_hours(self) -> float:
        return self.paid_minutes / 60.0

    @property
    def premium_hours(self) -> float:
        return self.premium_minutes / 60.0

    @property
    def regular_hours(self) -> float:
        return self.paid_hours - self.premium_hours

    @property
    def additional_shift_hours(self) -> float:
        return self.additional_shift_minutes / 60.0

    @property
    def estimated_pay_dollars(self) -> Optional[float]:
        if self.estimated_pay_cents is None:
            return None
        return self.estimated_pay_cents / 100.0

    @property
    def duration_days(self) -> int:
        return (self.effective_end_date.date() - self.start_date.date()).days + 1

    @property
    def date_range_formatted(self) -> str:
        return f"{self.start_date:%b} {self.start_date.day} - {self.effective_end_date:%b} {self.effective_end_date.day}"

    def contains(self, value: datetime) -> bool:
        return self.start_date <= value <= self.effective_end_date

    def is_past(self, now: datetime) -> bool:
        return self.effective_end_date < now

    def is_future(self, now: datetime) -> bool:
        return self.start_date > now

    def is_current(self, now: datetime) -> bool:
        return self.contains(now)


@dataclass(frozen=True)
class PeriodSummary:
    total_minutes: int
    premium_minutes: int
    regular_minutes: int
    estimated_pay_cents: Optional[int] = None

    @property
    def total_hours(self) -> float:
        return self.total_minutes / 60.0

    @property
    def regular_hours(self) -> float:
        return self.regular_minutes / 60.0

    @property
    def premium_hours(self) -> float:
        return self.premium_minutes / 60.0


@dataclass(frozen=True)
class RateBucket:
    label: str
    multiplier: float
    minutes: int

    @property
    def hours(self) -> float:
        return self.minutes / 60.0


@dataclass(frozen=True)
class DailyTotal:
    day: date
    minutes: int

    @property
    def hours(self) -> float:
        return self.minutes / 60.0
