from __future__ import annotations

from enum import Enum
from typing import Iterable


class ScheduleType(str, Enum):
    """How a pattern decides its work days."""

    WEEKLY = "weekly"
    CYCLING = "cycling"

    @property
    def display_name(self) -> str:
        return "Weekly" if self is ScheduleType.WEEKLY else "Rotating"


class ShiftStatus(str, Enum):
    """Lifecycle state of a single shift."""

    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def display_name(self) -> str:
        return {
            ShiftStatus.SCHEDULED: "Scheduled",
            ShiftStatus.IN_PROGRESS: "In Progress",
            ShiftStatus.COMPLETED: "Completed",
            ShiftStatus.CANCELLED: "Cancelled",
        }[self]

    @property
    def is_terminal(self) -> bool:
        return self in (ShiftStatus.COMPLETED, ShiftStatus.CANCELLED)


class PayPeriodType(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"

    @property
    def display_name(self) -> str:
        return {
            PayPeriodType.WEEKLY: "Weekly",
            PayPeriodType.BIWEEKLY: "Bi-Weekly",
            PayPeriodType.MONTHLY: "Monthly",
        }[self]


class Weekday(int, Enum):
    """Days of the week, numbered like ``date.weekday()`` (Monday = 0)."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @property
    def short_name(self) -> str:
        return self.name[:3].title()

    @property
    def mask(self) -> int:
        # Bit 0 is Sunday, bit 1 Monday ... bit 6 Saturday.
        return 1 << ((self.value + 1) % 7)

    @classmethod
    def from_name(cls, value: str) -> "Weekday":
        key = (value or "").strip().upper()
        for day in cls:
            if key in (day.name, day.name[:3]):
                return day
        raise ValueError(f"Unknown weekday: {value!r}")

    @staticmethod
    def to_mask(days: Iterable["Weekday"]) -> int:
        mask = 0
        for day in days:
            mask |= day.mask
        return mask

    @classmethod
    def from_mask(cls, mask: int) -> frozenset["Weekday"]:
        return frozenset(day for day in cls if mask & day.mask)


class RateMultiplier(float, Enum):
    """Standard rate multipliers for shift pay calculations."""

    REGULAR = 1.0
    OVERTIME_BRACKET = 1.3
    EXTRA = 1.5
    BANK_HOLIDAY = 2.0

    @property
    def display_name(self) -> str:
        return {
            RateMultiplier.REGULAR: "Regular",
            RateMultiplier.OVERTIME_BRACKET: "Overtime (Bracket)",
            RateMultiplier.EXTRA: "Extra",
            RateMultiplier.BANK_HOLIDAY: "Bank Holiday",
        }[self]

    @property
    def formatted(self) -> str:
        return format_multiplier(self.value)


class ForecastStatus(str, Enum):
    SAFE = "safe"
    APPROACHING = "approaching"
    EXCEEDED = "exceeded"

    @property
    def display_name(self) -> str:
        return {
            ForecastStatus.SAFE: "On Track",
            ForecastStatus.APPROACHING: "Approaching Limit",
            ForecastStatus.EXCEEDED: "Exceeded",
        }[self]


def format_multiplier(value: float) -> str:
    return f"{float(value):.1f}x"
