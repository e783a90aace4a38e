from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import ForecastStatus


@dataclass(frozen=True)
class OvertimeForecast:
    projected_hours: float
    completed_hours: float
    scheduled_hours: float
    threshold_hours: float
    status: ForecastStatus
    message: str
    days_remaining: int

    @property
    def excess_hours(self) -> float:
        return max(0.0, self.projected_hours - self.threshold_hours)

    @property
    def ratio(self) -> float:
        return self.projected_hours / self.threshold_hours


@dataclass(frozen=True)
class PaceProjection:
    """Straight-line projection of the hours worked so far over the rest of the period."""

    current_hours: float
    projected_hours: float
    days_remaining: int
    average_hours_per_day: float
    recommended_daily_hours: Optional[float] = None


@dataclass(frozen=True)
class ShiftSuggestion:
    shifts_needed: int
    hours_needed: float
    message: str
