from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from uuid import uuid4

from ..common.datetime_utils import format_minutes, minutes_between
from ..core.constants import DEFAULT_BREAK_MINUTES
from ..core.enums import ShiftStatus, format_multiplier


@dataclass(frozen=True)
class Shift:
    """One concrete work instance, generated from a pattern or created ad hoc.

    Records are immutable; lifecycle operations hand back an updated copy for
    the caller to persist. Shifts are soft-deleted so pay history survives.
    """

    scheduled_start: datetime
    scheduled_end: datetime
    actual_start: Optional[datetime] = None
    actual_end: Optional[datetime] = None
    break_minutes: int = DEFAULT_BREAK_MINUTES
    status: ShiftStatus = ShiftStatus.SCHEDULED
    paid_minutes: int = 0
    premium_minutes: int = 0
    rate_multiplier: float = 1.0
    rate_label: Optional[str] = None
    is_additional_shift: bool = False
    owner_id: Optional[int] = None
    pattern_id: Optional[str] = None
    notes: Optional[str] = None
    location: Optional[str] = None
    shift_id: str = field(default_factory=lambda: str(uuid4()))
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def effective_start(self) -> datetime:
        return self.actual_start or self.scheduled_start

    @property
    def effective_end(self) -> datetime:
        return self.actual_end or self.scheduled_end

    @property
    def scheduled_duration_minutes(self) -> int:
        return minutes_between(self.scheduled_start, self.scheduled_end)

    @property
    def actual_duration_minutes(self) -> Optional[int]:
        if self.actual_start is None or self.actual_end is None:
            return None
        return minutes_between(self.actual_start, self.actual_end)

    @property
    def effective_duration_minutes(self) -> int:
        actual = self.actual_duration_minutes
        return actual if actual is not None else self.scheduled_duration_minutes

    @property
    def paid_hours(self) -> float:
        return self.paid_minutes / 60.0

    @property
    def premium_hours(self) -> float:
        return self.premium_minutes / 60.0

    @property
    def has_premium_pay(self) -> bool:
        return self.rate_multiplier > 1.0

    @property
    def is_additional_or_premium(self) -> bool:
        return self.is_additional_shift or self.has_premium_pay

    @property
    def rate_display_label(self) -> str:
        return self.rate_label or format_multiplier(self.rate_multiplier)

    @property
    def duration_formatted(self) -> str:
        return format_minutes(self.effective_duration_minutes)

    @property
    def time_range_formatted(self) -> str:
        return f"{self.effective_start:%H:%M} - {self.effective_end:%H:%M}"
