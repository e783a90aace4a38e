from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence
from uuid import uuid4

from ..core.constants import DEFAULT_DURATION_MINUTES, DEFAULT_START_MINUTE_OF_DAY, MINUTES_PER_DAY
from ..core.enums import ScheduleType, Weekday
from ..common.datetime_utils import format_minutes


@dataclass(frozen=True)
class RotationDay:
    """One position in a cycling rotation, work or off."""

    index: int
    is_work_day: bool
    shift_name: Optional[str] = None
    start_minute_of_day: Optional[int] = None
    duration_minutes: Optional[int] = None

    def effective_start_minute(self, fallback: int) -> int:
        return self.start_minute_of_day if self.start_minute_of_day is not None else fallback

    def effective_duration(self, fallback: int) -> int:
        return self.duration_minutes if self.duration_minutes is not None else fallback

    @property
    def day_label(self) -> str:
        return f"Day {self.index + 1}"

    @property
    def summary(self) -> str:
        text = f"{self.day_label}: {'Work' if self.is_work_day else 'Off'}"
        if self.shift_name:
            text += f" ({self.shift_name})"
        return text

    @property
    def duration_formatted(self) -> Optional[str]:
        if self.duration_minutes is None:
            return None
        return format_minutes(self.duration_minutes)

    @classmethod
    def work(cls, index: int, **overrides) -> "RotationDay":
        return cls(index=index, is_work_day=True, **overrides)

    @classmethod
    def off(cls, index: int) -> "RotationDay":
        return cls(index=index, is_work_day=False)


def rotation_from_flags(flags: Iterable[bool], *, work_name: Optional[str] = None) -> tuple[RotationDay, ...]:
    """Build contiguous rotation days from a list of work/off flags."""
    return tuple(
        RotationDay(index=i, is_work_day=bool(flag), shift_name=work_name if flag else None)
        for i, flag in enumerate(flags)
    )


@dataclass(frozen=True)
class PatternDefinition:
    """Immutable template describing when shifts recur.

    Weekly patterns use ``weekdays``; cycling patterns use ``rotation_days``.
    ``break_minutes`` of None means "use the pay ruleset default".
    """

    name: str
    kind: ScheduleType = ScheduleType.WEEKLY
    start_minute_of_day: int = DEFAULT_START_MINUTE_OF_DAY
    duration_minutes: int = DEFAULT_DURATION_MINUTES
    weekdays: frozenset[Weekday] = frozenset()
    rotation_days: tuple[RotationDay, ...] = ()
    break_minutes: Optional[int] = None
    short_code: Optional[str] = None
    notes: Optional[str] = None

    @property
    def cycle_length_days(self) -> int:
        return len(self.rotation_days)

    @property
    def sorted_rotation_days(self) -> list[RotationDay]:
        return sorted(self.rotation_days, key=lambda d: d.index)

    @property
    def end_minute_of_day(self) -> int:
        return (self.start_minute_of_day + self.duration_minutes) % MINUTES_PER_DAY

    @property
    def is_overnight(self) -> bool:
        return self.end_minute_of_day < self.start_minute_of_day

    @property
    def weekday_mask(self) -> int:
        return Weekday.to_mask(self.weekdays)

    @property
    def work_days_per_cycle(self) -> int:
        return sum(1 for d in self.rotation_days if d.is_work_day)

    @property
    def time_range_formatted(self) -> str:
        start_h, start_m = divmod(self.start_minute_of_day, 60)
        end_h, end_m = divmod(self.end_minute_of_day, 60)
        return f"{start_h:02d}:{start_m:02d} - {end_h:02d}:{end_m:02d}"

    @classmethod
    def weekly(cls, name: str, weekdays: Sequence[Weekday], **kwargs) -> "PatternDefinition":
        return cls(name=name, kind=ScheduleType.WEEKLY, weekdays=frozenset(weekdays), **kwargs)

    @classmethod
    def cycling(cls, name: str, rotation_days: Sequence[RotationDay], **kwargs) -> "PatternDefinition":
        return cls(name=name, kind=ScheduleType.CYCLING, rotation_days=tuple(rotation_days), **kwargs)

    @classmethod
    def from_weekday_mask(cls, name: str, mask: int, **kwargs) -> "PatternDefinition":
        return cls(name=name, kind=ScheduleType.WEEKLY, weekdays=Weekday.from_mask(mask), **kwargs)


@dataclass(frozen=True)
class PatternInstance:
    """A definition bound to an owner and, for cycling patterns, a cycle start date.

    ``cycle_start_date`` is the real-world day that maps to rotation index 0.
    """

    definition: PatternDefinition
    owner_id: Optional[int] = None
    cycle_start_date: Optional[date] = None
    is_active: bool = True
    pattern_id: str = field(default_factory=lambda: str(uuid4()))
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def kind(self) -> ScheduleType:
        return self.definition.kind

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def soft_delete(self, at: datetime) -> "PatternInstance":
        return replace(self, deleted_at=at, is_active=False)

    def restore(self) -> "PatternInstance":
        return replace(self, deleted_at=None)


@dataclass(frozen=True)
class ShiftPreview:
    """Lightweight row used to preview a definition before any shift is created."""

    day: date
    title: str
    start: datetime
    end: datetime
    code: str
