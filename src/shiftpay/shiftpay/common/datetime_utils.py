from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Iterator, Optional, Union

DayLike = Union[date, datetime]


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value)


def as_date(value: DayLike) -> date:
    """Calendar day of a date or datetime (datetimes keep their own wall clock)."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: DayLike, end: DayLike) -> int:
    """Whole calendar days from ``start`` to ``end``; DST-shifted days count as one."""
    return (as_date(end) - as_date(start)).days


def start_of_day(value: DayLike, tz: Optional[tzinfo] = None) -> datetime:
    if tz is None and isinstance(value, datetime):
        tz = value.tzinfo
    return datetime.combine(as_date(value), time.min, tzinfo=tz)


def end_of_day(value: DayLike, tz: Optional[tzinfo] = None) -> datetime:
    if tz is None and isinstance(value, datetime):
        tz = value.tzinfo
    return datetime.combine(as_date(value), time.max, tzinfo=tz)


def at_minute(day: DayLike, minute_of_day: int, tz: Optional[tzinfo] = None) -> datetime:
    return start_of_day(day, tz) + timedelta(minutes=int(minute_of_day))


def is_midnight(value: datetime) -> bool:
    return value.hour == 0 and value.minute == 0 and value.second == 0 and value.microsecond == 0


def iter_days(start: DayLike, end: DayLike) -> Iterator[date]:
    """Each calendar day in ``[start, end]`` inclusive; empty when start > end."""
    current = as_date(start)
    last = as_date(end)
    while current <= last:
        yield current
        current += timedelta(days=1)


def start_of_week(value: DayLike, first_weekday: int = 0) -> date:
    day = as_date(value)
    offset = (day.weekday() - int(first_weekday)) % 7
    return day - timedelta(days=offset)


def start_of_month(value: DayLike) -> date:
    return as_date(value).replace(day=1)


def end_of_month(value: DayLike) -> date:
    first = start_of_month(value)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return next_first - timedelta(days=1)


def _as_utc(value: datetime) -> datetime:
    return value.astimezone(timezone.utc) if value.tzinfo is not None else value


def add_minutes(value: datetime, minutes: int) -> datetime:
    """``value`` plus elapsed minutes; aware values step in UTC so DST jumps are honoured."""
    if value.tzinfo is None:
        return value + timedelta(minutes=int(minutes))
    return (_as_utc(value) + timedelta(minutes=int(minutes))).astimezone(value.tzinfo)


def minutes_between(start: datetime, end: datetime) -> int:
    # Same-tzinfo subtraction ignores offset changes, so compare in UTC.
    return int((_as_utc(end) - _as_utc(start)).total_seconds() // 60)


def format_minutes(minutes: int) -> str:
    """8h / 8h 30m style duration label."""
    hours, mins = divmod(int(minutes), 60)
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"
