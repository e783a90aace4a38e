from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Protocol


class Clock(Protocol):
    """Time source injected into anything that needs "now"."""

    def now(self) -> datetime:
        raise NotImplementedError


@dataclass(frozen=True)
class SystemClock:
    tz: Optional[tzinfo] = None

    def now(self) -> datetime:
        return datetime.now(self.tz)


@dataclass
class FixedClock:
    """Clock pinned to a given instant; tests move it with ``advance``."""

    current: datetime

    def now(self) -> datetime:
        return self.current

    def advance(self, *, minutes: int = 0, hours: int = 0, days: int = 0) -> datetime:
        self.current = self.current + timedelta(minutes=minutes, hours=hours, days=days)
        return self.current
