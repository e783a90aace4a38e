from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from .model import Shift
from .repository import ShiftRepository


class InMemoryShiftRepository(ShiftRepository):
    """Dictionary-backed store used for STORAGE=memory and in tests."""

    def __init__(self, shifts: Iterable[Shift] = ()):
        self._shifts: dict[str, Shift] = {s.shift_id: s for s in shifts}

    def list_range(self, start: datetime, end: datetime) -> Sequence[Shift]:
        found = [s for s in self._shifts.values() if not s.is_deleted and start <= s.scheduled_start <= end]
        return sorted(found, key=lambda s: s.scheduled_start)

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        return self._shifts.get(shift_id)

    def upsert(self, shift: Shift) -> Shift:
        self._shifts[shift.shift_id] = shift
        return shift

    def all(self) -> list[Shift]:
        return list(self._shifts.values())
