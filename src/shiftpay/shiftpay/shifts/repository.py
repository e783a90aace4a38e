from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Shift


class ShiftRepository(Protocol):
    def list_range(self, start: datetime, end: datetime) -> Sequence[Shift]:
        """Non-deleted shifts whose scheduled start lies in ``[start, end]``."""
        raise NotImplementedError

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        raise NotImplementedError

    def upsert(self, shift: Shift) -> Shift:
        raise NotImplementedError
