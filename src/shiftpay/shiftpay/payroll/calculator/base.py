from __future__ import annotations

from abc import ABC, abstractmethod

from ...shifts.model import Shift


class PaidMinutesCalculator(ABC):
    """Calculator interface (Strategy Pattern for paid/premium minutes)."""

    @abstractmethod
    def paid_minutes(self, shift: Shift) -> int:
        raise NotImplementedError

    @abstractmethod
    def premium_minutes(self, shift: Shift, paid_minutes: int) -> int:
        raise NotImplementedError
