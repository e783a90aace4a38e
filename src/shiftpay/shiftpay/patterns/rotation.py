from __future__ import annotations

from ..common.datetime_utils import DayLike, days_between
from ..core.exceptions import InvalidPatternError


def day_index_in_cycle(day: DayLike, cycle_start: DayLike, cycle_length: int) -> int:
    """Zero-based position of ``day`` within a rotation of ``cycle_length`` days.

    The difference is counted in calendar days, not elapsed seconds, and reduced
    with a floor modulus so days before ``cycle_start`` wrap backwards through
    the cycle (the day before the start is the last day of the cycle).
    """
    if cycle_length is None or int(cycle_length) <= 0:
        raise InvalidPatternError(f"Cycle length must be positive, got {cycle_length!r}")
    return days_between(cycle_start, day) % int(cycle_length)
