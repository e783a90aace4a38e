from datetime import datetime

import pytest

from src.shiftpay.shiftpay.common.clock import FixedClock


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2024, 1, 10, 12, 0)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)
