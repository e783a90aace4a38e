"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MINUTES_PER_DAY = 24 * 60

DEFAULT_START_MINUTE_OF_DAY = 9 * 60
DEFAULT_DURATION_MINUTES = 8 * 60
DEFAULT_BREAK_MINUTES = 30
DEFAULT_QUICK_SHIFT_HOURS = 8

DEFAULT_OVERTIME_THRESHOLD_HOURS = 40.0
DEFAULT_APPROACHING_RATIO = 0.8
DEFAULT_EXCEEDED_RATIO = 1.0

MAX_SHIFT_DURATION_HOURS = 24
MIN_RATE_MULTIPLIER = 1.0
MAX_RATE_MULTIPLIER = 2.0

BIWEEKLY_BLOCK_DAYS = 14
