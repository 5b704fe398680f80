"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

# Gulf Standard Time, no daylight saving.
DEFAULT_REGION_UTC_OFFSET_HOURS = 4

DEFAULT_START_TIME = time(9, 0)
DEFAULT_END_TIME = time(17, 0)
DEFAULT_MINIMUM_DAILY_HOURS = 8.0
DEFAULT_LATE_GRACE_MINUTES = 0

WEEKDAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
# Used when a schedule lists no working days at all.
DEFAULT_WORKING_DAYS = frozenset(WEEKDAY_NAMES[:6])

CONSECUTIVE_ABSENCE_THRESHOLD = 3
MONTHLY_ABSENCE_THRESHOLD = 5

DEFAULT_HISTORY_LIMIT = 30
