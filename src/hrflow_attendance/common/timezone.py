from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from ..core.constants import DEFAULT_REGION_UTC_OFFSET_HOURS
from ..core.exceptions import InvalidInstant

InstantLike = Union[str, datetime]


class RegionalClock:
    """Converts between the region's wall clock and storage instants.

    The region uses a single fixed UTC offset (no daylight saving), so every
    conversion is a plain offset shift. Storage instants are aware datetimes
    in UTC.
    """

    def __init__(self, offset_hours: int = DEFAULT_REGION_UTC_OFFSET_HOURS):
        self._tz = timezone(timedelta(hours=int(offset_hours)))

    @property
    def tz(self) -> timezone:
        return self._tz

    def now(self) -> datetime:
        """Current instant in UTC.

        Note: Wrapped so tests can patch it.
        """
        return datetime.now(timezone.utc)

    def parse_instant(self, value: InstantLike) -> datetime:
        """Parse an ISO-8601 string or datetime into an aware UTC instant.

        Naive values are taken to be UTC, which is how the backend stores them.
        """
        if isinstance(value, datetime):
            parsed = value
        elif isinstance(value, str):
            raw = value.strip()
            if not raw:
                raise InvalidInstant("Empty timestamp")
            if raw.endswith("Z"):
                raw = raw[:-1] + "+00:00"
            try:
                parsed = datetime.fromisoformat(raw)
            except ValueError:
                raise InvalidInstant(f"Unparseable timestamp: {value!r}")
        else:
            raise InvalidInstant(f"Unsupported timestamp type: {type(value).__name__}")

        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    def to_regional(self, instant: InstantLike) -> datetime:
        return self.parse_instant(instant).astimezone(self._tz)

    def to_instant(self, wall_clock: datetime) -> datetime:
        """Interpret a regional wall-clock datetime and return the UTC instant."""
        if not isinstance(wall_clock, datetime):
            raise InvalidInstant(f"Unsupported wall-clock type: {type(wall_clock).__name__}")
        if wall_clock.tzinfo is None:
            wall_clock = wall_clock.replace(tzinfo=self._tz)
        return wall_clock.astimezone(timezone.utc)

    def combine(self, day: date, at: time) -> datetime:
        return self.to_instant(datetime.combine(day, at))

    def regional_date(self, instant: InstantLike) -> date:
        return self.to_regional(instant).date()

    def regional_today(self, now: Optional[datetime] = None) -> date:
        return self.regional_date(now or self.now())
