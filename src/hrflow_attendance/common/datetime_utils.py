from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional

from ..core.exceptions import ValidationError


def _as_text(value: object, message: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(message)
    return value.strip()


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    message = f"Invalid date (YYYY-MM-DD): {value!r}"
    try:
        return datetime.strptime(_as_text(value, message), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(message)


def parse_month(value: str) -> date:
    """Parse YYYY-MM into the first day of that month."""
    message = f"Invalid month (YYYY-MM): {value!r}"
    try:
        return datetime.strptime(_as_text(value, message), "%Y-%m").date()
    except ValueError:
        raise ValidationError(message)


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    message = f"Invalid time (HH:MM): {value!r}"
    v = _as_text(value, message)
    if not v:
        return None
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(message)


def month_bounds(month: date) -> tuple[date, date]:
    first = month.replace(day=1)
    last = first.replace(day=calendar.monthrange(first.year, first.month)[1])
    return first, last


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def week_start(day: date) -> date:
    """Monday of the week containing day."""
    return day - timedelta(days=day.weekday())


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end (floored; negative when end < start)."""
    return int((end - start).total_seconds() // 60)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600
