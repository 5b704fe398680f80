from datetime import date, datetime, time, timedelta, timezone

import pytest

from hrflow_attendance.common.timezone import RegionalClock
from hrflow_attendance.core.exceptions import InvalidInstant, ValidationError


def test_utc_evening_is_next_regional_day():
    clock = RegionalClock(4)

    # 21:30 UTC is 01:30 the next morning in UTC+4.
    assert clock.regional_date("2026-01-14T21:30:00Z") == date(2026, 1, 15)


def test_naive_string_is_treated_as_utc():
    clock = RegionalClock(4)

    instant = clock.parse_instant("2026-01-15 05:00:00")

    assert instant == datetime(2026, 1, 15, 5, 0, tzinfo=timezone.utc)
    assert clock.to_regional(instant).hour == 9


def test_offset_string_is_normalized_to_utc():
    clock = RegionalClock(4)

    instant = clock.parse_instant("2026-01-15T09:00:00+04:00")

    assert instant.tzinfo == timezone.utc
    assert instant.hour == 5


def test_combine_interprets_wall_clock_in_region():
    clock = RegionalClock(4)

    instant = clock.combine(date(2026, 1, 15), time(9, 0))

    assert instant == datetime(2026, 1, 15, 5, 0, tzinfo=timezone.utc)
    assert clock.regional_date(instant) == date(2026, 1, 15)


def test_to_instant_keeps_aware_values():
    clock = RegionalClock(4)
    aware = datetime(2026, 1, 15, 9, 0, tzinfo=timezone(timedelta(hours=4)))

    assert clock.to_instant(aware) == datetime(2026, 1, 15, 5, 0, tzinfo=timezone.utc)


def test_regional_today_uses_given_now():
    clock = RegionalClock(4)

    assert clock.regional_today(datetime(2026, 3, 31, 20, 1, tzinfo=timezone.utc)) == date(2026, 4, 1)


@pytest.mark.parametrize("value", ["", "   ", "yesterday", "2026-13-01T00:00:00"])
def test_unparseable_timestamps_raise(value):
    with pytest.raises(InvalidInstant):
        RegionalClock(4).parse_instant(value)


def test_unsupported_type_raises_and_maps_to_validation_error():
    with pytest.raises(ValidationError):
        RegionalClock(4).parse_instant(12345)
