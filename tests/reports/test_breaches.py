from datetime import date

from hrflow_attendance.attendance.model import DayClassification
from hrflow_attendance.core.enums import BreachKind, DayStatus
from hrflow_attendance.reports.breaches import detect_breaches


def _day(d: int, status: DayStatus) -> DayClassification:
    return DayClassification(work_date=date(2026, 1, d), status=status)


def test_three_consecutive_absences_flagged():
    days = [_day(5, DayStatus.PRESENT), _day(6, DayStatus.ABSENT), _day(7, DayStatus.ABSENT), _day(8, DayStatus.ABSENT)]

    breaches = detect_breaches(days)

    assert len(breaches) == 1
    assert breaches[0].kind == BreachKind.CONSECUTIVE
    assert breaches[0].count == 3
    assert breaches[0].message == "3 consecutive absences detected (Jan 06 - Jan 08)"


def test_non_absent_day_breaks_the_run():
    days = [_day(5, DayStatus.ABSENT), _day(6, DayStatus.ABSENT), _day(7, DayStatus.LEAVE), _day(8, DayStatus.ABSENT)]

    assert detect_breaches(days) == []


def test_more_than_five_absences_in_month():
    absent_days = [6, 8, 13, 15, 20, 22]
    days = [_day(d, DayStatus.ABSENT) for d in absent_days]

    breaches = detect_breaches(days)

    assert [b.kind for b in breaches] == [BreachKind.MONTHLY]
    assert breaches[0].count == 6
    assert breaches[0].message == "Total of 6 absences this month (exceeds 5-day threshold)"


def test_exactly_five_absences_not_flagged():
    days = [_day(d, DayStatus.ABSENT) for d in (6, 8, 13, 15, 20)]

    assert detect_breaches(days) == []


def test_unsorted_input_is_ordered_by_date():
    days = [_day(8, DayStatus.ABSENT), _day(6, DayStatus.ABSENT), _day(7, DayStatus.ABSENT)]

    breaches = detect_breaches(days)

    assert breaches[0].dates == (date(2026, 1, 6), date(2026, 1, 7), date(2026, 1, 8))


def test_missing_date_breaks_the_run():
    days = [_day(6, DayStatus.ABSENT), _day(8, DayStatus.ABSENT), _day(9, DayStatus.ABSENT)]

    assert detect_breaches(days) == []


def test_run_restarts_after_gap():
    days = [_day(d, DayStatus.ABSENT) for d in (2, 6, 7, 8)]

    breaches = detect_breaches(days)

    assert len(breaches) == 1
    assert breaches[0].dates == (date(2026, 1, 6), date(2026, 1, 7), date(2026, 1, 8))
