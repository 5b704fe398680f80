from types import SimpleNamespace

import pytest

from hrflow_attendance.container import build_services
from hrflow_attendance.core.enums import OverlayPrecedence
from hrflow_attendance.core.exceptions import ValidationError


def _settings(**overrides):
    base = dict(
        REGION_UTC_OFFSET_HOURS=4,
        LATE_GRACE_MINUTES=5,
        HOURS_DEDUCTION={"enabled": True, "hours": 0, "minutes": 45},
        OVERLAY_PRECEDENCE="exception_wins",
    )
    base.update(overrides)
    return SimpleNamespace(**base)


def _build(settings, employees_repo, attendance_repo, schedules_repo, requests_repo):
    return build_services(
        settings=settings,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        schedules_repo=schedules_repo,
        requests_repo=requests_repo,
    )


def test_settings_are_threaded_into_services(employees_repo, attendance_repo, schedules_repo, requests_repo):
    container = _build(_settings(), employees_repo, attendance_repo, schedules_repo, requests_repo)

    assert container.clock.tz.utcoffset(None).total_seconds() == 4 * 3600
    assert container.report_service._classifier.rules.late_grace_minutes == 5
    assert container.report_service._deduction.in_hours == 0.75
    assert container.report_service._precedence == OverlayPrecedence.EXCEPTION_WINS


def test_unknown_precedence_rejected(employees_repo, attendance_repo, schedules_repo, requests_repo):
    with pytest.raises(ValidationError):
        _build(_settings(OVERLAY_PRECEDENCE="newest_wins"), employees_repo, attendance_repo, schedules_repo, requests_repo)
