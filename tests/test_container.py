from __future__ import annotations

import pytest

from ojt_attendance.container import build_container
from ojt_attendance.core.exceptions import ConfigurationError
from ojt_attendance.main import create_container


def test_build_container_wires_services(clock):
    c = build_container(
        timezone="Asia/Manila",
        default_schedule={"am_in": "09:00", "am_out": "12:00", "pm_in": "13:00", "pm_out": "17:00"},
        clock=clock,
    )

    assert c.tz.key == "Asia/Manila"
    assert c.default_schedule.am_in == "09:00"
    assert c.timesheet_service.tz == c.tz
    assert c.clock is clock


def test_unknown_timezone_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        build_container(timezone="Mars/Olympus_Mons")


def test_negative_grace_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        build_container(late_grace_ms=-1)


def test_create_container_uses_testing_settings(monkeypatch, clock):
    monkeypatch.setenv("APP_ENV", "testing")

    c = create_container(clock=clock)

    assert c.tz.key == "Asia/Manila"
    assert c.default_schedule.pm_out == "17:00"
