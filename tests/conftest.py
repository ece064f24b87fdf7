from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from ojt_attendance.common.clock import FixedClock
from ojt_attendance.common.datetime_utils import anchor_ms
from ojt_attendance.core.enums import ApprovalStatus, PunchKind
from ojt_attendance.punches.model import PunchEvent
from ojt_attendance.schedules.model import ScheduleConfig

MANILA = ZoneInfo("Asia/Manila")


@pytest.fixture
def tz() -> ZoneInfo:
    return MANILA


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 1, 10, 0, 0, tzinfo=MANILA)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock.at(fixed_now)


@pytest.fixture
def nine_to_five() -> ScheduleConfig:
    return ScheduleConfig(am_in="09:00", am_out="12:00", pm_in="13:00", pm_out="17:00")


@pytest.fixture
def at(tz):
    """``at(date(2026, 1, 19), "08:39")`` -> epoch ms in Manila time."""

    def _at(day: date, hhmm: str, second: int = 0) -> int:
        h, m = (int(x) for x in hhmm.split(":"))
        return anchor_ms(day, h, m, tz, second=second)

    return _at


@pytest.fixture
def punch(at):
    counter = {"n": 0}

    def _punch(kind: str, day: date, hhmm: str, *, status: str | None = "approved", **extra) -> PunchEvent:
        counter["n"] += 1
        return PunchEvent(
            id=extra.pop("id", counter["n"]),
            subject_id="2021-0001",
            kind=PunchKind(kind),
            timestamp=at(day, hhmm),
            approval_status=ApprovalStatus(status) if status else None,
            **extra,
        )

    return _punch
