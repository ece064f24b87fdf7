from datetime import date

import pytest

from ojt_attendance.core.constants import MS_PER_HOUR, MS_PER_MINUTE
from ojt_attendance.core.enums import DurationSource, SessionFlag, ShiftKind
from ojt_attendance.hours.calculator import HoursCalculator
from ojt_attendance.schedules.builder import build_day_schedule
from ojt_attendance.schedules.model import ScheduleConfig
from ojt_attendance.sessions.model import Session
from ojt_attendance.sessions.pairer import synthesize_close_out

DAY = date(2026, 1, 19)


@pytest.fixture
def calculator(tz):
    return HoursCalculator(tz)


@pytest.fixture
def schedule(tz, nine_to_five):
    return build_day_schedule(DAY, nine_to_five, tz)


def test_live_schedule_clamps_to_official_window(calculator, schedule, punch):
    session = Session(kind=ShiftKind.AM, in_event=punch("in", DAY, "08:39"), out_event=punch("out", DAY, "12:42"))

    got = calculator.compute_session(session, day=DAY, schedule=schedule)

    assert got.duration == 3 * MS_PER_HOUR
    assert got.duration_source == DurationSource.LIVE
    assert got.validated
    assert got.flags == ()


def test_finalized_override_wins(calculator, schedule, punch):
    out = punch(
        "out", DAY, "12:42", validated_hours_override=2.5, official_time_in_snapshot="08:00", official_time_out_snapshot="12:00"
    )
    session = Session(kind=ShiftKind.AM, in_event=punch("in", DAY, "08:39"), out_event=out)

    got = calculator.compute_session(session, day=DAY, schedule=schedule)

    assert got.duration == int(2.5 * MS_PER_HOUR)
    assert got.duration_source == DurationSource.FINALIZED


def test_negative_override_counts_zero(calculator, schedule, punch):
    out = punch("out", DAY, "12:00", validated_hours_override=-1)
    session = Session(kind=ShiftKind.AM, in_event=punch("in", DAY, "09:00"), out_event=out)

    assert calculator.compute_session(session, day=DAY, schedule=schedule).duration == 0


def test_snapshot_ignores_later_schedule_edits(calculator, tz, punch):
    # schedule was since moved to 10:00 - 12:00; the frozen 08:00 - 12:00 still applies
    schedule = build_day_schedule(DAY, ScheduleConfig("10:00", "12:00", "13:00", "17:00"), tz)
    out = punch("out", DAY, "12:00", official_time_in_snapshot="08:00", official_time_out_snapshot="12:00")
    session = Session(kind=ShiftKind.AM, in_event=punch("in", DAY, "08:00"), out_event=out)

    got = calculator.compute_session(session, day=DAY, schedule=schedule)

    assert got.duration == 4 * MS_PER_HOUR
    assert got.duration_source == DurationSource.SNAPSHOT


def test_snapshot_end_before_start_rolls_to_next_day(calculator, schedule, punch):
    out = punch(
        "out", date(2026, 1, 20), "00:30", official_time_in_snapshot="22:00", official_time_out_snapshot="00:00"
    )
    session = Session(kind=ShiftKind.OT, in_event=punch("in", DAY, "22:00"), out_event=out)

    got = calculator.compute_session(session, day=DAY, schedule=schedule)

    assert got.duration == 2 * MS_PER_HOUR


def test_unapproved_out_is_pending(calculator, schedule, punch):
    session = Session(
        kind=ShiftKind.PM,
        in_event=punch("in", DAY, "13:00"),
        out_event=punch("out", DAY, "17:00", status="pending"),
    )

    got = calculator.compute_session(session, day=DAY, schedule=schedule)

    assert got.duration == 4 * MS_PER_HOUR
    assert not got.validated


def test_virtual_close_out_counts_but_never_validates(calculator, schedule, punch):
    in_event = punch("in", DAY, "09:05")
    session = Session(kind=ShiftKind.AM, in_event=in_event, out_event=synthesize_close_out(in_event, schedule.window(ShiftKind.AM)))

    got = calculator.compute_session(session, day=DAY, schedule=schedule)

    assert got.duration == 2 * MS_PER_HOUR + 55 * MS_PER_MINUTE
    assert not got.validated
    assert SessionFlag.AUTO_CLOSED in got.flags
    assert SessionFlag.LATE in got.flags
    assert got.lateness.late_minutes == 5


def test_open_session_has_no_duration(calculator, schedule, punch):
    got = calculator.compute_session(
        Session(kind=ShiftKind.AM, in_event=punch("in", DAY, "09:00")), day=DAY, schedule=schedule
    )

    assert got.duration == 0
    assert got.duration_source == DurationSource.NONE
    assert not got.validated


def test_early_out_and_bridged_lunch_flags(calculator, schedule, punch):
    session = Session(kind=ShiftKind.AM, in_event=punch("in", DAY, "09:00"), out_event=punch("out", DAY, "16:00"))

    got = calculator.compute_session(session, day=DAY, schedule=schedule)

    assert got.duration == 3 * MS_PER_HOUR
    assert SessionFlag.MISSED_LUNCH_PUNCH in got.flags
    assert SessionFlag.EARLY_OUT not in got.flags

    short = Session(kind=ShiftKind.PM, in_event=punch("in", DAY, "13:00"), out_event=punch("out", DAY, "15:30"))
    assert calculator.compute_session(short, day=DAY, schedule=schedule).flags == (SessionFlag.EARLY_OUT,)


def test_non_finite_override_counts_zero(calculator, schedule, punch):
    out = punch("out", DAY, "12:00", validated_hours_override=float("nan"))
    session = Session(kind=ShiftKind.AM, in_event=punch("in", DAY, "09:00"), out_event=out)

    got = calculator.compute_session(session, day=DAY, schedule=schedule)

    assert got.duration == 0
    assert got.duration_source == DurationSource.FINALIZED
