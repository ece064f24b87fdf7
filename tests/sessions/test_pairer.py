from datetime import date

import pytest

from ojt_attendance.core.constants import AUTO_CLOSE_MARKER
from ojt_attendance.core.enums import ShiftKind
from ojt_attendance.schedules.builder import build_day_schedule
from ojt_attendance.schedules.model import OvertimeAuthorization, ScheduleConfig, ShiftWindow
from ojt_attendance.sessions.pairer import accepts, pair_day, synthesize_close_out

DAY = date(2026, 1, 19)
TODAY = date(2026, 2, 1)


@pytest.fixture
def schedule(tz, nine_to_five):
    return build_day_schedule(DAY, nine_to_five, tz)


def test_full_day_pairs_am_and_pm(schedule, punch):
    events = [
        punch("in", DAY, "08:39"),
        punch("out", DAY, "12:42"),
        punch("in", DAY, "12:45"),
        punch("out", DAY, "17:03"),
    ]

    pairing = pair_day(DAY, events, schedule, today=TODAY)

    am, pm = pairing.session(ShiftKind.AM), pairing.session(ShiftKind.PM)
    assert (am.in_event, am.out_event) == (events[0], events[1])
    assert (pm.in_event, pm.out_event) == (events[2], events[3])
    assert pairing.session(ShiftKind.OT) is None


def test_in_before_acceptance_window_is_dropped(schedule, punch):
    early = punch("in", DAY, "08:29")
    pairing = pair_day(DAY, [early, punch("out", DAY, "12:00")], schedule, today=TODAY)

    assert pairing.present() == []
    assert pairing.dropped_ins == (early,)


def test_window_opens_thirty_minutes_early(schedule, punch):
    pairing = pair_day(DAY, [punch("in", DAY, "08:30"), punch("out", DAY, "12:00")], schedule, today=TODAY)

    assert pairing.session(ShiftKind.AM) is not None


def test_second_in_inside_filled_slot_moves_to_next_open_window(schedule, punch):
    # AM already filled at 09:00; a repeat tap at 12:40 falls in PM's early window
    events = [punch("in", DAY, "09:00"), punch("in", DAY, "12:40"), punch("out", DAY, "17:00")]

    pairing = pair_day(DAY, events, schedule, today=TODAY)

    assert pairing.session(ShiftKind.AM).in_event == events[0]
    assert pairing.session(ShiftKind.PM).in_event == events[1]
    assert pairing.session(ShiftKind.PM).out_event == events[2]


def test_duplicate_out_taps_keep_the_last(schedule, punch):
    events = [
        punch("in", DAY, "09:00"),
        punch("out", DAY, "11:58"),
        punch("out", DAY, "12:01"),
        punch("in", DAY, "13:00"),
        punch("out", DAY, "17:00"),
    ]

    pairing = pair_day(DAY, events, schedule, today=TODAY)

    assert pairing.session(ShiftKind.AM).out_event == events[2]
    assert pairing.session(ShiftKind.PM).out_event == events[4]


def test_out_is_not_borrowed_across_next_in(schedule, punch):
    events = [punch("in", DAY, "09:00"), punch("in", DAY, "13:00"), punch("out", DAY, "17:00")]

    pairing = pair_day(DAY, events, schedule, today=DAY)

    assert pairing.session(ShiftKind.AM).out_event is None
    assert pairing.session(ShiftKind.PM).out_event == events[2]


def test_past_day_gets_virtual_close_out(schedule, punch, at):
    pairing = pair_day(DAY, [punch("in", DAY, "09:05")], schedule, today=TODAY)

    out = pairing.session(ShiftKind.AM).out_event
    assert out.timestamp == at(DAY, "12:00")
    assert out.is_virtual
    assert out.validated_by == AUTO_CLOSE_MARKER
    assert out.photo_ref is None
    assert not out.is_approved


def test_today_leaves_session_open(schedule, punch):
    pairing = pair_day(DAY, [punch("in", DAY, "09:05")], schedule, today=DAY)

    session = pairing.session(ShiftKind.AM)
    assert session is not None
    assert not session.is_complete


def test_virtual_out_after_in_when_official_end_passed(at):
    from ojt_attendance.core.enums import PunchKind
    from ojt_attendance.punches.model import PunchEvent

    in_event = PunchEvent(id=1, subject_id="s", kind=PunchKind.IN, timestamp=at(DAY, "12:00"))
    out = synthesize_close_out(in_event, ShiftWindow(at(DAY, "09:00"), at(DAY, "11:59")))

    assert out.timestamp == at(DAY, "12:01")


def test_zero_length_overtime_still_accepts_ins_near_its_start(schedule, punch, at):
    # no overtime configured: the OT window is 17:00 - 17:00, accepting from 16:30
    assert accepts(schedule.window(ShiftKind.OT), at(DAY, "16:45"))
    assert not accepts(schedule.window(ShiftKind.OT), at(DAY, "16:29"))

    events = [punch("in", DAY, "13:00"), punch("in", DAY, "16:45"), punch("out", DAY, "17:00")]
    pairing = pair_day(DAY, events, schedule, today=DAY)

    assert pairing.session(ShiftKind.PM).in_event == events[0]
    assert pairing.session(ShiftKind.PM).out_event is None
    assert pairing.session(ShiftKind.OT).in_event == events[1]
    assert pairing.session(ShiftKind.OT).out_event == events[2]
    assert pairing.dropped_ins == ()


def test_overtime_slot_with_authorization(tz, at, punch, nine_to_five):
    ot = OvertimeAuthorization(start=at(DAY, "17:30"), end=at(DAY, "20:30"))
    schedule = build_day_schedule(DAY, nine_to_five, tz, overtime=ot)
    events = [
        punch("in", DAY, "13:00"),
        punch("out", DAY, "17:00"),
        punch("in", DAY, "17:25"),
        punch("out", DAY, "20:45"),
    ]

    pairing = pair_day(DAY, events, schedule, today=TODAY)

    assert pairing.session(ShiftKind.OT).in_event == events[2]
    assert pairing.session(ShiftKind.OT).out_event == events[3]


def test_overlapping_windows_prefer_am_then_pm(tz, punch):
    config = ScheduleConfig(am_in="09:00", am_out="13:00", pm_in="12:00", pm_out="17:00")
    schedule = build_day_schedule(DAY, config, tz)
    events = [punch("in", DAY, "12:30"), punch("in", DAY, "12:31")]

    pairing = pair_day(DAY, events, schedule, today=DAY)

    assert pairing.session(ShiftKind.AM).in_event == events[0]
    assert pairing.session(ShiftKind.PM).in_event == events[1]


def test_pairing_is_idempotent(schedule, punch):
    events = [
        punch("in", DAY, "08:50"),
        punch("out", DAY, "10:00"),
        punch("out", DAY, "12:05"),
        punch("in", DAY, "12:58"),
        punch("in", DAY, "13:10"),
        punch("out", DAY, "16:59"),
    ]

    first = pair_day(DAY, events, schedule, today=TODAY)
    second = pair_day(DAY, events, schedule, today=TODAY)

    assert first.sessions == second.sessions
    assert first.dropped_ins == second.dropped_ins


def test_each_out_is_consumed_once(schedule, punch):
    events = [
        punch("in", DAY, "09:00"),
        punch("out", DAY, "12:00"),
        punch("in", DAY, "13:00"),
        punch("out", DAY, "17:00"),
    ]

    pairing = pair_day(DAY, events, schedule, today=TODAY)
    outs = [s.out_event for s in pairing.present()]

    assert len(outs) == len({id(o) for o in outs})
