from __future__ import annotations

from datetime import date, timedelta
from zoneinfo import ZoneInfo

from ...common.datetime_utils import anchor_ms
from ...core.enums import DurationSource, ShiftKind
from ...punches.model import PunchEvent
from ...schedules.model import DaySchedule, ShiftWindow
from ...sessions.model import Session
from ...timeparse.parser import parse_time_of_day
from ..golden_rule import clamped_duration
from .base import DurationDecision, DurationStrategy


def snapshot_official_in(event: PunchEvent, kind: ShiftKind, day: date, tz: ZoneInfo) -> int:
    t = parse_time_of_day(event.official_time_in_snapshot, kind != ShiftKind.AM)
    return anchor_ms(day, t.hour, t.minute, tz)


def snapshot_window(event: PunchEvent, kind: ShiftKind, day: date, tz: ZoneInfo) -> ShiftWindow:
    """Official window frozen on a finalized out-event, anchored to ``day``.

    An official out earlier than the official in is read as the next day.
    """
    pm_context = kind != ShiftKind.AM
    start = snapshot_official_in(event, kind, day, tz)
    t_out = parse_time_of_day(event.official_time_out_snapshot, pm_context)
    end = anchor_ms(day, t_out.hour, t_out.minute, tz)
    if end < start:
        end = anchor_ms(day + timedelta(days=1), t_out.hour, t_out.minute, tz)
    return ShiftWindow(start, end)


class SnapshotStrategy(DurationStrategy):
    """Golden Rule against the boundaries frozen at finalization time."""

    def decide(self, *, session: Session, day: date, schedule: DaySchedule, tz: ZoneInfo) -> DurationDecision:
        window = snapshot_window(session.out_event, session.kind, day, tz)
        duration = clamped_duration(
            session.in_event.timestamp,
            session.out_event.timestamp,
            window,
            label=f"{session.kind.value} snapshot {day}",
        )
        return DurationDecision(duration=duration, source=DurationSource.SNAPSHOT)
