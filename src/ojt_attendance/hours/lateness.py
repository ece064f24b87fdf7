from __future__ import annotations

from datetime import date
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_LATE_GRACE_MS, MS_PER_MINUTE
from ..schedules.model import DaySchedule
from ..sessions.model import Lateness, Session
from .strategies.snapshot_strategy import snapshot_official_in


def is_late(punch_in: int, official_in: int, grace_ms: int = DEFAULT_LATE_GRACE_MS) -> bool:
    """Strictly later than the grace period: exactly one minute late is on time."""
    return punch_in > official_in + grace_ms


def late_minutes(punch_in: int, official_in: int) -> int:
    return max(0, (punch_in - official_in) // MS_PER_MINUTE)


def official_in_for(session: Session, day: date, schedule: DaySchedule, tz: ZoneInfo) -> int:
    """Snapshot official-in from the matched out-event if any, else the live shift start."""
    out = session.out_event
    if out is not None and out.official_time_in_snapshot:
        return snapshot_official_in(out, session.kind, day, tz)
    return schedule.window(session.kind).start


def detect_lateness(
    session: Session,
    day: date,
    schedule: DaySchedule,
    tz: ZoneInfo,
    *,
    grace_ms: int = DEFAULT_LATE_GRACE_MS,
) -> Lateness:
    official_in = official_in_for(session, day, schedule, tz)
    punch_in = session.in_event.timestamp
    late = is_late(punch_in, official_in, grace_ms)
    return Lateness(
        is_late=late,
        late_minutes=late_minutes(punch_in, official_in) if late else 0,
        official_in=official_in,
    )
