from __future__ import annotations

from datetime import date
from zoneinfo import ZoneInfo

from ..core.enums import SessionFlag
from ..hours.strategies.snapshot_strategy import snapshot_window
from ..schedules.model import DaySchedule
from .model import Session


def bridges_lunch(session: Session, schedule: DaySchedule) -> bool:
    """One in/out pair spanning from the morning shift into the afternoon one."""
    if session.out_event is None or schedule.am_out >= schedule.pm_in:
        return False
    return session.in_event.timestamp <= schedule.am_out and session.out_event.timestamp >= schedule.pm_in


def session_flags(session: Session, day: date, schedule: DaySchedule, tz: ZoneInfo) -> tuple[SessionFlag, ...]:
    """Display flags for a session; they never change its duration."""
    flags: list[SessionFlag] = []
    if session.is_late:
        flags.append(SessionFlag.LATE)

    out = session.out_event
    if out is None:
        return tuple(flags)

    if out.is_virtual:
        flags.append(SessionFlag.AUTO_CLOSED)
    else:
        window = snapshot_window(out, session.kind, day, tz) if out.has_snapshot else schedule.window(session.kind)
        if window.is_configured and out.timestamp < window.end:
            flags.append(SessionFlag.EARLY_OUT)

    if bridges_lunch(session, schedule):
        flags.append(SessionFlag.MISSED_LUNCH_PUNCH)
    return tuple(flags)
