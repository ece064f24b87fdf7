from __future__ import annotations

from datetime import date
from zoneinfo import ZoneInfo

from ...core.enums import DurationSource
from ...schedules.model import DaySchedule
from ...sessions.model import Session
from ..golden_rule import clamped_duration
from .base import DurationDecision, DurationStrategy


class LiveScheduleStrategy(DurationStrategy):
    """Golden Rule against today's standing schedule."""

    def decide(self, *, session: Session, day: date, schedule: DaySchedule, tz: ZoneInfo) -> DurationDecision:
        duration = clamped_duration(
            session.in_event.timestamp,
            session.out_event.timestamp,
            schedule.window(session.kind),
            label=f"{session.kind.value} {day}",
        )
        return DurationDecision(duration=duration, source=DurationSource.LIVE)
