from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.constants import DEFAULT_LATE_GRACE_MS
from ..core.enums import DurationSource
from ..schedules.model import DaySchedule
from ..sessions.flags import session_flags
from ..sessions.model import Session
from .factory import DurationStrategyFactory
from .lateness import detect_lateness


class HoursCalculator:
    """Fill in duration, validation, lateness and flags on paired sessions."""

    def __init__(
        self,
        tz: ZoneInfo,
        *,
        grace_ms: int = DEFAULT_LATE_GRACE_MS,
        strategy_factory: Optional[DurationStrategyFactory] = None,
    ):
        self._tz = tz
        self._grace_ms = int(grace_ms)
        self._factory = strategy_factory or DurationStrategyFactory()

    def compute_session(self, session: Session, *, day: date, schedule: DaySchedule) -> Session:
        lateness = detect_lateness(session, day, schedule, self._tz, grace_ms=self._grace_ms)
        session = replace(session, lateness=lateness)

        if session.is_complete:
            strategy = self._factory.for_session(session)
            decision = strategy.decide(session=session, day=day, schedule=schedule, tz=self._tz)
            session = replace(
                session,
                duration=max(0, decision.duration),
                duration_source=decision.source,
                validated=session.in_event.is_approved and session.out_event.is_approved,
            )
        else:
            session = replace(session, duration=0, duration_source=DurationSource.NONE, validated=False)

        return replace(session, flags=session_flags(session, day, schedule, self._tz))
