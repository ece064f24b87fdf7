from __future__ import annotations

import logging
import math
from datetime import date
from zoneinfo import ZoneInfo

from ...core.constants import MS_PER_HOUR
from ...core.enums import DurationSource
from ...schedules.model import DaySchedule
from ...sessions.model import Session
from .base import DurationDecision, DurationStrategy

logger = logging.getLogger(__name__)


class FinalizedOverrideStrategy(DurationStrategy):
    """Hours fixed by an authority on the out-event; no clock math."""

    def decide(self, *, session: Session, day: date, schedule: DaySchedule, tz: ZoneInfo) -> DurationDecision:
        hours = session.out_event.validated_hours_override if session.out_event else None
        if hours is None or not math.isfinite(hours):
            logger.warning("Unusable finalized hours %r on %r; counting 0", hours, session.out_event.id)
            return DurationDecision(duration=0, source=DurationSource.FINALIZED)
        ms = int(round(hours * MS_PER_HOUR))
        if ms < 0:
            logger.warning("Negative finalized hours %s on %r; counting 0", hours, session.out_event.id)
            ms = 0
        return DurationDecision(duration=ms, source=DurationSource.FINALIZED)
