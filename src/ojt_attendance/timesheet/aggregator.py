from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..core.constants import MS_PER_HOUR
from ..schedules.model import DaySchedule
from ..sessions.model import Session
from .model import DayRecord, RangeSummary


def build_day_record(
    day: date,
    am: Optional[Session],
    pm: Optional[Session],
    ot: Optional[Session],
    *,
    schedule: Optional[DaySchedule] = None,
) -> DayRecord:
    sessions = [s for s in (am, pm, ot) if s is not None]
    total = sum(s.duration for s in sessions)
    validated_total = sum(s.duration for s in sessions if s.validated)
    return DayRecord(
        date=day,
        am=am,
        pm=pm,
        ot=ot,
        total=total,
        validated_total=validated_total,
        pending_total=total - validated_total,
        schedule=schedule,
    )


def summarize(records: Iterable[DayRecord], *, target_hours: Optional[float] = None) -> RangeSummary:
    items: Sequence[DayRecord] = list(records)
    total = sum(r.total for r in items)
    validated_total = sum(r.validated_total for r in items)
    target_ms = int(round(target_hours * MS_PER_HOUR)) if target_hours and target_hours > 0 else None
    return RangeSummary(
        days=len(items),
        total=total,
        validated_total=validated_total,
        pending_total=total - validated_total,
        target_ms=target_ms,
    )
