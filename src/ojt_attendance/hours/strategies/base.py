from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from zoneinfo import ZoneInfo

from ...core.enums import DurationSource
from ...schedules.model import DaySchedule
from ...sessions.model import Session


@dataclass(frozen=True)
class DurationDecision:
    duration: int
    source: DurationSource


class DurationStrategy(ABC):
    """Strategy Pattern: encapsulate how a completed session's duration is decided."""

    @abstractmethod
    def decide(self, *, session: Session, day: date, schedule: DaySchedule, tz: ZoneInfo) -> DurationDecision:
        raise NotImplementedError
