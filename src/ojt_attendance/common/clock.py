from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo

from .datetime_utils import local_date_of, to_ms


class Clock(Protocol):
    """Source of "now" for the engine.

    Note: Virtual close-outs depend on which day is "today"; the engine only
    ever asks a Clock, so results are reproducible in tests.
    """

    def now_ms(self) -> int:
        raise NotImplementedError

    def today(self, tz: ZoneInfo) -> date:
        raise NotImplementedError


class SystemClock:
    def now_ms(self) -> int:
        return to_ms(datetime.now().astimezone())

    def today(self, tz: ZoneInfo) -> date:
        return local_date_of(self.now_ms(), tz)


@dataclass(frozen=True)
class FixedClock:
    instant_ms: int

    @classmethod
    def at(cls, dt: datetime) -> "FixedClock":
        return cls(instant_ms=to_ms(dt))

    def now_ms(self) -> int:
        return self.instant_ms

    def today(self, tz: ZoneInfo) -> date:
        return local_date_of(self.instant_ms, tz)
