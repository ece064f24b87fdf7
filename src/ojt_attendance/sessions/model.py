from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import DurationSource, SessionFlag, ShiftKind
from ..punches.model import PunchEvent


@dataclass(frozen=True)
class Lateness:
    is_late: bool
    late_minutes: int
    official_in: int


@dataclass(frozen=True)
class Session:
    """One shift slot of a day: the in-event and, when closed, its out-event.

    ``duration`` and ``validated`` stay at their defaults until the hours
    calculator has run; every step returns a new Session.
    """

    kind: ShiftKind
    in_event: PunchEvent
    out_event: Optional[PunchEvent] = None
    duration: int = 0
    validated: bool = False
    duration_source: DurationSource = DurationSource.NONE
    lateness: Optional[Lateness] = None
    flags: tuple[SessionFlag, ...] = ()

    @property
    def is_complete(self) -> bool:
        return self.out_event is not None

    @property
    def is_auto_closed(self) -> bool:
        return self.out_event is not None and self.out_event.is_virtual

    @property
    def is_late(self) -> bool:
        return bool(self.lateness and self.lateness.is_late)
