from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import SLOT_ORDER, ShiftKind
from ..schedules.model import DaySchedule
from ..sessions.model import Session


@dataclass(frozen=True)
class DayRecord:
    """Read-model of one day: the three shift slots and their totals (ms)."""

    date: date
    am: Optional[Session]
    pm: Optional[Session]
    ot: Optional[Session]
    total: int
    validated_total: int
    pending_total: int
    schedule: Optional[DaySchedule] = None

    @property
    def sessions(self) -> tuple[Optional[Session], Optional[Session], Optional[Session]]:
        return (self.am, self.pm, self.ot)

    def session(self, kind: ShiftKind) -> Optional[Session]:
        return dict(zip(SLOT_ORDER, self.sessions))[kind]

    def as_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "sessions": list(self.sessions),
            "total": self.total,
            "validatedTotal": self.validated_total,
            "pendingTotal": self.pending_total,
        }


@dataclass(frozen=True)
class RangeSummary:
    days: int
    total: int
    validated_total: int
    pending_total: int
    target_ms: Optional[int] = None

    @property
    def remaining_ms(self) -> Optional[int]:
        if self.target_ms is None:
            return None
        return max(0, self.target_ms - self.validated_total)

    @property
    def progress_percent(self) -> Optional[float]:
        """Validated hours against the target, capped at 100."""
        if not self.target_ms:
            return None
        return round(min(100.0, self.validated_total * 100.0 / self.target_ms), 2)
