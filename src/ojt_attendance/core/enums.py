from __future__ import annotations

from enum import Enum


class PunchKind(str, Enum):
    """Punch direction: time-in or time-out."""

    IN = "in"
    OUT = "out"


class ApprovalStatus(str, Enum):
    """Approval state a supervisor assigns to a punch."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    ADJUSTED = "adjusted"


class ShiftKind(str, Enum):
    """Shift slot of a day, in the priority order used to place time-ins."""

    AM = "am"
    PM = "pm"
    OT = "ot"


class SessionFlag(str, Enum):
    LATE = "LATE"
    EARLY_OUT = "EARLY_OUT"
    AUTO_CLOSED = "AUTO_CLOSED"
    MISSED_LUNCH_PUNCH = "MISSED_LUNCH_PUNCH"


class DurationSource(str, Enum):
    """Which rule produced a session's duration."""

    FINALIZED = "FINALIZED"
    SNAPSHOT = "SNAPSHOT"
    LIVE = "LIVE"
    NONE = "NONE"


SLOT_ORDER = (ShiftKind.AM, ShiftKind.PM, ShiftKind.OT)
