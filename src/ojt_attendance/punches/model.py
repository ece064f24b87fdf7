from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Hashable, Mapping, Optional
from zoneinfo import ZoneInfo

from ..core.constants import AUTO_CLOSE_MARKERS, DEFAULT_TIMEZONE, OT_AUTH_PREFIX
from ..core.enums import ApprovalStatus, PunchKind

logger = logging.getLogger(__name__)


def _first(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = row.get(key)
        if value not in (None, ""):
            return value
    return None


def _datetime_ms(dt: datetime, tz: ZoneInfo) -> int:
    # Naive wall-clock values belong to the civil timezone, never the host's.
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=tz)
    return int(round(dt.timestamp() * 1000))


def _to_epoch_ms(value: Any, tz: ZoneInfo) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        if isinstance(value, datetime):
            ms = _datetime_ms(value, tz)
        elif isinstance(value, (int, float)):
            if not math.isfinite(value):
                return None
            ms = int(value)
        else:
            text = str(value).strip()
            if text.lstrip("-").isdigit():
                ms = int(text)
            else:
                ms = _datetime_ms(datetime.fromisoformat(text.replace("Z", "+00:00")), tz)
        # Must land on a representable calendar date.
        datetime.fromtimestamp(ms / 1000, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return ms


def _to_status(value: Any) -> Optional[ApprovalStatus]:
    if value is None:
        return None
    try:
        return ApprovalStatus(str(value).strip().lower())
    except ValueError:
        return None


def _to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        logger.warning("Ignoring non-finite hours value %r", value)
        return None
    return number


@dataclass(frozen=True)
class PunchEvent:
    """One time-in or time-out tap by a student, as stored by the portal."""

    id: Optional[Hashable]
    subject_id: Optional[Hashable]
    kind: PunchKind
    timestamp: int
    photo_ref: Optional[str] = None
    approval_status: Optional[ApprovalStatus] = None
    validated_by: Optional[str] = None
    validated_hours_override: Optional[float] = None
    official_time_in_snapshot: Optional[str] = None
    official_time_out_snapshot: Optional[str] = None

    @classmethod
    def from_mapping(cls, row: Mapping[str, Any], tz: Optional[ZoneInfo] = None) -> Optional["PunchEvent"]:
        """Adapt a collaborator row; ``None`` when the row cannot be used.

        Timestamps without an offset are read as wall-clock time in ``tz``
        (the canonical civil timezone when omitted).
        """
        kind_raw = _first(row, "kind", "type")
        try:
            kind = PunchKind(str(kind_raw).strip().lower())
        except ValueError:
            logger.warning("Skipping punch row %r: unknown kind %r", row.get("id"), kind_raw)
            return None

        ts = _to_epoch_ms(_first(row, "timestamp", "ts", "logged_at"), tz or ZoneInfo(DEFAULT_TIMEZONE))
        if ts is None:
            logger.warning("Skipping punch row %r: no usable timestamp", row.get("id"))
            return None

        validated_by = _first(row, "validated_by", "validatedBy")
        return cls(
            id=row.get("id"),
            subject_id=_first(row, "subject_id", "subjectId", "student_id", "idnumber"),
            kind=kind,
            timestamp=ts,
            photo_ref=_first(row, "photo_ref", "photoRef", "photourl"),
            approval_status=_to_status(_first(row, "approval_status", "approvalStatus", "status")),
            validated_by=str(validated_by) if validated_by is not None else None,
            validated_hours_override=_to_float(
                _first(row, "validated_hours_override", "validatedHoursOverride", "validated_hours")
            ),
            official_time_in_snapshot=_first(row, "official_time_in_snapshot", "officialTimeInSnapshot", "official_time_in"),
            official_time_out_snapshot=_first(
                row, "official_time_out_snapshot", "officialTimeOutSnapshot", "official_time_out"
            ),
        )

    @property
    def is_virtual(self) -> bool:
        return self.validated_by in AUTO_CLOSE_MARKERS

    @property
    def is_authorization_marker(self) -> bool:
        return bool(self.photo_ref) and str(self.photo_ref).startswith(OT_AUTH_PREFIX)

    @property
    def is_rejected(self) -> bool:
        return self.approval_status == ApprovalStatus.REJECTED

    @property
    def is_approved(self) -> bool:
        """Approved status, or a supervisor sign-off on a row not rejected.

        Synthesized close-outs are never approved.
        """
        if self.is_virtual or self.is_rejected:
            return False
        if self.approval_status == ApprovalStatus.APPROVED:
            return True
        return bool(self.validated_by)

    @property
    def has_snapshot(self) -> bool:
        return bool(self.official_time_in_snapshot) and bool(self.official_time_out_snapshot)

    @property
    def dedupe_key(self) -> tuple:
        if self.id is not None and self.id != "":
            return ("id", self.id)
        return ("ts", self.timestamp, self.kind.value)
