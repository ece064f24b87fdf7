from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..core.enums import ShiftKind

_CONFIG_KEYS = {
    "am_in": ("am_in", "amIn"),
    "am_out": ("am_out", "amOut"),
    "pm_in": ("pm_in", "pmIn"),
    "pm_out": ("pm_out", "pmOut"),
    "ot_in": ("ot_in", "otIn"),
    "ot_out": ("ot_out", "otOut"),
}


@dataclass(frozen=True)
class ScheduleConfig:
    """Time-of-day configuration for the three shifts, as typed by a coordinator."""

    am_in: str = ""
    am_out: str = ""
    pm_in: str = ""
    pm_out: str = ""
    ot_in: Optional[str] = None
    ot_out: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> Optional["ScheduleConfig"]:
        if not data:
            return None
        values: dict[str, Optional[str]] = {}
        for field_name, keys in _CONFIG_KEYS.items():
            raw = next((data[k] for k in keys if data.get(k) not in (None, "")), None)
            values[field_name] = str(raw).strip() if raw is not None else None
        return cls(
            am_in=values["am_in"] or "",
            am_out=values["am_out"] or "",
            pm_in=values["pm_in"] or "",
            pm_out=values["pm_out"] or "",
            ot_in=values["ot_in"],
            ot_out=values["ot_out"],
        )

    @property
    def is_empty(self) -> bool:
        return not any((self.am_in, self.am_out, self.pm_in, self.pm_out, self.ot_in, self.ot_out))

    @property
    def has_static_overtime(self) -> bool:
        return bool(self.ot_in) and bool(self.ot_out)


@dataclass(frozen=True)
class OvertimeAuthorization:
    """Per-date overtime window granted to one subject, already absolute."""

    start: int
    end: int

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "OvertimeAuthorization":
        start = data.get("start", data.get("overtime_start"))
        end = data.get("end", data.get("overtime_end"))
        return cls(start=int(start), end=int(end))


@dataclass(frozen=True)
class ShiftWindow:
    start: int
    end: int

    @property
    def duration(self) -> int:
        return max(0, self.end - self.start)

    @property
    def is_inverted(self) -> bool:
        return self.start > self.end

    @property
    def is_configured(self) -> bool:
        """A zero-length window means the shift does not run that day."""
        return self.end > self.start


@dataclass(frozen=True)
class DaySchedule:
    am_in: int
    am_out: int
    pm_in: int
    pm_out: int
    ot_start: int
    ot_end: int

    def window(self, kind: ShiftKind) -> ShiftWindow:
        if kind == ShiftKind.AM:
            return ShiftWindow(self.am_in, self.am_out)
        if kind == ShiftKind.PM:
            return ShiftWindow(self.pm_in, self.pm_out)
        return ShiftWindow(self.ot_start, self.ot_end)

    def as_dict(self) -> dict[str, int]:
        return {
            "amIn": self.am_in,
            "amOut": self.am_out,
            "pmIn": self.pm_in,
            "pmOut": self.pm_out,
            "otStart": self.ot_start,
            "otEnd": self.ot_end,
        }
