from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(
    r"^\s*(?P<h>\d{1,2})(?::(?P<m>\d{1,2}))?(?::(?P<s>\d{1,2}))?\s*(?P<suffix>[ap]\.?\s*m\.?)?\s*$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class TimeOfDay:
    hour: int
    minute: int

    @property
    def minutes(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


MIDNIGHT = TimeOfDay(0, 0)


def parse_time_of_day(raw: Optional[str], pm_context: bool = False) -> TimeOfDay:
    """Parse a free-form time string into hour/minute.

    Rules, in order:

    * an explicit AM/PM suffix is honoured (``12 AM`` is midnight);
    * ``HH:MM:SS``, a leading zero (``08:00``) or an hour above 12 means
      literal 24-hour time;
    * otherwise, in a PM context (afternoon/overtime fields), hours 1-6 are
      read as afternoon hours (``1:00`` -> 13:00).

    Never raises: anything unparseable or out of range yields 00:00.
    """
    if raw is None:
        return MIDNIGHT

    text = str(raw).strip()
    if not text:
        return MIDNIGHT

    match = _TIME_RE.match(text)
    if not match:
        logger.debug("Unparseable time string %r, using 00:00", raw)
        return MIDNIGHT

    hour_text = match.group("h")
    hour = int(hour_text)
    minute = int(match.group("m") or 0)
    suffix = match.group("suffix")

    if suffix:
        is_pm = suffix.strip().lower().startswith("p")
        if is_pm and hour < 12:
            hour += 12
        elif not is_pm and hour == 12:
            hour = 0
    else:
        literal = match.group("s") is not None or hour_text.startswith("0") or hour > 12
        if not literal and pm_context and 1 <= hour <= 6:
            hour += 12

    if hour > 23 or minute > 59:
        logger.debug("Out of range time string %r, using 00:00", raw)
        return MIDNIGHT

    return TimeOfDay(hour, minute)


def normalize_time_string(raw: Optional[str]) -> Optional[str]:
    """``"8:5:00"`` -> ``"08:05"``; ``None`` when there is no ``H:M`` shape."""
    if not raw:
        return None
    parts = str(raw).split(":")
    if len(parts) < 2:
        return None
    h, m = parts[0].strip(), parts[1].strip()[:2]
    if not h.isdigit() or not m.isdigit():
        return None
    return f"{h.zfill(2)}:{m.zfill(2)}"


def time_string_to_minutes(raw: Optional[str]) -> int:
    t = normalize_time_string(raw)
    if not t:
        return 0
    h, m = t.split(":")
    return int(h) * 60 + int(m)


def format_display_time(raw: Optional[str]) -> str:
    """24-hour ``"13:05"`` -> ``"1:05 PM"``; empty string for garbage."""
    t = normalize_time_string(raw)
    if not t:
        return ""
    h, m = (int(x) for x in t.split(":"))
    suffix = "PM" if h >= 12 else "AM"
    if h == 0:
        h = 12
    elif h > 12:
        h -= 12
    return f"{h}:{m:02d} {suffix}"
