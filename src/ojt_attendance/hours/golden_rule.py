from __future__ import annotations

import logging

from ..schedules.model import ShiftWindow

logger = logging.getLogger(__name__)


def overlap_ms(student_in: int, student_out: int, official_in: int, official_out: int) -> int:
    """Worked time that falls inside the official window.

    ``max(0, min(student_out, official_out) - max(student_in, official_in))``:
    time outside the window never counts and disjoint intervals give 0.
    """
    return max(0, min(student_out, official_out) - max(student_in, official_in))


def clamped_duration(student_in: int, student_out: int, window: ShiftWindow, *, label: str = "") -> int:
    """Overlap against a shift window, zero for unusable windows.

    An inverted window (start after end) is an anomaly and is logged; a
    zero-length one just means the shift was not scheduled.
    """
    if window.is_inverted:
        logger.warning(
            "Inverted shift window %s: start=%s end=%s; counting 0",
            label or "?",
            window.start,
            window.end,
        )
        return 0
    if not window.is_configured:
        return 0
    return overlap_ms(student_in, student_out, window.start, window.end)
