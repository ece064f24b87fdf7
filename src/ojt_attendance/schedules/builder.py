from __future__ import annotations

import logging
from datetime import date
from typing import Optional
from zoneinfo import ZoneInfo

from ..common.datetime_utils import anchor_ms
from ..core.constants import CROSSING_STEP_MS
from ..timeparse.parser import parse_time_of_day
from .model import DaySchedule, OvertimeAuthorization, ScheduleConfig

logger = logging.getLogger(__name__)


def _anchor(day: date, raw: Optional[str], pm_context: bool, tz: ZoneInfo) -> int:
    t = parse_time_of_day(raw, pm_context)
    return anchor_ms(day, t.hour, t.minute, tz)


def _correct_crossing(start: int, end: int) -> int:
    # "12:00" typed for noon-as-midnight or "1:00" for 13:00; twice covers 24h wrap.
    if end < start:
        end += CROSSING_STEP_MS
    if end < start:
        end += CROSSING_STEP_MS
    return end


def build_day_schedule(
    day: date,
    config: ScheduleConfig,
    tz: ZoneInfo,
    overtime: Optional[OvertimeAuthorization] = None,
) -> DaySchedule:
    """Turn a time-of-day config into absolute shift boundaries for ``day``.

    Overtime comes from, in order: the per-date authorization verbatim, the
    static ``ot_in``/``ot_out`` pair (never starting before PM ends), or
    nothing (a zero-length window at PM end).
    """
    am_in = _anchor(day, config.am_in, False, tz)
    am_out = _correct_crossing(am_in, _anchor(day, config.am_out, False, tz))

    pm_in = _anchor(day, config.pm_in, True, tz)
    pm_out = _correct_crossing(pm_in, _anchor(day, config.pm_out, True, tz))

    if overtime is not None:
        ot_start, ot_end = int(overtime.start), int(overtime.end)
        if ot_start > ot_end:
            logger.warning("Inverted overtime authorization on %s: start=%s end=%s", day, ot_start, ot_end)
    elif config.has_static_overtime:
        ot_start = _anchor(day, config.ot_in, True, tz)
        ot_end = _correct_crossing(ot_start, _anchor(day, config.ot_out, True, tz))
        if ot_start < pm_out:
            ot_start = pm_out
        if ot_end < ot_start:
            ot_end = ot_start
    else:
        ot_start = ot_end = pm_out

    return DaySchedule(
        am_in=am_in,
        am_out=am_out,
        pm_in=pm_in,
        pm_out=pm_out,
        ot_start=ot_start,
        ot_end=ot_end,
    )
