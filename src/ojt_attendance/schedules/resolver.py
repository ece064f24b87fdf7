from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence, Union
from zoneinfo import ZoneInfo

from ..core.constants import FALLBACK_SCHEDULE
from ..timeparse.parser import normalize_time_string, time_string_to_minutes
from .builder import build_day_schedule
from .model import DaySchedule, OvertimeAuthorization, ScheduleConfig

logger = logging.getLogger(__name__)

ConfigLike = Union[ScheduleConfig, Mapping[str, Any], None]
OvertimeLike = Union[OvertimeAuthorization, Mapping[str, Any], None]

FALLBACK_CONFIG = ScheduleConfig(**FALLBACK_SCHEDULE)


def _as_config(value: ConfigLike) -> Optional[ScheduleConfig]:
    if value is None:
        return None
    if isinstance(value, ScheduleConfig):
        return None if value.is_empty else value
    config = ScheduleConfig.from_mapping(value)
    if config is None or config.is_empty:
        return None
    return config


def as_overtime(value: OvertimeLike) -> Optional[OvertimeAuthorization]:
    if value is None or isinstance(value, OvertimeAuthorization):
        return value
    try:
        return OvertimeAuthorization.from_mapping(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed overtime authorization %r", value)
        return None


def resolve_schedule_config(
    *,
    subject_config: ConfigLike = None,
    global_config: ConfigLike = None,
) -> ScheduleConfig:
    """Pick the one config that applies: subject override, global default, fallback.

    Configs are taken whole; a subject override is never merged field by field
    with the global default.
    """
    return _as_config(subject_config) or _as_config(global_config) or FALLBACK_CONFIG


def resolve_day_schedule(
    day: date,
    tz: ZoneInfo,
    *,
    subject_config: ConfigLike = None,
    global_config: ConfigLike = None,
    overtime: OvertimeLike = None,
) -> DaySchedule:
    """Concrete schedule for one subject and date.

    Precedence: per-day overtime authorization > per-subject schedule >
    global default > 08:00-12:00 / 13:00-17:00 fallback.
    """
    config = resolve_schedule_config(subject_config=subject_config, global_config=global_config)
    return build_day_schedule(day, config, tz, overtime=as_overtime(overtime))


def config_from_shift_rows(rows: Sequence[Mapping[str, Any]]) -> Optional[ScheduleConfig]:
    """Build a config from a collaborator's shift rows.

    Rows carry ``shift_name``, ``official_start`` and ``official_end``. Names
    containing ``am``/``morning`` and ``pm``/``afternoon`` pick the AM and PM
    rows, ``overtime``/``overtime shift`` the OT row; otherwise rows are taken
    in start-time order.
    """
    usable = [r for r in rows if r and (r.get("official_start") or r.get("official_end"))]
    if not usable:
        return None

    ordered = sorted(usable, key=lambda r: time_string_to_minutes(r.get("official_start")))

    def _name(row: Mapping[str, Any]) -> str:
        return str(row.get("shift_name") or "").strip().lower()

    def _find(match) -> Optional[Mapping[str, Any]]:
        return next((r for r in ordered if match(_name(r))), None)

    ot_row = _find(lambda n: n in ("overtime", "overtime shift"))
    am_row = _find(lambda n: "am" in n or "morning" in n)
    pm_row = _find(lambda n: "pm" in n or "afternoon" in n)
    if ot_row is not None and (ot_row is am_row or ot_row is pm_row):
        ot_row = None

    regular = [r for r in ordered if r is not ot_row]
    if am_row is None and regular:
        am_row = regular[0]
    if pm_row is None:
        pm_row = next((r for r in regular if r is not am_row), None)

    def _time(row: Optional[Mapping[str, Any]], key: str) -> Optional[str]:
        if row is None:
            return None
        return normalize_time_string(row.get(key))

    return ScheduleConfig(
        am_in=_time(am_row, "official_start") or "",
        am_out=_time(am_row, "official_end") or "",
        pm_in=_time(pm_row, "official_start") or "",
        pm_out=_time(pm_row, "official_end") or "",
        ot_in=_time(ot_row, "official_start"),
        ot_out=_time(ot_row, "official_end"),
    )
