from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Mapping, Optional, Union
from zoneinfo import ZoneInfo

from ..common.clock import Clock
from ..common.datetime_utils import format_clock, parse_iso_date
from ..core.constants import DEFAULT_LATE_GRACE_MS
from ..core.enums import SLOT_ORDER, SessionFlag, ShiftKind
from ..hours.calculator import HoursCalculator
from ..punches.normalizer import PunchLike, normalize_punch_log
from ..schedules.resolver import ConfigLike, OvertimeLike, resolve_day_schedule
from ..sessions.model import Session
from ..sessions.pairer import pair_day
from ..timeparse.parser import format_display_time
from .aggregator import build_day_record, summarize
from .formatting import format_hours
from .model import DayRecord, RangeSummary

logger = logging.getLogger(__name__)

OvertimeByDate = Mapping[Union[date, str], OvertimeLike]


class TimesheetService:
    """Runs the whole pipeline for one subject and date range.

    normalize -> resolve schedule -> pair -> compute -> aggregate. Pure: the
    only outside input is the injected clock's idea of "today".
    """

    def __init__(
        self,
        *,
        clock: Clock,
        tz: ZoneInfo,
        global_config: ConfigLike = None,
        grace_ms: int = DEFAULT_LATE_GRACE_MS,
        calculator: Optional[HoursCalculator] = None,
    ):
        self._clock = clock
        self._tz = tz
        self._global_config = global_config
        self._calculator = calculator or HoursCalculator(tz, grace_ms=grace_ms)

    @property
    def tz(self) -> ZoneInfo:
        return self._tz

    def _overtime_for(self, overtime: Optional[OvertimeByDate], day: date) -> OvertimeLike:
        if not overtime:
            return None
        if day in overtime:
            return overtime[day]
        return overtime.get(day.isoformat())

    def build_day_records(
        self,
        events: Iterable[PunchLike],
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        subject_config: ConfigLike = None,
        overtime: Optional[OvertimeByDate] = None,
    ) -> list[DayRecord]:
        today = self._clock.today(self._tz)
        grouped = normalize_punch_log(events, self._tz, start=start, end=end)

        records: list[DayRecord] = []
        for day, day_events in grouped.items():
            schedule = resolve_day_schedule(
                day,
                self._tz,
                subject_config=subject_config,
                global_config=self._global_config,
                overtime=self._overtime_for(overtime, day),
            )
            pairing = pair_day(day, day_events, schedule, today=today)

            computed: dict[ShiftKind, Optional[Session]] = {}
            for kind in SLOT_ORDER:
                s = pairing.session(kind)
                computed[kind] = self._calculator.compute_session(s, day=day, schedule=schedule) if s else None

            records.append(
                build_day_record(
                    day,
                    computed[ShiftKind.AM],
                    computed[ShiftKind.PM],
                    computed[ShiftKind.OT],
                    schedule=schedule,
                )
            )

        logger.debug("Built %d day records (today=%s)", len(records), today)
        return records

    def build_range(
        self,
        events: Iterable[PunchLike],
        *,
        start: Optional[Union[date, str]] = None,
        end: Optional[Union[date, str]] = None,
        subject_config: ConfigLike = None,
        overtime: Optional[OvertimeByDate] = None,
        target_hours: Optional[float] = None,
    ) -> tuple[list[DayRecord], RangeSummary]:
        if isinstance(start, str):
            start = parse_iso_date(start)
        if isinstance(end, str):
            end = parse_iso_date(end)
        records = self.build_day_records(
            events,
            start=start,
            end=end,
            subject_config=subject_config,
            overtime=overtime,
        )
        return records, summarize(records, target_hours=target_hours)

    def summarize(self, records: Iterable[DayRecord], *, target_hours: Optional[float] = None) -> RangeSummary:
        return summarize(records, target_hours=target_hours)

    def history_rows(self, records: Iterable[DayRecord]) -> list[dict]:
        """UI rows, newest day first."""
        rows = [self._to_ui(r) for r in records]
        rows.sort(key=lambda r: r["date"], reverse=True)
        return rows

    def _slot_times(self, s: Optional[Session]) -> tuple[str, str]:
        if s is None:
            return "-", "-"
        time_in = format_clock(s.in_event.timestamp, self._tz)
        if s.out_event is None:
            return time_in, "-"
        if s.is_auto_closed:
            return time_in, "AUTO"
        return time_in, format_clock(s.out_event.timestamp, self._tz)

    def _official(self, r: DayRecord, kind: ShiftKind) -> str:
        """Official hours of a slot in 12-hour form, e.g. ``"9:00 AM - 12:00 PM"``."""
        if r.schedule is None:
            return "-"
        window = r.schedule.window(kind)
        if not window.is_configured:
            return "-"
        start = format_display_time(format_clock(window.start, self._tz))
        end = format_display_time(format_clock(window.end, self._tz))
        return f"{start} - {end}"

    def _to_ui(self, r: DayRecord) -> dict:
        present = [s for s in r.sessions if s is not None]
        flags = {f for s in present for f in s.flags}

        if any(not s.is_complete for s in present):
            status, css = "In progress", "bg-info"
        elif SessionFlag.AUTO_CLOSED in flags:
            status, css = "Auto time out", "bg-secondary"
        elif SessionFlag.LATE in flags:
            status, css = "Late", "bg-danger"
        else:
            status, css = "On time", "bg-success"

        am_in, am_out = self._slot_times(r.am)
        pm_in, pm_out = self._slot_times(r.pm)
        ot_in, ot_out = self._slot_times(r.ot)
        return {
            "date": r.date.strftime("%Y-%m-%d"),
            "am_in": am_in,
            "am_out": am_out,
            "pm_in": pm_in,
            "pm_out": pm_out,
            "ot_in": ot_in,
            "ot_out": ot_out,
            "am_official": self._official(r, ShiftKind.AM),
            "pm_official": self._official(r, ShiftKind.PM),
            "ot_official": self._official(r, ShiftKind.OT),
            "total": format_hours(r.total),
            "validated": format_hours(r.validated_total),
            "pending": format_hours(r.pending_total),
            "late_minutes": sum(s.lateness.late_minutes for s in present if s.lateness),
            "flags": sorted(f.value for f in flags),
            "status": status,
            "css_class": css,
        }
