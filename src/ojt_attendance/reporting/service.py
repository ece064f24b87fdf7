from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional
from zoneinfo import ZoneInfo

import pandas as pd

from ..common.datetime_utils import format_clock
from ..sessions.model import Session
from ..timesheet.aggregator import summarize
from ..timesheet.formatting import format_hhmm, format_hours, round_to_minutes
from ..timesheet.model import DayRecord

COLUMNS = [
    "date",
    "am_in",
    "am_out",
    "pm_in",
    "pm_out",
    "ot_in",
    "ot_out",
    "total_minutes",
    "validated_minutes",
    "pending_minutes",
    "total",
    "validated",
    "pending",
    "flags",
]


@dataclass(frozen=True)
class ReportData:
    frame: pd.DataFrame
    summary: dict


class TimesheetReportService:
    """Daily timesheet table for one subject, ready for export by the portal."""

    def __init__(self, tz: ZoneInfo):
        self._tz = tz

    def _times(self, s: Optional[Session]) -> tuple[Optional[str], Optional[str]]:
        if s is None:
            return None, None
        time_in = format_clock(s.in_event.timestamp, self._tz)
        time_out = format_clock(s.out_event.timestamp, self._tz) if s.out_event is not None else None
        return time_in, time_out

    def build_report(self, records: Iterable[DayRecord], *, target_hours: Optional[float] = None) -> ReportData:
        items = sorted(records, key=lambda r: r.date)

        rows: list[dict] = []
        for r in items:
            am_in, am_out = self._times(r.am)
            pm_in, pm_out = self._times(r.pm)
            ot_in, ot_out = self._times(r.ot)
            flags = sorted({f.value for s in r.sessions if s is not None for f in s.flags})
            rows.append(
                {
                    "date": r.date,
                    "am_in": am_in,
                    "am_out": am_out,
                    "pm_in": pm_in,
                    "pm_out": pm_out,
                    "ot_in": ot_in,
                    "ot_out": ot_out,
                    "total_minutes": round_to_minutes(r.total),
                    "validated_minutes": round_to_minutes(r.validated_total),
                    "pending_minutes": round_to_minutes(r.pending_total),
                    "total": format_hhmm(r.total),
                    "validated": format_hhmm(r.validated_total),
                    "pending": format_hhmm(r.pending_total),
                    "flags": ", ".join(flags),
                }
            )

        df = pd.DataFrame(rows, columns=COLUMNS)
        if not df.empty:
            df["date"] = pd.to_datetime(df["date"]).dt.strftime("%Y-%m-%d")

        totals = summarize(items, target_hours=target_hours)
        summary = {
            "days": totals.days,
            "total_minutes": round_to_minutes(totals.total),
            "total_hours": format_hours(totals.total),
            "validated_hours": format_hours(totals.validated_total),
            "pending_hours": format_hours(totals.pending_total),
            "late_days": int(df["flags"].str.contains("LATE").sum()) if not df.empty else 0,
            "progress_percent": totals.progress_percent,
            "remaining_hours": (
                format_hours(totals.remaining_ms) if totals.remaining_ms is not None else None
            ),
        }
        return ReportData(frame=df, summary=summary)

    def minutes_by_weekday(self, report: ReportData) -> pd.Series:
        """Total minutes per weekday name, for progress charts."""
        if report.frame.empty:
            return pd.Series(dtype="int64")
        weekdays = pd.to_datetime(report.frame["date"]).dt.day_name()
        return report.frame.groupby(weekdays)["total_minutes"].sum()
