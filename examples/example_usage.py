"""Example: run the hours engine on a sample punch log.

No web or database: punch rows are plain dicts, as a collaborator would return them.
"""

from datetime import datetime
from zoneinfo import ZoneInfo

from ojt_attendance.common.clock import FixedClock
from ojt_attendance.main import create_container

MANILA = ZoneInfo("Asia/Manila")


def _ms(y, mo, d, h, mi):
    return int(datetime(y, mo, d, h, mi, tzinfo=MANILA).timestamp() * 1000)


SAMPLE_LOG = [
    {"id": 1, "type": "in", "ts": _ms(2026, 1, 19, 8, 39), "status": "approved"},
    {"id": 2, "type": "out", "ts": _ms(2026, 1, 19, 12, 42), "status": "approved"},
    {"id": 3, "type": "in", "ts": _ms(2026, 1, 19, 12, 45), "status": "approved"},
    {"id": 4, "type": "out", "ts": _ms(2026, 1, 19, 17, 3), "status": "pending"},
    {"id": 5, "type": "in", "ts": _ms(2026, 1, 20, 9, 2), "status": "approved"},
    {"id": 6, "type": "out", "ts": _ms(2026, 1, 20, 12, 0), "status": "approved"},
    # forgot to time out: the shift is closed automatically at 12:00
    {"id": 7, "type": "in", "ts": _ms(2026, 1, 21, 9, 5)},
]


def main():
    container = create_container(clock=FixedClock.at(datetime(2026, 2, 1, 10, 0, tzinfo=MANILA)))

    records, summary = container.timesheet_service.build_range(
        SAMPLE_LOG, start="2026-01-01", end="2026-01-31", target_hours=486
    )
    for row in container.timesheet_service.history_rows(records):
        print(row)

    report = container.report_service.build_report(records, target_hours=486)
    print(report.frame.to_string(index=False))
    print(report.summary)
    print(f"progress: {summary.progress_percent}%")


if __name__ == "__main__":
    main()
