from __future__ import annotations

from datetime import date, datetime, time, timedelta
from zoneinfo import ZoneInfo


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def local_midnight(day: date, tz: ZoneInfo) -> datetime:
    return datetime.combine(day, time(0, 0), tzinfo=tz)


def anchor_ms(day: date, hour: int, minute: int, tz: ZoneInfo, *, second: int = 0) -> int:
    """Epoch ms of ``hour:minute`` on ``day`` in the civil timezone ``tz``.

    Note: wall-clock arithmetic, so an hour past 23 rolls into the next day.
    """
    dt = local_midnight(day, tz) + timedelta(hours=hour, minutes=minute, seconds=second)
    return to_ms(dt)


def to_ms(dt: datetime) -> int:
    return int(round(dt.timestamp() * 1000))


def from_ms(ts: int, tz: ZoneInfo) -> datetime:
    return datetime.fromtimestamp(ts / 1000, tz=tz)


def local_date_of(ts: int, tz: ZoneInfo) -> date:
    """Civil calendar date of an epoch-ms instant."""
    return from_ms(ts, tz).date()


def format_clock(ts: int | None, tz: ZoneInfo, fmt: str = "%H:%M") -> str:
    if ts is None:
        return "-"
    return from_ms(ts, tz).strftime(fmt)
