from __future__ import annotations

import logging
from collections import OrderedDict
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Union
from zoneinfo import ZoneInfo

from ..common.datetime_utils import local_date_of
from .model import PunchEvent

logger = logging.getLogger(__name__)

PunchLike = Union[PunchEvent, Mapping[str, Any]]


def coerce_events(rows: Iterable[PunchLike], tz: Optional[ZoneInfo] = None) -> list[PunchEvent]:
    """Accept domain events or raw collaborator rows; unusable rows are skipped."""
    events: list[PunchEvent] = []
    for row in rows:
        if isinstance(row, PunchEvent):
            events.append(row)
            continue
        event = PunchEvent.from_mapping(row, tz)
        if event is not None:
            events.append(event)
    return events


def dedupe(events: Iterable[PunchEvent]) -> list[PunchEvent]:
    """Drop repeated rows; the first occurrence of a key wins."""
    seen: set[tuple] = set()
    out: list[PunchEvent] = []
    for e in events:
        key = e.dedupe_key
        if key in seen:
            continue
        seen.add(key)
        out.append(e)
    return out


def is_attendance(event: PunchEvent) -> bool:
    return not event.is_authorization_marker and not event.is_rejected


def group_by_day(events: Iterable[PunchEvent], tz: ZoneInfo) -> "OrderedDict[date, list[PunchEvent]]":
    """Bucket events by civil date, each bucket sorted by timestamp, days ascending."""
    buckets: dict[date, list[PunchEvent]] = {}
    for e in events:
        buckets.setdefault(local_date_of(e.timestamp, tz), []).append(e)

    grouped: "OrderedDict[date, list[PunchEvent]]" = OrderedDict()
    for day in sorted(buckets):
        grouped[day] = sorted(buckets[day], key=lambda e: e.timestamp)
    return grouped


def normalize_punch_log(
    rows: Iterable[PunchLike],
    tz: ZoneInfo,
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> "OrderedDict[date, list[PunchEvent]]":
    """Dedupe, filter and group one subject's punch rows by day.

    ``start``/``end`` bound the civil dates kept (inclusive).
    """
    events = dedupe(coerce_events(rows, tz))
    kept = [e for e in events if is_attendance(e)]
    if len(kept) != len(events):
        logger.debug("Filtered %d rejected/marker rows", len(events) - len(kept))

    grouped = group_by_day(kept, tz)
    if start is None and end is None:
        return grouped

    return OrderedDict(
        (day, items)
        for day, items in grouped.items()
        if (start is None or day >= start) and (end is None or day <= end)
    )
