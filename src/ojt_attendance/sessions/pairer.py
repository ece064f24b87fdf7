from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Sequence

from ..core.constants import AUTO_CLOSE_MARKER, MS_PER_MINUTE, SLOT_EARLY_BUFFER_MS
from ..core.enums import SLOT_ORDER, PunchKind, ShiftKind
from ..punches.model import PunchEvent
from ..schedules.model import DaySchedule, ShiftWindow
from .model import Session

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DayPairing:
    day: date
    sessions: dict[ShiftKind, Optional[Session]]
    dropped_ins: tuple[PunchEvent, ...] = field(default_factory=tuple)

    def session(self, kind: ShiftKind) -> Optional[Session]:
        return self.sessions.get(kind)

    def present(self) -> list[Session]:
        return [s for s in (self.sessions.get(k) for k in SLOT_ORDER) if s is not None]


def accepts(window: ShiftWindow, ts: int, *, buffer_ms: int = SLOT_EARLY_BUFFER_MS) -> bool:
    """Whether an in-punch at ``ts`` may open this shift: ``[start - buffer, end]``.

    A zero-length shift still accepts ins around its start; the session it
    opens simply counts 0.
    """
    return window.start - buffer_ms <= ts <= window.end


def synthesize_close_out(in_event: PunchEvent, window: ShiftWindow) -> PunchEvent:
    """Virtual out at the shift's official end, or one minute after the in."""
    ts = window.end if window.end >= in_event.timestamp else in_event.timestamp + MS_PER_MINUTE
    return PunchEvent(
        id=f"{AUTO_CLOSE_MARKER}:{in_event.id if in_event.id is not None else in_event.timestamp}",
        subject_id=in_event.subject_id,
        kind=PunchKind.OUT,
        timestamp=ts,
        photo_ref=None,
        approval_status=None,
        validated_by=AUTO_CLOSE_MARKER,
    )


def assign_ins(
    events: Sequence[PunchEvent],
    schedule: DaySchedule,
    *,
    buffer_ms: int = SLOT_EARLY_BUFFER_MS,
) -> tuple[dict[ShiftKind, PunchEvent], list[PunchEvent]]:
    """Single chronological pass; each in fills the first empty slot (AM, PM, OT) that accepts it."""
    slots: dict[ShiftKind, PunchEvent] = {}
    dropped: list[PunchEvent] = []

    for e in sorted((e for e in events if e.kind == PunchKind.IN), key=lambda e: e.timestamp):
        kind = next(
            (k for k in SLOT_ORDER if k not in slots and accepts(schedule.window(k), e.timestamp, buffer_ms=buffer_ms)),
            None,
        )
        if kind is None:
            dropped.append(e)
            continue
        slots[kind] = e

    return slots, dropped


def match_outs(
    events: Sequence[PunchEvent],
    slots: dict[ShiftKind, PunchEvent],
) -> dict[ShiftKind, PunchEvent]:
    """Give each filled slot the last out between its in and the next slot's in."""
    outs = sorted((e for e in events if e.kind == PunchKind.OUT), key=lambda e: e.timestamp)
    filled = sorted(slots.items(), key=lambda kv: kv[1].timestamp)
    consumed: set[int] = set()
    matched: dict[ShiftKind, PunchEvent] = {}

    for i, (kind, in_event) in enumerate(filled):
        bound = filled[i + 1][1].timestamp if i + 1 < len(filled) else None
        candidates = [
            idx
            for idx, o in enumerate(outs)
            if idx not in consumed
            and o.timestamp > in_event.timestamp
            and (bound is None or o.timestamp < bound)
        ]
        if not candidates:
            continue
        # Duplicate taps: the final one is authoritative.
        pick = candidates[-1]
        consumed.add(pick)
        matched[kind] = outs[pick]

    return matched


def pair_day(
    day: date,
    events: Sequence[PunchEvent],
    schedule: DaySchedule,
    *,
    today: date,
    buffer_ms: int = SLOT_EARLY_BUFFER_MS,
) -> DayPairing:
    """Rebuild up to three sessions (AM, PM, OT) from one day's punches.

    Days before ``today`` get a virtual close-out for every unterminated
    session; on ``today`` an unterminated session stays open.
    """
    slots, dropped = assign_ins(events, schedule, buffer_ms=buffer_ms)
    for e in dropped:
        logger.debug("Dropping stray in-punch %r at %s on %s: no open shift window", e.id, e.timestamp, day)

    matched = match_outs(events, slots)

    sessions: dict[ShiftKind, Optional[Session]] = {}
    for kind in SLOT_ORDER:
        in_event = slots.get(kind)
        if in_event is None:
            sessions[kind] = None
            continue

        out_event = matched.get(kind)
        if out_event is None and day < today:
            out_event = synthesize_close_out(in_event, schedule.window(kind))
        sessions[kind] = Session(kind=kind, in_event=in_event, out_event=out_event)

    return DayPairing(day=day, sessions=sessions, dropped_ins=tuple(dropped))
