from __future__ import annotations

from dataclasses import dataclass

from ..sessions.model import Session
from .strategies.base import DurationStrategy
from .strategies.finalized_strategy import FinalizedOverrideStrategy
from .strategies.live_strategy import LiveScheduleStrategy
from .strategies.snapshot_strategy import SnapshotStrategy


@dataclass
class DurationStrategyFactory:
    """Factory Pattern: finalized override > frozen snapshot > live schedule."""

    def for_session(self, session: Session) -> DurationStrategy:
        out = session.out_event
        if out is not None and out.validated_hours_override is not None:
            return FinalizedOverrideStrategy()
        if out is not None and out.has_snapshot:
            return SnapshotStrategy()
        return LiveScheduleStrategy()
