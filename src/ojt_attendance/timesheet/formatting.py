from __future__ import annotations

from ..core.constants import MS_PER_MINUTE


def round_to_minutes(ms: int) -> int:
    """Nearest whole minute, halves rounded up (no banker's rounding)."""
    return (max(0, int(ms)) + MS_PER_MINUTE // 2) // MS_PER_MINUTE


def format_hours(ms: int) -> str:
    """``10_680_000`` -> ``"2h 58m"``; rounds to the nearest minute first."""
    total_minutes = round_to_minutes(ms)
    return f"{total_minutes // 60}h {total_minutes % 60}m"


def format_hhmm(ms: int) -> str:
    total_minutes = round_to_minutes(ms)
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"
