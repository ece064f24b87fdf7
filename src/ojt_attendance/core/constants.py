"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE

# An "in" may be accepted this long before a shift's official start.
SLOT_EARLY_BUFFER_MS = 30 * MS_PER_MINUTE

# Punching in exactly one minute after official start is still on time.
DEFAULT_LATE_GRACE_MS = MS_PER_MINUTE

# Crossing correction step for windows typed in 12-hour form.
CROSSING_STEP_MS = 12 * MS_PER_HOUR

DEFAULT_TIMEZONE = "Asia/Manila"

FALLBACK_SCHEDULE = {
    "am_in": "08:00",
    "am_out": "12:00",
    "pm_in": "13:00",
    "pm_out": "17:00",
}

# validated_by value written on synthesized close-outs.
AUTO_CLOSE_MARKER = "SYSTEM_AUTO_CLOSE"

# Every validated_by value that marks a system close-out, including legacy rows.
AUTO_CLOSE_MARKERS = frozenset({AUTO_CLOSE_MARKER, "AUTO TIME OUT"})

# Overtime authorizations are stored as punch rows with this photo prefix.
OT_AUTH_PREFIX = "OT_AUTH:"
