import os

# Canonical civil timezone for every day boundary
TIMEZONE = os.getenv("TIMEZONE", "Asia/Manila")

# Punching in up to this long after official start is on time
LATE_GRACE_MS = int(os.getenv("LATE_GRACE_MS", "60000"))

# Global default schedule; per-subject schedules override it as a whole
DEFAULT_SCHEDULE = {
    "am_in": os.getenv("DEFAULT_AM_IN", "08:00"),
    "am_out": os.getenv("DEFAULT_AM_OUT", "12:00"),
    "pm_in": os.getenv("DEFAULT_PM_IN", "13:00"),
    "pm_out": os.getenv("DEFAULT_PM_OUT", "17:00"),
    "ot_in": os.getenv("DEFAULT_OT_IN") or None,
    "ot_out": os.getenv("DEFAULT_OT_OUT") or None,
}

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True
