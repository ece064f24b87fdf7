TIMEZONE = "Asia/Manila"

LATE_GRACE_MS = 60000

DEFAULT_SCHEDULE = {
    "am_in": "09:00",
    "am_out": "12:00",
    "pm_in": "13:00",
    "pm_out": "17:00",
}

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True
