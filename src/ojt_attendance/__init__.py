"""OJT Attendance engine package.

This package is organized by feature modules (schedules, punches, sessions,
hours, timesheet, ...) around one pure pipeline: raw punch rows in, per-day
session records and validated/pending totals out. Persistence, transport and
UI live in the surrounding portal.
"""
