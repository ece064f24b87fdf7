from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .common.clock import Clock, SystemClock
from .common.validators import require_non_empty, require_non_negative
from .core.constants import DEFAULT_LATE_GRACE_MS, DEFAULT_TIMEZONE
from .core.exceptions import ConfigurationError, ValidationError
from .hours.calculator import HoursCalculator
from .reporting.service import TimesheetReportService
from .schedules.model import ScheduleConfig
from .timesheet.service import TimesheetService


@dataclass(frozen=True)
class Container:
    tz: ZoneInfo
    clock: Clock
    default_schedule: Optional[ScheduleConfig]

    hours_calculator: HoursCalculator
    timesheet_service: TimesheetService
    report_service: TimesheetReportService


def build_container(
    *,
    timezone: str = DEFAULT_TIMEZONE,
    default_schedule: Optional[Mapping[str, Any]] = None,
    late_grace_ms: int = DEFAULT_LATE_GRACE_MS,
    clock: Optional[Clock] = None,
) -> Container:
    try:
        tz = ZoneInfo(require_non_empty(timezone, "TIMEZONE"))
        grace_ms = int(require_non_negative(int(late_grace_ms), "LATE_GRACE_MS"))
    except (ValidationError, ValueError) as e:
        raise ConfigurationError(str(e)) from e
    except ZoneInfoNotFoundError as e:
        raise ConfigurationError(f"Unknown timezone {timezone!r}") from e

    clock = clock or SystemClock()
    schedule = ScheduleConfig.from_mapping(default_schedule)

    hours_calculator = HoursCalculator(tz, grace_ms=grace_ms)
    timesheet_service = TimesheetService(
        clock=clock,
        tz=tz,
        global_config=schedule,
        calculator=hours_calculator,
    )
    report_service = TimesheetReportService(tz)

    return Container(
        tz=tz,
        clock=clock,
        default_schedule=schedule,
        hours_calculator=hours_calculator,
        timesheet_service=timesheet_service,
        report_service=report_service,
    )
