# salon/duty.py

import logging
from datetime import datetime

from .schemas import Employee, SYSTEM_ORDERED_DAYS, WeekDay

logger = logging.getLogger(__name__)


def weekday_of(instant: datetime) -> WeekDay:
    # isoweekday: Monday=1 ... Sunday=7, so % 7 gives a Sunday-first index
    return SYSTEM_ORDERED_DAYS[instant.isoweekday() % 7]


def is_on_holiday(instant: datetime, employee: Employee) -> bool:
    day = instant.date()
    return any(h.start_day <= day <= h.end_day for h in employee.holidays or [])


def is_on_duty(instant: datetime, employee: Employee) -> bool:
    """
    Check if an employee is on duty at a given instant.

    Holidays win over everything. An employee without any configured
    week schedule is always on duty; otherwise the instant must fall in
    one of the shifts of its weekday.
    """
    try:
        # 1) Holidays, whole days
        if is_on_holiday(instant, employee):
            return False

        # 2) No shifts configured at all, always on duty
        schedule = employee.week_schedule
        if not schedule:
            return True

        # 3) Not working that weekday
        shifts = schedule.get(weekday_of(instant))
        if shifts is None:
            return False

        # 4) Inside one of the shifts of the day
        for shift in shifts:
            shift_start = instant.replace(
                hour=shift.start_time.hour, minute=shift.start_time.minute, second=0, microsecond=0
            )
            shift_end = instant.replace(
                hour=shift.end_time.hour, minute=shift.end_time.minute, second=0, microsecond=0
            )
            if shift_start <= instant < shift_end:
                return True
        return False
    except (ValueError, TypeError, OverflowError, AttributeError):
        logger.warning("Could not evaluate duty of employee %s at %r", employee.id, instant, exc_info=True)
        return False
