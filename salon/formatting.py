# salon/formatting.py

from datetime import datetime

from .schemas import HourMinute

HUMAN_DATE_FORMAT = "%A %d %B %Y, %H:%M"


def format_human_datetime(instant: datetime) -> str:
    # e.g. "Monday 05 October 2026, 09:00"
    return instant.strftime(HUMAN_DATE_FORMAT)


def hour_minute_to_string(value: HourMinute) -> str:
    return f"{value.hour:02d}:{value.minute:02d}"


def format_minutes(minutes: int) -> str:
    """130 -> "2 hours and 10 minutes"."""
    hours, mins = divmod(minutes, 60)
    parts = []
    if hours > 0:
        parts.append(f"{hours} hour" if hours == 1 else f"{hours} hours")
    if mins > 0:
        parts.append(f"{mins} minute" if mins == 1 else f"{mins} minutes")
    return " and ".join(parts)
