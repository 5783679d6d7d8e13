# salon/timegrid.py
"""
Agenda time grid.

All sequences are derived once from the SchedulingConfig and never change
afterwards:

- minute offsets within an hour (valid minute components of a start time)
- service duration options (valid service lengths)
- business day slots (rows of the agenda, opening to closing inclusive)
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from functools import lru_cache

from .config import SchedulingConfig, get_scheduling_config
from .schemas import HourMinute


@dataclass(frozen=True)
class TimeGrid:
    min_step: int
    minute_offsets_within_hour: tuple[int, ...]
    service_duration_options: tuple[int, ...]
    business_day_slots: tuple[HourMinute, ...]

    @classmethod
    def from_config(cls, config: SchedulingConfig) -> "TimeGrid":
        step = config.min_step

        minute_offsets = tuple(range(0, 60, step))
        durations = tuple(range(step, config.max_service_duration + 1, step))

        slots = []
        for total in range(config.opening_minutes, config.closing_minutes + 1, step):
            hour, minute = divmod(total, 60)
            slots.append(HourMinute(hour=hour, minute=minute))

        return cls(
            min_step=step,
            minute_offsets_within_hour=minute_offsets,
            service_duration_options=durations,
            business_day_slots=tuple(slots),
        )

    def is_aligned(self, instant: datetime) -> bool:
        return instant.minute in self.minute_offsets_within_hour

    def is_valid_duration(self, minutes: int) -> bool:
        return minutes in self.service_duration_options

    def closest_valid_instant(self, now: datetime | None = None) -> datetime:
        """Round `now` to the nearest grid minute (ties go to the earlier offset)."""
        now = now or datetime.now()
        minute = now.minute
        closest = min(self.minute_offsets_within_hour, key=lambda offset: abs(offset - minute))
        # Rounding up past the last offset moves to the next hour
        if 60 - minute < abs(closest - minute):
            return now.replace(minute=0, second=0, microsecond=0) + timedelta(hours=1)
        return now.replace(minute=closest, second=0, microsecond=0)


@lru_cache
def get_time_grid() -> TimeGrid:
    return TimeGrid.from_config(get_scheduling_config())
