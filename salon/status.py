# salon/status.py

from datetime import datetime, timedelta
from enum import Enum
from typing import Optional


class ReservationStatus(str, Enum):
    uninitiated = "UNINITIATED"
    ongoing = "ONGOING"
    done = "DONE"


def reservation_status(
    start: datetime,
    duration_minutes: int,
    now: Optional[datetime] = None,
) -> ReservationStatus:
    """Depends on the clock only, callers re-evaluate it periodically."""
    now = now or datetime.now()
    end = start + timedelta(minutes=duration_minutes)

    if now < start:
        return ReservationStatus.uninitiated
    if now < end:
        return ReservationStatus.ongoing
    return ReservationStatus.done
