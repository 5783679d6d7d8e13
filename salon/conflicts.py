# salon/conflicts.py

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Protocol, Sequence

from .schemas import Appointment, Service

logger = logging.getLogger(__name__)

Interval = tuple[datetime, datetime]


class Candidate(Protocol):
    start: datetime
    service_id: str
    employee_id: str


def occupied_interval(start: datetime, duration_minutes: int) -> Interval:
    return start, start + timedelta(minutes=duration_minutes)


def overlaps(a: Interval, b: Interval) -> bool:
    # half-open ranges: touching endpoints do not overlap
    return a[0] < b[1] and b[0] < a[1]


def appointments_on_day(appointments: Iterable[Appointment], day: date) -> list[Appointment]:
    return sorted((a for a in appointments if a.start.date() == day), key=lambda a: a.start)


def is_busy(
    candidate: Candidate,
    services: Sequence[Service],
    appointments: Sequence[Appointment],
    exclude_id: Optional[str] = None,
) -> bool:
    """
    Check if the employee of `candidate` already has an appointment
    overlapping it.

    exclude_id: id of the appointment being edited, never a conflict
    with itself.
    """
    durations = {s.id: s.average_duration for s in services}

    # 1) Unknown service, cannot tell how long it lasts: refuse
    if candidate.service_id not in durations:
        logger.warning("Candidate appointment has an unknown service id %r", candidate.service_id)
        return True

    # 2) Interval of the candidate
    interval = occupied_interval(candidate.start, durations[candidate.service_id])

    # 3) Appointments of the same employee
    employee_appts = [a for a in appointments if a.employee_id == candidate.employee_id]
    if not employee_appts:
        return False

    # 4) Same day only, appointments never span midnight
    day = candidate.start.date()
    for appt in employee_appts:
        if appt.start.date() != day:
            continue

        # 5) Service deleted, duration unknown: skip
        duration = durations.get(appt.service_id)
        if duration is None:
            logger.debug("Skipping appointment %s, service %s no longer exists", appt.id, appt.service_id)
            continue

        # 6) Overlap with somebody else than the appointment being edited
        if overlaps(interval, occupied_interval(appt.start, duration)):
            if exclude_id is not None and appt.id == exclude_id:
                continue
            return True

    return False
