# salon/reservations.py

import logging
from datetime import datetime
from typing import Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .config import RESERVATIONS_COLLECTION
from .conflicts import is_busy
from .duty import is_on_duty
from .errors import (
    AlignmentError,
    ConflictError,
    EmployeeNotFoundError,
    EmployeeNotOnDuty,
    InternalError,
    ValidationError,
)
from .formatting import format_human_datetime
from .schemas import Appointment, CacheSnapshot, Customer, NewAppointment, ReservationForm, to_local_naive
from .store import DocumentStore
from .timegrid import TimeGrid

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("service_id",)


def write_reservation(
    form: ReservationForm,
    customer: Optional[Customer],
    start: Optional[datetime],
    snapshot: CacheSnapshot,
    store: DocumentStore,
    grid: TimeGrid,
    force_assignment: bool = False,
    editing_id: Optional[str] = None,
) -> Union[Appointment, EmployeeNotOnDuty]:
    """
    Validate a reservation and write it to the store.

    Creates a new reservation, or overwrites `editing_id` when given.
    Returns EmployeeNotOnDuty instead of writing when the employee is off
    duty and `force_assignment` is not set; the caller asks for
    confirmation and calls again with force_assignment=True.

    Raises ValidationError, AlignmentError, InternalError,
    EmployeeNotFoundError, ConflictError or StoreUnavailableError.
    """
    # 1) Required fields
    if any(not (getattr(form, name) or "").strip() for name in REQUIRED_FIELDS) or customer is None:
        raise ValidationError("Fill in the required fields")

    # 2) Start on the agenda grid
    if not isinstance(start, datetime):
        raise AlignmentError("Select a valid date")
    start = to_local_naive(start)
    if not grid.is_aligned(start):
        raise AlignmentError(
            f"The selected time does not follow the agenda grid. Use {grid.min_step} minute steps."
        )

    # 3) Shape of the record
    if editing_id is not None and not editing_id.strip():
        raise InternalError()
    try:
        new_appt = NewAppointment(
            start=start,
            customer_id=customer.id,
            service_id=form.service_id,
            employee_id=form.employee_id or "",
            notes=form.notes or None,
        )
    except PydanticValidationError as exc:
        logger.error("Reservation record failed the shape check: %s", exc.errors())
        raise InternalError(errors=exc.errors(include_url=False)) from exc

    human_date = format_human_datetime(new_appt.start)

    # 4) Employee must exist
    employee = snapshot.employee(new_appt.employee_id)
    if employee is None:
        raise EmployeeNotFoundError(new_appt.employee_id)

    # 5) Double booking
    if is_busy(new_appt, snapshot.services, snapshot.appointments, exclude_id=editing_id):
        raise ConflictError(employee.name, human_date)

    # 6) Working shifts and holidays, unless the user already confirmed
    if not force_assignment and not is_on_duty(new_appt.start, employee):
        return EmployeeNotOnDuty(
            employee_id=employee.id,
            employee_name=employee.name,
            start=new_appt.start,
            human_date=human_date,
        )

    # 7) Persist
    record = new_appt.model_dump(mode="json", exclude_none=True)
    if editing_id is None:
        appt_id = store.create(RESERVATIONS_COLLECTION, record)
        logger.info("Reservation %s created for employee %s at %s", appt_id, employee.id, new_appt.start)
    else:
        appt_id = editing_id
        store.set(RESERVATIONS_COLLECTION, appt_id, record)
        logger.info("Reservation %s updated for employee %s at %s", appt_id, employee.id, new_appt.start)

    return Appointment(id=appt_id, **new_appt.model_dump())


def delete_reservation(store: DocumentStore, reservation_id: str) -> None:
    store.delete(RESERVATIONS_COLLECTION, reservation_id)
    logger.info("Reservation %s deleted", reservation_id)
