# salon/records.py
"""Create/update/delete of employees, services and customers, customer birthdays."""

import calendar
import logging
from datetime import date
from typing import Iterable, Optional

from pydantic import BaseModel, ValidationError as PydanticValidationError

from .config import CUSTOMERS_COLLECTION, EMPLOYEES_COLLECTION, RESERVATIONS_COLLECTION, SERVICES_COLLECTION
from .errors import InternalError, ValidationError
from .schemas import CacheSnapshot, Customer, CustomerForm, Employee, EmployeeForm, Service, ServiceForm
from .store import DocumentStore
from .timegrid import TimeGrid

logger = logging.getLogger(__name__)


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _persist(store: DocumentStore, collection: str, model: type[BaseModel], fields: dict, editing_id: Optional[str]):
    if editing_id is not None and not editing_id.strip():
        raise InternalError()

    record = {key: value for key, value in fields.items() if value is not None}
    try:
        # validated with a placeholder id, the real one comes from the store
        model.model_validate({**record, "id": editing_id or "new"})
    except PydanticValidationError as exc:
        logger.error("%s record failed the shape check: %s", collection, exc.errors())
        raise InternalError(errors=exc.errors(include_url=False)) from exc

    if editing_id is None:
        record_id = store.create(collection, record)
    else:
        record_id = editing_id
        store.set(collection, record_id, record)
    logger.info("%s %s saved", collection, record_id)
    return model.model_validate({**record, "id": record_id})


def write_service(form: ServiceForm, store: DocumentStore, grid: TimeGrid, editing_id: Optional[str] = None) -> Service:
    # 1) Required fields
    if _blank(form.name) or not form.average_duration:
        raise ValidationError("Fill in the required fields")

    # 2) Duration must be one of the agenda steps
    if not grid.is_valid_duration(form.average_duration):
        raise ValidationError(
            f"Duration must be a multiple of {grid.min_step} minutes "
            f"up to {grid.service_duration_options[-1]} minutes"
        )

    fields = {"name": form.name.strip(), "average_duration": form.average_duration}
    return _persist(store, SERVICES_COLLECTION, Service, fields, editing_id)


def write_employee(form: EmployeeForm, store: DocumentStore, editing_id: Optional[str] = None) -> Employee:
    if _blank(form.name):
        raise ValidationError("Fill in the required fields")

    fields = {
        "name": form.name.strip(),
        "week_schedule": (
            {day.value: [s.model_dump() for s in shifts] for day, shifts in form.week_schedule.items()}
            if form.week_schedule is not None else None
        ),
        "holidays": (
            [h.model_dump(mode="json") for h in form.holidays]
            if form.holidays is not None else None
        ),
    }
    return _persist(store, EMPLOYEES_COLLECTION, Employee, fields, editing_id)


def write_customer(form: CustomerForm, store: DocumentStore, editing_id: Optional[str] = None) -> Customer:
    if _blank(form.name):
        raise ValidationError("Fill in the required fields")

    fields = form.model_dump(mode="json")
    fields["name"] = form.name.strip()
    return _persist(store, CUSTOMERS_COLLECTION, Customer, fields, editing_id)


def delete_record(store: DocumentStore, collection: str, record_id: str) -> None:
    store.delete(collection, record_id)
    logger.info("%s %s deleted", collection, record_id)


def delete_customer(store: DocumentStore, snapshot: CacheSnapshot, customer_id: str) -> None:
    """Delete a customer together with all of their reservations."""
    for appt in snapshot.appointments:
        if appt.customer_id == customer_id:
            store.delete(RESERVATIONS_COLLECTION, appt.id)
    store.delete(CUSTOMERS_COLLECTION, customer_id)
    logger.info("%s %s deleted with its reservations", CUSTOMERS_COLLECTION, customer_id)


def birthday_in_year(birthday: date, year: int) -> date:
    # 29 February falls on the 28th in common years
    if birthday.month == 2 and birthday.day == 29 and not calendar.isleap(year):
        return date(year, 2, 28)
    return birthday.replace(year=year)


def birthdays_on(customers: Iterable[Customer], day: date) -> list[Customer]:
    return [c for c in customers if c.birthday is not None and birthday_in_year(c.birthday, day.year) == day]


def upcoming_birthdays(customers: Iterable[Customer], today: date, days: int = 7) -> list[tuple[Customer, date]]:
    """Customers whose birthday falls within `days` days from today, soonest first."""
    upcoming = []
    for customer in customers:
        if customer.birthday is None:
            continue
        next_birthday = birthday_in_year(customer.birthday, today.year)
        if next_birthday < today:
            next_birthday = birthday_in_year(customer.birthday, today.year + 1)
        if (next_birthday - today).days <= days:
            upcoming.append((customer, next_birthday))
    return sorted(upcoming, key=lambda item: item[1])
