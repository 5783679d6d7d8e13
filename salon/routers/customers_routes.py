# salon/routers/customers_routes.py

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from salon.auth import get_current_operator
from salon.deps import get_snapshot, get_store, http_error, require_found
from salon.errors import SchedulingError
from salon.records import birthdays_on, delete_customer, upcoming_birthdays, write_customer
from salon.schemas import CacheSnapshot, Customer, CustomerForm, UpcomingBirthday
from salon.store import SQLDocumentStore

router = APIRouter(
    prefix="/customers",
    tags=["customers"],
    dependencies=[Depends(get_current_operator)],
)


@router.get("", response_model=List[Customer])
def list_customers(snapshot: CacheSnapshot = Depends(get_snapshot)):
    return sorted(snapshot.customers, key=lambda c: (c.name.lower(), (c.surname or "").lower()))


@router.get("/birthdays/today", response_model=List[Customer])
def birthdays_today(
    on_date: Optional[date] = None,
    snapshot: CacheSnapshot = Depends(get_snapshot),
):
    return birthdays_on(snapshot.customers, on_date or date.today())


@router.get("/birthdays", response_model=List[UpcomingBirthday])
def birthdays_in_sight(
    on_date: Optional[date] = None,
    days: int = Query(default=7, ge=0, le=366),
    snapshot: CacheSnapshot = Depends(get_snapshot),
):
    today = on_date or date.today()
    return [
        {"customer": customer, "birthday": birthday, "is_today": birthday == today}
        for customer, birthday in upcoming_birthdays(snapshot.customers, today, days)
    ]


@router.get("/{customer_id}", response_model=Customer)
def get_customer(customer_id: str, snapshot: CacheSnapshot = Depends(get_snapshot)):
    return require_found(snapshot.customer(customer_id), "Customer")


@router.post("", response_model=Customer, status_code=201)
def create_customer(form: CustomerForm, store: SQLDocumentStore = Depends(get_store)):
    try:
        return write_customer(form, store)
    except SchedulingError as exc:
        raise http_error(exc) from exc


@router.put("/{customer_id}", response_model=Customer)
def edit_customer(
    customer_id: str,
    form: CustomerForm,
    snapshot: CacheSnapshot = Depends(get_snapshot),
    store: SQLDocumentStore = Depends(get_store),
):
    require_found(snapshot.customer(customer_id), "Customer")
    try:
        return write_customer(form, store, editing_id=customer_id)
    except SchedulingError as exc:
        raise http_error(exc) from exc


@router.delete("/{customer_id}", status_code=204)
def remove_customer(
    customer_id: str,
    snapshot: CacheSnapshot = Depends(get_snapshot),
    store: SQLDocumentStore = Depends(get_store),
):
    # reservations of the customer go too
    require_found(snapshot.customer(customer_id), "Customer")
    try:
        delete_customer(store, snapshot, customer_id)
    except SchedulingError as exc:
        raise http_error(exc) from exc
