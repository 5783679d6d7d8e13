# salon/routers/reservations_routes.py

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from salon.auth import get_current_operator
from salon.conflicts import appointments_on_day, occupied_interval
from salon.deps import get_grid, get_snapshot, get_store, http_error, require_found
from salon.errors import EmployeeNotOnDuty, SchedulingError
from salon.reservations import delete_reservation, write_reservation
from salon.schemas import Appointment, CacheSnapshot, ReservationPublic, ReservationWrite
from salon.status import reservation_status
from salon.store import SQLDocumentStore
from salon.timegrid import TimeGrid

router = APIRouter(
    prefix="/reservations",
    tags=["reservations"],
    dependencies=[Depends(get_current_operator)],
)


def to_public(appt: Appointment, snapshot: CacheSnapshot) -> ReservationPublic:
    public = ReservationPublic(**appt.model_dump())
    service = snapshot.service(appt.service_id)
    # Service deleted: duration unknown, no end and no status
    if service is not None:
        public.end = occupied_interval(appt.start, service.average_duration)[1]
        public.status = reservation_status(appt.start, service.average_duration).value
    return public


def _write(
    body: ReservationWrite,
    snapshot: CacheSnapshot,
    store: SQLDocumentStore,
    grid: TimeGrid,
    editing_id: Optional[str] = None,
) -> Appointment:
    try:
        result = write_reservation(
            body,
            snapshot.customer(body.customer_id),
            body.start,
            snapshot,
            store,
            grid,
            force_assignment=body.force_assignment,
            editing_id=editing_id,
        )
    except SchedulingError as exc:
        raise http_error(exc) from exc

    # Needs the user's consent, resubmit with force_assignment=true
    if isinstance(result, EmployeeNotOnDuty):
        raise HTTPException(
            status_code=409,
            detail={
                "code": result.code,
                "message": result.message,
                "employee_id": result.employee_id,
                "employee_name": result.employee_name,
                "date": result.human_date,
            },
        )
    return result


@router.post("", response_model=Appointment, status_code=201)
def create_reservation(
    body: ReservationWrite,
    snapshot: CacheSnapshot = Depends(get_snapshot),
    store: SQLDocumentStore = Depends(get_store),
    grid: TimeGrid = Depends(get_grid),
):
    return _write(body, snapshot, store, grid)


@router.put("/{reservation_id}", response_model=Appointment)
def edit_reservation(
    reservation_id: str,
    body: ReservationWrite,
    snapshot: CacheSnapshot = Depends(get_snapshot),
    store: SQLDocumentStore = Depends(get_store),
    grid: TimeGrid = Depends(get_grid),
):
    require_found(snapshot.appointment(reservation_id), "Reservation")
    return _write(body, snapshot, store, grid, editing_id=reservation_id)


@router.delete("/{reservation_id}", status_code=204)
def remove_reservation(
    reservation_id: str,
    snapshot: CacheSnapshot = Depends(get_snapshot),
    store: SQLDocumentStore = Depends(get_store),
):
    require_found(snapshot.appointment(reservation_id), "Reservation")
    try:
        delete_reservation(store, reservation_id)
    except SchedulingError as exc:
        raise http_error(exc) from exc


@router.get("", response_model=List[ReservationPublic])
def list_reservations(
    on_date: Optional[date] = None,
    employee_id: Optional[str] = None,
    customer_id: Optional[str] = None,
    snapshot: CacheSnapshot = Depends(get_snapshot),
):
    appts = list(snapshot.appointments)
    if employee_id is not None:
        appts = [a for a in appts if a.employee_id == employee_id]
    if customer_id is not None:
        appts = [a for a in appts if a.customer_id == customer_id]
    if on_date is not None:
        appts = appointments_on_day(appts, on_date)
    else:
        appts.sort(key=lambda a: a.start)
    return [to_public(a, snapshot) for a in appts]


@router.get("/{reservation_id}", response_model=ReservationPublic)
def get_reservation(reservation_id: str, snapshot: CacheSnapshot = Depends(get_snapshot)):
    appt = require_found(snapshot.appointment(reservation_id), "Reservation")
    return to_public(appt, snapshot)


@router.get("/{reservation_id}/status")
def get_reservation_status(reservation_id: str, snapshot: CacheSnapshot = Depends(get_snapshot)):
    appt = require_found(snapshot.appointment(reservation_id), "Reservation")
    service = require_found(snapshot.service(appt.service_id), "Service")
    return {
        "id": appt.id,
        "status": reservation_status(appt.start, service.average_duration).value,
    }
