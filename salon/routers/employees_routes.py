# salon/routers/employees_routes.py

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends

from salon.auth import get_current_operator
from salon.config import EMPLOYEES_COLLECTION
from salon.deps import get_snapshot, get_store, http_error, require_found
from salon.duty import is_on_duty
from salon.errors import SchedulingError
from salon.records import delete_record, write_employee
from salon.schemas import CacheSnapshot, Employee, EmployeeForm, OnDutyResponse, to_local_naive
from salon.store import SQLDocumentStore

router = APIRouter(
    prefix="/employees",
    tags=["employees"],
    dependencies=[Depends(get_current_operator)],
)


@router.get("", response_model=List[Employee])
def list_employees(snapshot: CacheSnapshot = Depends(get_snapshot)):
    return sorted(snapshot.employees, key=lambda e: e.name.lower())


@router.get("/{employee_id}", response_model=Employee)
def get_employee(employee_id: str, snapshot: CacheSnapshot = Depends(get_snapshot)):
    return require_found(snapshot.employee(employee_id), "Employee")


@router.post("", response_model=Employee, status_code=201)
def create_employee(form: EmployeeForm, store: SQLDocumentStore = Depends(get_store)):
    try:
        return write_employee(form, store)
    except SchedulingError as exc:
        raise http_error(exc) from exc


@router.put("/{employee_id}", response_model=Employee)
def edit_employee(
    employee_id: str,
    form: EmployeeForm,
    snapshot: CacheSnapshot = Depends(get_snapshot),
    store: SQLDocumentStore = Depends(get_store),
):
    require_found(snapshot.employee(employee_id), "Employee")
    try:
        return write_employee(form, store, editing_id=employee_id)
    except SchedulingError as exc:
        raise http_error(exc) from exc


@router.delete("/{employee_id}", status_code=204)
def remove_employee(
    employee_id: str,
    snapshot: CacheSnapshot = Depends(get_snapshot),
    store: SQLDocumentStore = Depends(get_store),
):
    require_found(snapshot.employee(employee_id), "Employee")
    try:
        delete_record(store, EMPLOYEES_COLLECTION, employee_id)
    except SchedulingError as exc:
        raise http_error(exc) from exc


@router.get("/{employee_id}/on-duty", response_model=OnDutyResponse)
def employee_on_duty(
    employee_id: str,
    at: Optional[datetime] = None,
    snapshot: CacheSnapshot = Depends(get_snapshot),
):
    employee = require_found(snapshot.employee(employee_id), "Employee")
    at = to_local_naive(at) if at else datetime.now()
    return {"employee_id": employee.id, "at": at, "on_duty": is_on_duty(at, employee)}
