# salon/routers/services_routes.py

from typing import List

from fastapi import APIRouter, Depends

from salon.auth import get_current_operator
from salon.config import SERVICES_COLLECTION
from salon.deps import get_grid, get_snapshot, get_store, http_error, require_found
from salon.errors import SchedulingError
from salon.records import delete_record, write_service
from salon.schemas import CacheSnapshot, Service, ServiceForm
from salon.store import SQLDocumentStore
from salon.timegrid import TimeGrid

router = APIRouter(
    prefix="/services",
    tags=["services"],
    dependencies=[Depends(get_current_operator)],
)


@router.get("", response_model=List[Service])
def list_services(snapshot: CacheSnapshot = Depends(get_snapshot)):
    return sorted(snapshot.services, key=lambda s: s.name.lower())


@router.get("/{service_id}", response_model=Service)
def get_service(service_id: str, snapshot: CacheSnapshot = Depends(get_snapshot)):
    return require_found(snapshot.service(service_id), "Service")


@router.post("", response_model=Service, status_code=201)
def create_service(
    form: ServiceForm,
    store: SQLDocumentStore = Depends(get_store),
    grid: TimeGrid = Depends(get_grid),
):
    try:
        return write_service(form, store, grid)
    except SchedulingError as exc:
        raise http_error(exc) from exc


@router.put("/{service_id}", response_model=Service)
def edit_service(
    service_id: str,
    form: ServiceForm,
    snapshot: CacheSnapshot = Depends(get_snapshot),
    store: SQLDocumentStore = Depends(get_store),
    grid: TimeGrid = Depends(get_grid),
):
    require_found(snapshot.service(service_id), "Service")
    try:
        return write_service(form, store, grid, editing_id=service_id)
    except SchedulingError as exc:
        raise http_error(exc) from exc


@router.delete("/{service_id}", status_code=204)
def remove_service(
    service_id: str,
    snapshot: CacheSnapshot = Depends(get_snapshot),
    store: SQLDocumentStore = Depends(get_store),
):
    # reservations keep pointing at the deleted service, conflict checks skip them
    require_found(snapshot.service(service_id), "Service")
    try:
        delete_record(store, SERVICES_COLLECTION, service_id)
    except SchedulingError as exc:
        raise http_error(exc) from exc
