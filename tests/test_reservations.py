# tests/test_reservations.py

from datetime import timedelta, timezone

import pytest

from salon.errors import (
    AlignmentError,
    ConflictError,
    EmployeeNotFoundError,
    EmployeeNotOnDuty,
    InternalError,
    StoreUnavailableError,
    ValidationError,
)
from salon.reservations import delete_reservation, write_reservation
from salon.schemas import Appointment, ReservationForm

from conftest import FakeStore, at, with_appointments


def form(service_id="haircut", employee_id="e", notes=None):
    return ReservationForm(service_id=service_id, employee_id=employee_id, notes=notes)


def test_creates_reservation_when_free_and_on_duty(snapshot, store, grid, customer):
    result = write_reservation(form(notes="first visit"), customer, at(9), snapshot, store, grid)

    assert isinstance(result, Appointment)
    assert result.id == "reservations-1"
    assert result.start == at(9)
    assert result.customer_id == "c1"
    assert store.calls == [
        ("create", "reservations", {
            "start": "2026-10-19T09:00:00",
            "service_id": "haircut",
            "customer_id": "c1",
            "employee_id": "e",
            "notes": "first visit",
        }),
    ]


def test_empty_notes_are_dropped(snapshot, store, grid, customer):
    write_reservation(form(notes=""), customer, at(9), snapshot, store, grid)
    assert "notes" not in store.calls[0][2]


@pytest.mark.parametrize("service_id", [None, "", "   "])
def test_missing_service(snapshot, store, grid, customer, service_id):
    with pytest.raises(ValidationError):
        write_reservation(form(service_id=service_id), customer, at(9), snapshot, store, grid)
    assert store.calls == []


def test_missing_customer(snapshot, store, grid):
    with pytest.raises(ValidationError):
        write_reservation(form(), None, at(9), snapshot, store, grid)


def test_missing_date(snapshot, store, grid, customer):
    with pytest.raises(AlignmentError):
        write_reservation(form(), customer, None, snapshot, store, grid)


def test_off_grid_minute_fails_before_other_checks(store, grid, customer, snapshot):
    # the employee does not exist and would be off duty anyway
    with pytest.raises(AlignmentError, match="15 minute"):
        write_reservation(form(employee_id="nobody"), customer, at(9, 7), snapshot, store, grid)
    assert store.calls == []


def test_missing_employee_is_internal_error(snapshot, store, grid, customer):
    with pytest.raises(InternalError) as excinfo:
        write_reservation(form(employee_id=None), customer, at(9), snapshot, store, grid)
    assert excinfo.value.errors


def test_blank_editing_id_is_internal_error(snapshot, store, grid, customer):
    with pytest.raises(InternalError):
        write_reservation(form(), customer, at(9), snapshot, store, grid, editing_id=" ")


def test_unknown_employee(snapshot, store, grid, customer):
    with pytest.raises(EmployeeNotFoundError):
        write_reservation(form(employee_id="ghost"), customer, at(9), snapshot, store, grid)


def test_conflict_reports_employee_and_date(snapshot, store, grid, customer):
    existing = Appointment(id="a1", start=at(9), service_id="haircut", customer_id="c1", employee_id="e")
    snap = with_appointments(snapshot, existing)

    with pytest.raises(ConflictError) as excinfo:
        write_reservation(form(), customer, at(9, 15), snap, store, grid)

    assert excinfo.value.employee_name == "Elena"
    assert excinfo.value.human_date == "Monday 19 October 2026, 09:15"
    assert "Elena" in excinfo.value.message
    assert store.calls == []


def test_conflict_is_checked_even_when_forced(snapshot, store, grid, customer):
    existing = Appointment(id="a1", start=at(9), service_id="haircut", customer_id="c1", employee_id="f")
    snap = with_appointments(snapshot, existing)
    with pytest.raises(ConflictError):
        write_reservation(form(employee_id="f"), customer, at(9), snap, store, grid, force_assignment=True)


def test_off_duty_asks_for_confirmation_then_forced_write(snapshot, store, grid, customer):
    result = write_reservation(form(employee_id="f"), customer, at(9), snapshot, store, grid)

    assert isinstance(result, EmployeeNotOnDuty)
    assert result.employee_name == "Franco"
    assert result.human_date == "Monday 19 October 2026, 09:00"
    assert result.code == "EMPLOYEE_NOT_ON_DUTY"
    assert store.calls == []

    # user confirmed
    result = write_reservation(form(employee_id="f"), customer, at(9), snapshot, store, grid, force_assignment=True)
    assert isinstance(result, Appointment)
    assert result.employee_id == "f"
    assert len(store.calls) == 1


def test_edit_overwrites_and_ignores_itself(snapshot, store, grid, customer):
    existing = Appointment(id="a1", start=at(9), service_id="haircut", customer_id="c1", employee_id="e")
    snap = with_appointments(snapshot, existing)

    result = write_reservation(form(), customer, at(9, 15), snap, store, grid, editing_id="a1")

    assert result.id == "a1"
    assert result.start == at(9, 15)
    assert store.calls[0][:3] == ("set", "reservations", "a1")


def test_edit_still_conflicts_with_others(snapshot, store, grid, customer):
    mine = Appointment(id="a1", start=at(9), service_id="haircut", customer_id="c1", employee_id="e")
    other = Appointment(id="a2", start=at(10), service_id="haircut", customer_id="c1", employee_id="e")
    snap = with_appointments(snapshot, mine, other)

    with pytest.raises(ConflictError):
        write_reservation(form(), customer, at(9, 45), snap, store, grid, editing_id="a1")


def test_unreachable_store(snapshot, grid, customer):
    with pytest.raises(StoreUnavailableError):
        write_reservation(form(), customer, at(9), snapshot, FakeStore(fail=True), grid)


def test_other_days_are_ignored(snapshot, store, grid, customer):
    yesterday = Appointment(
        id="a1", start=at(9) - timedelta(days=7), service_id="haircut", customer_id="c1", employee_id="e",
    )
    snap = with_appointments(snapshot, yesterday)
    assert isinstance(write_reservation(form(), customer, at(9), snap, store, grid), Appointment)


def test_delete_reservation(store):
    store.collections["reservations"] = {"a1": {"start": "2026-10-19T09:00:00"}}
    delete_reservation(store, "a1")
    assert store.read_all("reservations") == {}


def test_aware_start_is_stored_as_local_wall_clock(snapshot, store, grid, customer):
    aware = at(9).replace(tzinfo=timezone(timedelta(hours=2)))
    result = write_reservation(form(), customer, aware, snapshot, store, grid, force_assignment=True)

    assert result.start.tzinfo is None
    assert result.start == aware.astimezone().replace(tzinfo=None)
    assert store.calls[0][2]["start"] == result.start.isoformat()


def test_aware_start_is_compared_with_naive_reservations(snapshot, store, grid, customer):
    existing = Appointment(id="a1", start=at(9), service_id="haircut", customer_id="c1", employee_id="e")
    snap = with_appointments(snapshot, existing)

    # the same wall-clock instant, carrying the host offset
    with pytest.raises(ConflictError):
        write_reservation(form(), customer, at(9).astimezone(), snap, store, grid)
