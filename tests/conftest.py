# tests/conftest.py

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from salon.auth import get_current_operator
from salon.config import SchedulingConfig
from salon.db import get_session
from salon.errors import StoreUnavailableError
from salon.main import app
from salon.models import Operator
from salon.schemas import (
    Appointment,
    CacheSnapshot,
    Customer,
    Employee,
    HourMinute,
    Service,
    WorkingShift,
)
from salon.timegrid import TimeGrid

# 2026-10-19 is a Monday
MONDAY = datetime(2026, 10, 19)


def at(hour: int, minute: int = 0, day: datetime = MONDAY) -> datetime:
    return day.replace(hour=hour, minute=minute)


def shift(start: str, end: str) -> WorkingShift:
    sh, sm = map(int, start.split(":"))
    eh, em = map(int, end.split(":"))
    return WorkingShift(start_time=HourMinute(hour=sh, minute=sm), end_time=HourMinute(hour=eh, minute=em))


class FakeStore:
    """In-memory document store recording every call."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.collections: dict[str, dict[str, dict]] = {}
        self.calls: list[tuple] = []
        self._next = 0

    def create(self, collection, record):
        self.calls.append(("create", collection, record))
        if self.fail:
            raise StoreUnavailableError()
        self._next += 1
        record_id = f"{collection}-{self._next}"
        self.collections.setdefault(collection, {})[record_id] = record
        return record_id

    def set(self, collection, record_id, record):
        self.calls.append(("set", collection, record_id, record))
        if self.fail:
            raise StoreUnavailableError()
        self.collections.setdefault(collection, {})[record_id] = record

    def delete(self, collection, record_id):
        self.calls.append(("delete", collection, record_id))
        if self.fail:
            raise StoreUnavailableError()
        self.collections.get(collection, {}).pop(record_id, None)

    def read_all(self, collection):
        return dict(self.collections.get(collection, {}))


@pytest.fixture
def grid() -> TimeGrid:
    return TimeGrid.from_config(SchedulingConfig())


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def haircut() -> Service:
    return Service(id="haircut", name="Haircut", average_duration=30)


@pytest.fixture
def customer() -> Customer:
    return Customer(id="c1", name="Anna", surname="Rossi")


@pytest.fixture
def employee_e() -> Employee:
    # Monday 08:00-18:00, no holidays
    return Employee(id="e", name="Elena", week_schedule={"monday": [shift("08:00", "18:00")]})


@pytest.fixture
def employee_f() -> Employee:
    # Tuesday only
    return Employee(id="f", name="Franco", week_schedule={"tuesday": [shift("08:00", "18:00")]})


@pytest.fixture
def snapshot(employee_e, employee_f, haircut, customer) -> CacheSnapshot:
    return CacheSnapshot(
        employees=(employee_e, employee_f),
        services=(haircut,),
        customers=(customer,),
    )


def with_appointments(snapshot: CacheSnapshot, *appointments: Appointment) -> CacheSnapshot:
    return CacheSnapshot(
        employees=snapshot.employees,
        services=snapshot.services,
        customers=snapshot.customers,
        appointments=snapshot.appointments + appointments,
    )


# ---- API ----

@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def anonymous_client(engine):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.state.cache.clear()
    yield TestClient(app)
    app.dependency_overrides.clear()
    app.state.cache.clear()


@pytest.fixture
def client(anonymous_client):
    app.dependency_overrides[get_current_operator] = lambda: Operator(id=1, email="desk@salon.test", password_hash="x")
    return anonymous_client
