# salon/schemas.py

from dataclasses import dataclass, field
from datetime import datetime, date, time
from enum import Enum
from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints, model_validator


def to_local_naive(instant: datetime) -> datetime:
    """Agenda times are naive wall-clock times of the host calendar."""
    if instant.tzinfo is None:
        return instant
    return instant.astimezone().replace(tzinfo=None)


NonBlank = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
LocalDateTime = Annotated[datetime, AfterValidator(to_local_naive)]


class WeekDay(str, Enum):
    sunday = "sunday"
    monday = "monday"
    tuesday = "tuesday"
    wednesday = "wednesday"
    thursday = "thursday"
    friday = "friday"
    saturday = "saturday"

    @property
    def label(self) -> str:
        return self.value.capitalize()


# Progression of days as counted by the calendar (Sunday first)
SYSTEM_ORDERED_DAYS = (
    WeekDay.sunday,
    WeekDay.monday,
    WeekDay.tuesday,
    WeekDay.wednesday,
    WeekDay.thursday,
    WeekDay.friday,
    WeekDay.saturday,
)

# Progression of days as shown to the user (Monday first)
WEEK_DAYS = SYSTEM_ORDERED_DAYS[1:] + SYSTEM_ORDERED_DAYS[:1]


class HourMinute(BaseModel):
    model_config = ConfigDict(frozen=True)

    hour: int = Field(ge=0, le=23)
    minute: int = Field(ge=0, le=59)

    @property
    def total_minutes(self) -> int:
        return self.hour * 60 + self.minute

    def to_time(self) -> time:
        return time(self.hour, self.minute)


class WorkingShift(BaseModel):
    start_time: HourMinute
    end_time: HourMinute

    @model_validator(mode="after")
    def check_order(self):
        if self.start_time.total_minutes >= self.end_time.total_minutes:
            raise ValueError("start_time must come before end_time")
        return self


WeekSchedule = dict[WeekDay, list[WorkingShift]]


class HolidayRange(BaseModel):
    start_day: date
    end_day: date

    @model_validator(mode="after")
    def check_order(self):
        if self.start_day > self.end_day:
            raise ValueError("start_day cannot be after end_day")
        return self


class Employee(BaseModel):
    id: str
    name: str
    week_schedule: Optional[WeekSchedule] = None
    holidays: Optional[list[HolidayRange]] = None


class Service(BaseModel):
    id: str
    name: str
    average_duration: int  # minutes


class Customer(BaseModel):
    id: str
    name: str
    surname: Optional[str] = None
    additional_identifier: Optional[str] = None
    phone: Optional[str] = None
    birthday: Optional[date] = None
    notes: Optional[str] = None


class Appointment(BaseModel):
    id: str
    start: LocalDateTime
    service_id: str
    customer_id: str
    employee_id: str
    notes: Optional[str] = None


class NewAppointment(BaseModel):
    """Shape every reservation record must have before it is written."""

    model_config = ConfigDict(extra="forbid")

    start: LocalDateTime
    service_id: NonBlank
    customer_id: NonBlank
    employee_id: NonBlank
    notes: Optional[str] = None


@dataclass(frozen=True)
class CacheSnapshot:
    """Point-in-time view of the local cache."""

    employees: tuple[Employee, ...] = ()
    services: tuple[Service, ...] = ()
    appointments: tuple[Appointment, ...] = ()
    customers: tuple[Customer, ...] = ()
    _index: dict = field(default_factory=dict, init=False, repr=False, compare=False)

    def _lookup(self, name: str, records, record_id: Optional[str]):
        if name not in self._index:
            self._index[name] = {r.id: r for r in records}
        return self._index[name].get(record_id)

    def employee(self, employee_id: Optional[str]) -> Optional[Employee]:
        return self._lookup("employees", self.employees, employee_id)

    def service(self, service_id: Optional[str]) -> Optional[Service]:
        return self._lookup("services", self.services, service_id)

    def customer(self, customer_id: Optional[str]) -> Optional[Customer]:
        return self._lookup("customers", self.customers, customer_id)

    def appointment(self, appointment_id: Optional[str]) -> Optional[Appointment]:
        return self._lookup("appointments", self.appointments, appointment_id)


# ---- Forms (raw user input) ----

class ReservationForm(BaseModel):
    service_id: Optional[str] = None
    employee_id: Optional[str] = None
    notes: Optional[str] = None


class ServiceForm(BaseModel):
    name: Optional[str] = None
    average_duration: Optional[int] = None


class EmployeeForm(BaseModel):
    name: Optional[str] = None
    week_schedule: Optional[WeekSchedule] = None
    holidays: Optional[list[HolidayRange]] = None


class CustomerForm(BaseModel):
    name: Optional[str] = None
    surname: Optional[str] = None
    additional_identifier: Optional[str] = None
    phone: Optional[str] = None
    birthday: Optional[date] = None
    notes: Optional[str] = None


# ---- API ----

class ReservationWrite(ReservationForm):
    customer_id: Optional[str] = None
    start: Optional[LocalDateTime] = None
    force_assignment: bool = False


class ReservationPublic(Appointment):
    end: Optional[datetime] = None
    status: Optional[str] = None


class UpcomingBirthday(BaseModel):
    customer: Customer
    birthday: date
    is_today: bool


class OnDutyResponse(BaseModel):
    employee_id: str
    at: datetime
    on_duty: bool


class GridResponse(BaseModel):
    min_step: int
    minute_offsets: list[int]
    service_durations: list[int]
    service_duration_labels: list[str]
    business_day_slots: list[HourMinute]
    slot_labels: list[str]


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class OperatorPublic(BaseModel):
    id: int
    email: str


class OperatorCreate(BaseModel):
    email: str
    password: str = Field(min_length=8, max_length=72)
