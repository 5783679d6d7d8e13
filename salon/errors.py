# salon/errors.py

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional


class ConfigurationError(ValueError):
    """Scheduling constants that cannot produce a consistent agenda."""


class SchedulingError(Exception):
    """Base class of the errors raised by the write workflows."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SchedulingError):
    """A required field is missing or blank."""

    status_code = 422


class AlignmentError(SchedulingError):
    """The requested instant is not on the agenda grid."""

    status_code = 422


class InternalError(SchedulingError):
    """The assembled record failed the shape check. Points at a caller bug."""

    status_code = 500

    def __init__(self, message: str = "Internal error, contact technical support", errors: Optional[list[Any]] = None):
        super().__init__(message)
        self.errors = errors or []


class EmployeeNotFoundError(SchedulingError):
    status_code = 404

    def __init__(self, employee_id: str):
        super().__init__(f"Employee {employee_id} not found")
        self.employee_id = employee_id


class ConflictError(SchedulingError):
    status_code = 409

    def __init__(self, employee_name: str, human_date: str):
        super().__init__(f"{employee_name} is already busy with another appointment on {human_date}.")
        self.employee_name = employee_name
        self.human_date = human_date


class StoreUnavailableError(SchedulingError):
    status_code = 503

    def __init__(self, message: str = "Connection to the database failed"):
        super().__init__(message)


@dataclass(frozen=True)
class EmployeeNotOnDuty:
    """
    Outcome of a reservation write when the employee is off duty.

    Not an error: the caller asks the user to confirm and, on consent,
    repeats the same write with force_assignment=True.
    """
    employee_id: str
    employee_name: str
    start: datetime
    human_date: str

    code = "EMPLOYEE_NOT_ON_DUTY"

    @property
    def message(self) -> str:
        return f"{self.employee_name} is not on duty on {self.human_date}. Assign anyway?"
