# tests/test_duty.py

from datetime import date, datetime, timedelta

import pytest

from salon.duty import is_on_duty, weekday_of
from salon.schemas import Employee, HolidayRange, WeekDay

from conftest import MONDAY, at, shift


def test_weekday_lookup_is_sunday_first():
    assert weekday_of(MONDAY) == WeekDay.monday
    assert weekday_of(MONDAY - timedelta(days=1)) == WeekDay.sunday
    assert weekday_of(MONDAY + timedelta(days=5)) == WeekDay.saturday


@pytest.mark.parametrize("schedule", [None, {}])
def test_unconfigured_schedule_is_always_on_duty(schedule):
    employee = Employee(id="x", name="X", week_schedule=schedule)
    for hours in range(0, 24 * 7, 5):
        assert is_on_duty(MONDAY + timedelta(hours=hours), employee)


def test_holiday_wins_over_unconfigured_schedule():
    employee = Employee(
        id="x", name="X",
        holidays=[HolidayRange(start_day=date(2026, 10, 19), end_day=date(2026, 10, 21))],
    )
    assert not is_on_duty(at(0, 0), employee)
    assert not is_on_duty(datetime(2026, 10, 21, 23, 59, 59), employee)
    assert is_on_duty(datetime(2026, 10, 22, 0, 0), employee)
    assert is_on_duty(datetime(2026, 10, 18, 23, 45), employee)


def test_holiday_wins_over_shifts(employee_e):
    employee = employee_e.model_copy(
        update={"holidays": [HolidayRange(start_day=MONDAY.date(), end_day=MONDAY.date())]}
    )
    assert is_on_duty(at(9), employee_e)
    assert not is_on_duty(at(9), employee)


def test_inside_shift(employee_e):
    assert is_on_duty(at(8, 0), employee_e)
    assert is_on_duty(at(9, 0), employee_e)
    assert is_on_duty(at(17, 45), employee_e)


def test_shift_end_is_exclusive(employee_e):
    assert not is_on_duty(at(18, 0), employee_e)
    assert not is_on_duty(at(7, 45), employee_e)


def test_day_missing_from_configured_schedule(employee_f):
    assert not is_on_duty(at(9), employee_f)
    assert is_on_duty(at(9, day=MONDAY + timedelta(days=1)), employee_f)


def test_split_shifts():
    employee = Employee(
        id="x", name="X",
        week_schedule={"monday": [shift("09:00", "13:00"), shift("14:00", "19:00")]},
    )
    assert is_on_duty(at(12, 45), employee)
    assert not is_on_duty(at(13, 30), employee)
    assert is_on_duty(at(14, 0), employee)


def test_weekday_with_no_shifts():
    employee = Employee(id="x", name="X", week_schedule={"monday": []})
    assert not is_on_duty(at(9), employee)


def test_bad_instant_fails_closed(employee_e):
    assert is_on_duty(None, employee_e) is False
