from datetime import date
from decimal import Decimal

import pytest

from app import crud
from app.core.records import Employee, Holiday, Vacation, WorkLog
from app.errors import EmployeeNotFoundError, MissingInputError
from app.services import PayrollService


def _seed(session):
    erin = crud.create_employee(session, "Erin Salaried", "salaried", salary=Decimal("120000"))
    hal = crud.create_employee(session, "Hal Hourly", "hourly", hourly_rate=Decimal("25"))
    crud.create_vacation(session, erin, date(2025, 1, 6), date(2025, 1, 8))
    crud.create_vacation(session, erin, date(2025, 2, 3), date(2025, 2, 4))
    crud.create_vacation(session, erin, date(2023, 5, 1), date(2023, 5, 19))
    crud.create_work_log(session, hal, date(2025, 1, 2), Decimal("8"))
    crud.create_work_log(session, hal, date(2025, 2, 3), Decimal("6"))
    return erin, hal


def test_repository_filters(test_db):
    erin, hal = _seed(test_db)

    assert [item.full_name for item in crud.list_employees(test_db)] == ["Erin Salaried", "Hal Hourly"]
    assert crud.get_employee(test_db, 12345) is None
    assert crud.get_employee(test_db, erin.id).salary == Decimal("120000")

    january_logs = crud.list_work_logs(test_db, year=2025, month=1)
    assert [log.date for log in january_logs] == [date(2025, 1, 2)]
    assert [log.date for log in crud.list_work_logs(test_db, employee_id=hal.id)] == [
        date(2025, 2, 3),
        date(2025, 1, 2),
    ]
    assert len(crud.list_vacations(test_db, year=2025)) == 2
    assert len(crud.list_vacations(test_db, employee_id=erin.id)) == 3


def test_create_vacation_rejects_inverted_interval(test_db):
    erin = crud.create_employee(test_db, "Erin Salaried", "salaried", salary=Decimal("1"))
    with pytest.raises(ValueError):
        crud.create_vacation(test_db, erin, date(2025, 1, 8), date(2025, 1, 6))


def test_bulk_load_maps_roster_ids(test_db):
    counts = crud.bulk_load(
        test_db,
        [Employee(id="A7", full_name="Erin Salaried", role="salaried", salary=Decimal("120000"))],
        [
            WorkLog(employee_id="A7", date=date(2025, 1, 2), hours_worked=Decimal("8")),
            WorkLog(employee_id="B1", date=date(2025, 1, 2), hours_worked=Decimal("8")),
        ],
        [Vacation(employee_id="A7", start_date=date(2025, 1, 6), end_date=date(2025, 1, 8))],
        [Holiday(date=date(2025, 1, 1), name="New Year")],
    )
    assert counts == {"employees": 1, "work_logs": 1, "vacations": 1, "holidays": 1}

    employee = crud.list_employees(test_db)[0]
    assert crud.list_vacations(test_db)[0].employee_id == employee.id
    assert crud.list_holidays(test_db, year=2025)[0].name == "New Year"
    assert crud.list_holidays(test_db, year=2024) == []


def test_service_runs_payroll_from_database(test_db):
    erin, hal = _seed(test_db)
    results = {result.employee.id: result for result in PayrollService(test_db).run_payroll("2025-01")}

    assert results[erin.id].pay == Decimal("9130.43")
    assert results[erin.id].vacation_deductions[0].deduct_days == 2
    assert results[hal.id].pay == Decimal("200")


def test_service_holidays_shift_deductions(test_db):
    erin, _ = _seed(test_db)
    crud.create_holiday(test_db, date(2025, 1, 7), name="Company day")

    result = next(
        item for item in PayrollService(test_db).run_payroll("2025-01") if item.employee.id == erin.id
    )
    assert result.vacation_deductions[0].deduct_days == 1
    assert result.vacation_deductions[0].amount == Decimal("454.55")


def test_service_free_allowance_override(test_db):
    erin, _ = _seed(test_db)
    results = PayrollService(test_db, free_allowance=5).run_payroll("2025-01")
    assert all(result.vacation_deductions == [] for result in results)


def test_service_requires_month(test_db):
    with pytest.raises(MissingInputError):
        PayrollService(test_db).run_payroll("")


def test_service_employee_summary(test_db):
    erin, _ = _seed(test_db)
    service = PayrollService(test_db)

    summary = service.employee_summary(erin.id, "2025-02")
    assert summary.total_vacation_days_calendar == 3 + 2 + 19
    assert summary.month.vacation_deduction == Decimal("500.00")
    assert service.count_employees() == 2

    with pytest.raises(EmployeeNotFoundError):
        service.employee_summary(999)
