"""Application service layer."""
from __future__ import annotations

from sqlalchemy.orm import Session

from app import config, crud
from app.core.dates import parse_month
from app.core.payroll import compute_payroll
from app.core.records import PayrollResult
from app.core.summary import EmployeeSummary, compute_employee_summary
from app.errors import EmployeeNotFoundError


class PayrollService:
    """Loads records through the repository helpers and runs the engine."""

    def __init__(self, db: Session, free_allowance: int | None = None) -> None:
        self.db = db
        self.free_allowance = (
            config.FREE_VACATION_DAYS if free_allowance is None else free_allowance
        )

    def count_employees(self) -> int:
        return crud.count_employees(self.db)

    def run_payroll(self, target_month: str | None) -> list[PayrollResult]:
        year, month = parse_month(target_month)
        employees = crud.list_employees(self.db)
        work_logs = crud.list_work_logs(self.db, year=year, month=month)
        vacations = crud.list_vacations(self.db, year=year)
        holidays = crud.list_holidays(self.db, year=year)
        return compute_payroll(
            employees,
            work_logs,
            vacations,
            holidays,
            target_month,
            free_allowance=self.free_allowance,
        )

    def employee_summary(self, employee_id: int, target_month: str | None = None) -> EmployeeSummary:
        employee = crud.get_employee(self.db, employee_id)
        if employee is None:
            raise EmployeeNotFoundError(employee_id)

        holidays = []
        if target_month:
            year, _ = parse_month(target_month)
            holidays = crud.list_holidays(self.db, year=year)

        return compute_employee_summary(
            employee,
            crud.list_work_logs(self.db, employee_id=employee_id),
            crud.list_vacations(self.db, employee_id=employee_id),
            holidays,
            target_month,
            free_allowance=self.free_allowance,
        )
