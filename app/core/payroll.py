"""Core payroll calculation shared between the CLI and web app."""
from __future__ import annotations

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Set

from app.core.dates import build_holiday_set, month_bounds, parse_local_date, parse_month
from app.core.money import ZERO, to_decimal
from app.core.records import (
    ROLE_HOURLY,
    ROLE_SALARIED,
    Employee,
    Holiday,
    PayrollResult,
    Vacation,
    WorkLog,
)
from app.core.vacation import (
    FREE_VACATION_DAYS_PER_QUARTER,
    compute_vacation_deductions,
    total_deduction,
)

logger = logging.getLogger(__name__)


def group_by_employee(items: Iterable) -> Dict[object, list]:
    """Index work logs or vacations by their ``employee_id``."""

    grouped: Dict[object, list] = defaultdict(list)
    for item in items:
        grouped[item.employee_id].append(item)
    return grouped


def monthly_base_salary(employee: Employee) -> Decimal:
    """Annual salary spread evenly over twelve months, unrounded."""

    return to_decimal(employee.salary) / 12


def hours_in_month(work_logs: Iterable[WorkLog], year: int, month: int) -> Decimal:
    """Sum hours of logs dated within the month; duplicates on a date add up."""

    first_day, last_day = month_bounds(year, month)
    total = ZERO
    for log in work_logs:
        log_date = parse_local_date(log.date)
        if log_date is None or not first_day <= log_date <= last_day:
            continue
        total += to_decimal(log.hours_worked)
    return total


def hourly_pay(employee: Employee, work_logs: Iterable[WorkLog], year: int, month: int) -> Decimal:
    return to_decimal(employee.hourly_rate) * hours_in_month(work_logs, year, month)


def compute_employee_pay(
    employee: Employee,
    work_logs: Sequence[WorkLog],
    vacations: Sequence[Vacation],
    holiday_set: Set[str],
    year: int,
    month: int,
    free_allowance: int = FREE_VACATION_DAYS_PER_QUARTER,
) -> PayrollResult:
    """Compute one employee's pay for the target month.

    ``work_logs`` and ``vacations`` must already belong to ``employee``.
    Salaried pay is the monthly base minus excess-vacation deductions; hourly
    pay is rate times hours logged in the month. Unknown roles are paid zero.
    """

    if employee.role == ROLE_SALARIED:
        deductions = compute_vacation_deductions(
            employee.salary, vacations, year, month, holiday_set, free_allowance
        )
        pay = monthly_base_salary(employee) - total_deduction(deductions)
        return PayrollResult(employee=employee, pay=pay, vacation_deductions=deductions)

    if employee.role == ROLE_HOURLY:
        return PayrollResult(employee=employee, pay=hourly_pay(employee, work_logs, year, month))

    logger.warning("Employee %s has unknown role %r; paying zero", employee.id, employee.role)
    return PayrollResult(employee=employee, pay=ZERO)


def compute_payroll(
    employees: Iterable[Employee],
    work_logs: Iterable[WorkLog],
    vacations: Iterable[Vacation],
    holidays: Iterable[Holiday],
    target_month: Optional[str],
    free_allowance: int = FREE_VACATION_DAYS_PER_QUARTER,
) -> List[PayrollResult]:
    """Compute pay for every employee in roster order for ``target_month``.

    Raises ``MissingInputError`` when no month is given and
    ``InvalidMonthError`` when it is not ``YYYY-MM``.
    """

    year, month = parse_month(target_month)
    holiday_set = build_holiday_set(holidays, year)
    logs_by_employee = group_by_employee(work_logs)
    vacations_by_employee = group_by_employee(vacations)

    results: List[PayrollResult] = []
    for employee in employees:
        results.append(
            compute_employee_pay(
                employee,
                logs_by_employee.get(employee.id, []),
                vacations_by_employee.get(employee.id, []),
                holiday_set,
                year,
                month,
                free_allowance,
            )
        )
    logger.info("Computed payroll for %s: %d employees", target_month, len(results))
    return results


__all__ = [
    "compute_employee_pay",
    "compute_payroll",
    "group_by_employee",
    "hourly_pay",
    "hours_in_month",
    "monthly_base_salary",
]
