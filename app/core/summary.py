"""Per-employee totals and an optional single-month pay breakdown."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from app.core.dates import build_holiday_set, parse_local_date, parse_month
from app.core.money import ZERO, round_money, to_decimal
from app.core.payroll import hourly_pay
from app.core.records import (
    ROLE_HOURLY,
    ROLE_SALARIED,
    Employee,
    Holiday,
    Vacation,
    VacationDeduction,
    WorkLog,
)
from app.core.vacation import (
    FREE_VACATION_DAYS_PER_QUARTER,
    compute_vacation_deductions,
    total_deduction,
)

RECENT_WORK_LOG_LIMIT = 10
RECENT_VACATION_LIMIT = 5


@dataclass
class MonthlyBreakdown:
    """Pay for one month. Hourly staff have no base pay, only ``monthly_pay``."""

    monthly_pay: Decimal
    monthly_base_pay: Decimal
    vacation_deduction: Decimal
    vacation_deduction_details: Optional[VacationDeduction]


@dataclass
class EmployeeSummary:
    """Lifetime totals for one employee plus the requested month, if any."""

    employee: Employee
    total_work_days: int
    total_hours_worked: Decimal
    total_vacation_days_calendar: int
    average_hours_per_day: Decimal
    month: Optional[MonthlyBreakdown] = None
    recent_work_logs: List[WorkLog] = field(default_factory=list)
    recent_vacations: List[Vacation] = field(default_factory=list)
    all_work_logs: List[WorkLog] = field(default_factory=list)
    all_vacations: List[Vacation] = field(default_factory=list)


def _sort_key(value) -> date:
    return parse_local_date(value) or date.min


def calendar_vacation_days(vacations: Iterable[Vacation]) -> int:
    """Inclusive calendar-day span of all vacations, weekends included.

    This deliberately differs from the billable-day count used for
    deductions. Intervals with unparsable dates contribute nothing.
    """

    total = 0
    for vacation in vacations:
        start = parse_local_date(vacation.start_date)
        end = parse_local_date(vacation.end_date)
        if start is None or end is None:
            continue
        total += (end - start).days + 1
    return total


def monthly_breakdown(
    employee: Employee,
    work_logs: List[WorkLog],
    vacations: List[Vacation],
    holidays: Iterable[Holiday],
    target_month: str,
    free_allowance: int = FREE_VACATION_DAYS_PER_QUARTER,
) -> MonthlyBreakdown:
    year, month = parse_month(target_month)

    if employee.role == ROLE_SALARIED:
        holiday_set = build_holiday_set(holidays, year)
        deductions = compute_vacation_deductions(
            employee.salary, vacations, year, month, holiday_set, free_allowance
        )
        base_pay = round_money(to_decimal(employee.salary) / 12)
        deducted = total_deduction(deductions)
        return MonthlyBreakdown(
            monthly_pay=base_pay - deducted,
            monthly_base_pay=base_pay,
            vacation_deduction=deducted,
            vacation_deduction_details=deductions[0] if deductions else None,
        )

    if employee.role == ROLE_HOURLY:
        return MonthlyBreakdown(
            monthly_pay=hourly_pay(employee, work_logs, year, month),
            monthly_base_pay=ZERO,
            vacation_deduction=ZERO,
            vacation_deduction_details=None,
        )

    return MonthlyBreakdown(
        monthly_pay=ZERO,
        monthly_base_pay=ZERO,
        vacation_deduction=ZERO,
        vacation_deduction_details=None,
    )


def compute_employee_summary(
    employee: Employee,
    work_logs: Iterable[WorkLog],
    vacations: Iterable[Vacation],
    holidays: Iterable[Holiday],
    target_month: Optional[str] = None,
    free_allowance: int = FREE_VACATION_DAYS_PER_QUARTER,
) -> EmployeeSummary:
    """Summarize one employee's logs and vacations.

    Only records whose ``employee_id`` matches ``employee.id`` are counted.
    Lists are returned newest first.
    """

    own_logs = sorted(
        (log for log in work_logs if log.employee_id == employee.id),
        key=lambda log: _sort_key(log.date),
        reverse=True,
    )
    own_vacations = sorted(
        (vacation for vacation in vacations if vacation.employee_id == employee.id),
        key=lambda vacation: _sort_key(vacation.start_date),
        reverse=True,
    )

    total_work_days = len(own_logs)
    total_hours = sum((to_decimal(log.hours_worked) for log in own_logs), ZERO)
    average = round_money(total_hours / total_work_days) if total_work_days else ZERO

    breakdown = None
    if target_month:
        breakdown = monthly_breakdown(
            employee, own_logs, own_vacations, holidays, target_month, free_allowance
        )

    return EmployeeSummary(
        employee=employee,
        total_work_days=total_work_days,
        total_hours_worked=total_hours,
        total_vacation_days_calendar=calendar_vacation_days(own_vacations),
        average_hours_per_day=average,
        month=breakdown,
        recent_work_logs=own_logs[:RECENT_WORK_LOG_LIMIT],
        recent_vacations=own_vacations[:RECENT_VACATION_LIMIT],
        all_work_logs=own_logs,
        all_vacations=own_vacations,
    )


__all__ = [
    "EmployeeSummary",
    "MonthlyBreakdown",
    "RECENT_VACATION_LIMIT",
    "RECENT_WORK_LOG_LIMIT",
    "calendar_vacation_days",
    "compute_employee_summary",
    "monthly_breakdown",
]
