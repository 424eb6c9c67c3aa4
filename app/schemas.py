"""Pydantic schemas for API responses."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.core.formatting import format_iso_date, money_to_float
from app.core.money import to_decimal
from app.core.records import Employee, PayrollResult, Vacation, VacationDeduction, WorkLog
from app.core.summary import EmployeeSummary


def _optional_money(value) -> Optional[float]:
    return money_to_float(value) if value is not None else None


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class EmployeeRef(_CamelModel):
    id: Any
    full_name: str = Field(..., alias="fullName")
    role: str

    @classmethod
    def from_record(cls, employee: Employee) -> "EmployeeRef":
        return cls(id=employee.id, full_name=employee.full_name, role=employee.role)


class EmployeeRead(EmployeeRef):
    salary: Optional[float] = None
    hourly_rate: Optional[float] = Field(None, alias="hourlyRate")

    @classmethod
    def from_record(cls, employee: Employee) -> "EmployeeRead":
        return cls(
            id=employee.id,
            full_name=employee.full_name,
            role=employee.role,
            salary=_optional_money(employee.salary),
            hourly_rate=_optional_money(employee.hourly_rate),
        )


class VacationDeductionRead(BaseModel):
    month: str
    deduct_days: int
    amount: float

    @classmethod
    def from_record(cls, deduction: VacationDeduction) -> "VacationDeductionRead":
        return cls(
            month=deduction.month,
            deduct_days=deduction.deduct_days,
            amount=money_to_float(deduction.amount),
        )


class PayrollEntryRead(_CamelModel):
    employee: EmployeeRef
    pay: float
    vacation_deductions: list[VacationDeductionRead] = Field(
        default_factory=list, alias="vacationDeductions"
    )

    @classmethod
    def from_result(cls, result: PayrollResult) -> "PayrollEntryRead":
        return cls(
            employee=EmployeeRef.from_record(result.employee),
            pay=money_to_float(result.pay),
            vacation_deductions=[
                VacationDeductionRead.from_record(item) for item in result.vacation_deductions
            ],
        )


class WorkLogRead(_CamelModel):
    id: Any = None
    employee_id: Any = Field(..., alias="employeeId")
    date: Optional[str]
    hours_worked: float = Field(..., alias="hoursWorked")
    description: Optional[str] = None

    @classmethod
    def from_record(cls, log: WorkLog) -> "WorkLogRead":
        return cls(
            id=log.id,
            employee_id=log.employee_id,
            date=format_iso_date(log.date),
            hours_worked=float(to_decimal(log.hours_worked)),
            description=log.description,
        )


class VacationRead(_CamelModel):
    id: Any = None
    employee_id: Any = Field(..., alias="employeeId")
    start_date: Optional[str] = Field(..., alias="startDate")
    end_date: Optional[str] = Field(..., alias="endDate")
    reason: Optional[str] = None

    @classmethod
    def from_record(cls, vacation: Vacation) -> "VacationRead":
        return cls(
            id=vacation.id,
            employee_id=vacation.employee_id,
            start_date=format_iso_date(vacation.start_date),
            end_date=format_iso_date(vacation.end_date),
            reason=vacation.reason,
        )


class SummaryTotalsRead(_CamelModel):
    total_work_days: int = Field(..., alias="totalWorkDays")
    total_hours_worked: float = Field(..., alias="totalHoursWorked")
    total_vacation_days: int = Field(..., alias="totalVacationDays")
    monthly_pay: Optional[float] = Field(None, alias="monthlyPay")
    monthly_base_pay: Optional[float] = Field(None, alias="monthlyBasePay")
    vacation_deduction: Optional[float] = Field(None, alias="vacationDeduction")
    vacation_deduction_details: Optional[VacationDeductionRead] = Field(
        None, alias="vacationDeductionDetails"
    )
    average_hours_per_day: float = Field(..., alias="averageHoursPerDay")


class EmployeeSummaryRead(_CamelModel):
    employee: EmployeeRead
    summary: SummaryTotalsRead
    recent_work_logs: list[WorkLogRead] = Field(..., alias="recentWorkLogs")
    recent_vacations: list[VacationRead] = Field(..., alias="recentVacations")
    all_work_logs: list[WorkLogRead] = Field(..., alias="allWorkLogs")
    all_vacations: list[VacationRead] = Field(..., alias="allVacations")

    @classmethod
    def from_summary(cls, summary: EmployeeSummary) -> "EmployeeSummaryRead":
        breakdown = summary.month
        details = breakdown.vacation_deduction_details if breakdown else None
        totals = SummaryTotalsRead(
            total_work_days=summary.total_work_days,
            total_hours_worked=float(summary.total_hours_worked),
            total_vacation_days=summary.total_vacation_days_calendar,
            monthly_pay=money_to_float(breakdown.monthly_pay) if breakdown else None,
            monthly_base_pay=money_to_float(breakdown.monthly_base_pay) if breakdown else None,
            vacation_deduction=money_to_float(breakdown.vacation_deduction) if breakdown else None,
            vacation_deduction_details=VacationDeductionRead.from_record(details) if details else None,
            average_hours_per_day=float(summary.average_hours_per_day),
        )
        return cls(
            employee=EmployeeRead.from_record(summary.employee),
            summary=totals,
            recent_work_logs=[WorkLogRead.from_record(item) for item in summary.recent_work_logs],
            recent_vacations=[VacationRead.from_record(item) for item in summary.recent_vacations],
            all_work_logs=[WorkLogRead.from_record(item) for item in summary.all_work_logs],
            all_vacations=[VacationRead.from_record(item) for item in summary.all_vacations],
        )


class EmployeeCountRead(BaseModel):
    count: int
