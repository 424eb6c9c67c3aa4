"""Plain in-memory records consumed and produced by the payroll engine."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional, Union

DateLike = Union[date, datetime, str, None]

ROLE_SALARIED = "salaried"
ROLE_HOURLY = "hourly"
ROLE_ENUM = (ROLE_SALARIED, ROLE_HOURLY)


@dataclass(frozen=True)
class Employee:
    """An employee as seen by the engine.

    Only the compensation field matching ``role`` is used; the other one is
    ignored even when present.
    """

    id: Any
    full_name: str
    role: str
    salary: Optional[Decimal] = None
    hourly_rate: Optional[Decimal] = None


@dataclass(frozen=True)
class WorkLog:
    """Hours logged by one employee on one calendar date."""

    employee_id: Any
    date: DateLike
    hours_worked: Optional[Decimal]
    id: Any = None
    description: Optional[str] = None


@dataclass(frozen=True)
class Vacation:
    """One contiguous vacation interval, inclusive on both ends."""

    employee_id: Any
    start_date: DateLike
    end_date: DateLike
    id: Any = None
    reason: Optional[str] = None


@dataclass(frozen=True)
class Holiday:
    """A public holiday, independent of any employee."""

    date: DateLike
    name: Optional[str] = None


@dataclass(frozen=True)
class VacationDeduction:
    """Excess vacation days charged against one month's salary."""

    month: str
    deduct_days: int
    amount: Decimal


@dataclass
class PayrollResult:
    """Pay computed for one employee in a target month."""

    employee: Employee
    pay: Decimal
    vacation_deductions: List[VacationDeduction] = field(default_factory=list)


__all__ = [
    "DateLike",
    "Employee",
    "Holiday",
    "PayrollResult",
    "ROLE_ENUM",
    "ROLE_HOURLY",
    "ROLE_SALARIED",
    "Vacation",
    "VacationDeduction",
    "WorkLog",
]
