"""Exceptions surfaced to callers of the payroll service."""
from __future__ import annotations


class PayrollError(Exception):
    """Base class for request-level payroll errors."""


class MissingInputError(PayrollError):
    """A required request parameter was not supplied."""


class InvalidMonthError(PayrollError):
    """A month parameter was not in YYYY-MM format."""


class EmployeeNotFoundError(PayrollError):
    """The referenced employee does not exist."""

    def __init__(self, employee_id) -> None:
        super().__init__(f"Employee not found: {employee_id}")
        self.employee_id = employee_id
