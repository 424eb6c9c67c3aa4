"""Vacation-aware payroll engine and its thin service layer."""

__version__ = "1.0.0"
