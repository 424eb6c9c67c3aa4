"""Load employees, work logs, vacations and holidays from CSV or Excel files."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Optional

import pandas as pd
from dateutil import parser as date_parser

from app.core.dates import parse_local_date
from app.core.records import ROLE_ENUM, ROLE_HOURLY, ROLE_SALARIED, Employee, Holiday, Vacation, WorkLog

EMPLOYEE_COLUMNS: dict[str, dict[str, Any]] = {
    "id": {"aliases": ["id", "employee id", "employee_id", "employeeid", "code"], "required": True},
    "full_name": {"aliases": ["full name", "fullname", "full_name", "name"], "required": True},
    "role": {"aliases": ["role", "compensation", "pay type"], "required": True},
    "salary": {"aliases": ["salary", "annual salary", "salary annual"], "required": False},
    "hourly_rate": {"aliases": ["hourly rate", "hourlyrate", "hourly_rate", "rate"], "required": False},
}

WORK_LOG_COLUMNS: dict[str, dict[str, Any]] = {
    "employee_id": {"aliases": ["employee id", "employee_id", "employeeid", "employee"], "required": True},
    "date": {"aliases": ["date", "work date", "log date"], "required": True},
    "hours_worked": {"aliases": ["hours worked", "hoursworked", "hours_worked", "hours"], "required": True},
    "description": {"aliases": ["description", "notes", "note"], "required": False},
}

VACATION_COLUMNS: dict[str, dict[str, Any]] = {
    "employee_id": {"aliases": ["employee id", "employee_id", "employeeid", "employee"], "required": True},
    "start_date": {"aliases": ["start date", "startdate", "start_date", "from"], "required": True},
    "end_date": {"aliases": ["end date", "enddate", "end_date", "to"], "required": True},
    "reason": {"aliases": ["reason", "notes", "note"], "required": False},
}

HOLIDAY_COLUMNS: dict[str, dict[str, Any]] = {
    "date": {"aliases": ["date", "holiday date", "holiday"], "required": True},
    "name": {"aliases": ["name", "description", "holiday name"], "required": False},
}

_ISO_PREFIX = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}")


@dataclass
class ValidationMessage:
    """Represents a validation outcome captured while parsing a row."""

    level: str
    text: str
    table: str = ""
    row_number: int = 0


@dataclass
class RosterImport:
    employees: list[Employee] = field(default_factory=list)
    work_logs: list[WorkLog] = field(default_factory=list)
    vacations: list[Vacation] = field(default_factory=list)
    holidays: list[Holiday] = field(default_factory=list)
    messages: list[ValidationMessage] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(message.level == "error" for message in self.messages)


def _row_number(idx: Any) -> int:
    try:
        return int(idx) + 2  # account for header row when referencing Excel-style numbers
    except (TypeError, ValueError):
        return 0


def load_table(input_path: Path, sheet: Optional[str] = None) -> pd.DataFrame:
    """Load a CSV or Excel sheet into a DataFrame."""

    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    ext = input_path.suffix.lower()
    if ext == ".csv":
        return pd.read_csv(input_path)
    if ext in {".xls", ".xlsx"}:
        return pd.read_excel(input_path, sheet_name=sheet or 0)
    raise ValueError("Unsupported input file type. Provide .csv or .xlsx")


def normalize_columns(df: pd.DataFrame, columns: dict[str, dict[str, Any]], table: str) -> pd.DataFrame:
    """Rename aliased headers to canonical names and check required columns."""

    lookup = {
        alias: canonical for canonical, options in columns.items() for alias in options["aliases"]
    }
    rename_map = {}
    for column in df.columns:
        key = str(column).strip().lower()
        if key in lookup and lookup[key] not in rename_map.values():
            rename_map[column] = lookup[key]
    df = df.rename(columns=rename_map)

    missing = {
        canonical
        for canonical, options in columns.items()
        if options["required"] and canonical not in df.columns
    }
    if missing:
        raise ValueError(f"{table} input missing required columns: {', '.join(sorted(missing))}")
    return df


def _cell(row: pd.Series, key: str) -> Any:
    value = row.get(key)
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def parse_text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def parse_identifier(value: Any) -> Optional[str]:
    """Normalize ids so 7, 7.0 and "7" refer to the same employee."""

    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    return text or None


def parse_cell_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None


def parse_cell_date(value: Any) -> Optional[date]:
    """Parse a spreadsheet cell; ISO strings keep their calendar day."""

    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return parse_local_date(value)
    text = str(value).strip()
    if not text:
        return None
    if _ISO_PREFIX.match(text):
        return parse_local_date(text)
    try:
        return date_parser.parse(text).date()
    except (ValueError, TypeError, OverflowError):
        return None


def parse_employees(df: pd.DataFrame) -> tuple[list[Employee], list[ValidationMessage]]:
    employees: list[Employee] = []
    messages: list[ValidationMessage] = []
    seen: set[str] = set()

    for idx, row in df.iterrows():
        row_number = _row_number(idx)

        def warn(level: str, text: str) -> None:
            messages.append(ValidationMessage(level, text, "employees", row_number))

        employee_id = parse_identifier(_cell(row, "id"))
        if employee_id is None:
            warn("error", "Employee id is required.")
            continue
        if employee_id in seen:
            warn("error", f"Duplicate employee id '{employee_id}'.")
            continue
        seen.add(employee_id)

        full_name = parse_text(_cell(row, "full_name"))
        if not full_name:
            warn("warning", "Full name is blank.")

        role = parse_text(_cell(row, "role")).lower()
        if role not in ROLE_ENUM:
            warn("warning", f"Unrecognized role '{role}'; employee will be paid zero.")

        salary = parse_cell_decimal(_cell(row, "salary"))
        hourly_rate = parse_cell_decimal(_cell(row, "hourly_rate"))
        if role == ROLE_SALARIED and not salary:
            warn("warning", "Salaried employee has no salary; base pay will be zero.")
        if role == ROLE_HOURLY and not hourly_rate:
            warn("warning", "Hourly employee has no hourly rate; pay will be zero.")

        employees.append(
            Employee(
                id=employee_id,
                full_name=full_name,
                role=role,
                salary=salary,
                hourly_rate=hourly_rate,
            )
        )
    return employees, messages


def parse_work_logs(df: pd.DataFrame, known_ids: set[str]) -> tuple[list[WorkLog], list[ValidationMessage]]:
    logs: list[WorkLog] = []
    messages: list[ValidationMessage] = []
    for idx, row in df.iterrows():
        row_number = _row_number(idx)
        employee_id = parse_identifier(_cell(row, "employee_id"))
        if employee_id not in known_ids:
            messages.append(
                ValidationMessage("warning", f"Unknown employee '{employee_id}'; row skipped.", "work_logs", row_number)
            )
            continue
        log_date = parse_cell_date(_cell(row, "date"))
        if log_date is None:
            messages.append(ValidationMessage("error", "Date is missing or invalid.", "work_logs", row_number))
            continue
        hours = parse_cell_decimal(_cell(row, "hours_worked"))
        if hours is None:
            messages.append(ValidationMessage("warning", "Hours worked missing; counted as zero.", "work_logs", row_number))
            hours = Decimal("0")
        elif hours < 0:
            messages.append(ValidationMessage("error", "Hours worked must not be negative.", "work_logs", row_number))
            continue
        logs.append(
            WorkLog(
                employee_id=employee_id,
                date=log_date,
                hours_worked=hours,
                id=row_number,
                description=parse_text(_cell(row, "description")) or None,
            )
        )
    return logs, messages


def parse_vacations(df: pd.DataFrame, known_ids: set[str]) -> tuple[list[Vacation], list[ValidationMessage]]:
    vacations: list[Vacation] = []
    messages: list[ValidationMessage] = []
    for idx, row in df.iterrows():
        row_number = _row_number(idx)
        employee_id = parse_identifier(_cell(row, "employee_id"))
        if employee_id not in known_ids:
            messages.append(
                ValidationMessage("warning", f"Unknown employee '{employee_id}'; row skipped.", "vacations", row_number)
            )
            continue
        start = parse_cell_date(_cell(row, "start_date"))
        end = parse_cell_date(_cell(row, "end_date"))
        if start is None or end is None:
            messages.append(ValidationMessage("error", "Start or end date is missing or invalid.", "vacations", row_number))
            continue
        if start > end:
            messages.append(ValidationMessage("error", "Start date is after end date.", "vacations", row_number))
            continue
        vacations.append(
            Vacation(
                employee_id=employee_id,
                start_date=start,
                end_date=end,
                id=row_number,
                reason=parse_text(_cell(row, "reason")) or None,
            )
        )
    return vacations, messages


def parse_holidays(df: pd.DataFrame) -> tuple[list[Holiday], list[ValidationMessage]]:
    holidays: list[Holiday] = []
    messages: list[ValidationMessage] = []
    for idx, row in df.iterrows():
        holiday_date = parse_cell_date(_cell(row, "date"))
        if holiday_date is None:
            messages.append(ValidationMessage("error", "Holiday date is missing or invalid.", "holidays", _row_number(idx)))
            continue
        holidays.append(Holiday(date=holiday_date, name=parse_text(_cell(row, "name")) or None))
    return holidays, messages


def load_roster(
    employees_path: Path,
    work_logs_path: Optional[Path] = None,
    vacations_path: Optional[Path] = None,
    holidays_path: Optional[Path] = None,
) -> RosterImport:
    """Read every supplied file and collect records plus validation messages."""

    roster = RosterImport()
    employees_df = normalize_columns(load_table(employees_path), EMPLOYEE_COLUMNS, "Employees")
    roster.employees, messages = parse_employees(employees_df)
    roster.messages.extend(messages)
    known_ids = {employee.id for employee in roster.employees}

    if work_logs_path is not None:
        df = normalize_columns(load_table(work_logs_path), WORK_LOG_COLUMNS, "Work logs")
        roster.work_logs, messages = parse_work_logs(df, known_ids)
        roster.messages.extend(messages)
    if vacations_path is not None:
        df = normalize_columns(load_table(vacations_path), VACATION_COLUMNS, "Vacations")
        roster.vacations, messages = parse_vacations(df, known_ids)
        roster.messages.extend(messages)
    if holidays_path is not None:
        df = normalize_columns(load_table(holidays_path), HOLIDAY_COLUMNS, "Holidays")
        roster.holidays, messages = parse_holidays(df)
        roster.messages.extend(messages)
    return roster


__all__ = [
    "RosterImport",
    "ValidationMessage",
    "load_roster",
    "load_table",
    "normalize_columns",
    "parse_cell_date",
    "parse_cell_decimal",
    "parse_employees",
    "parse_holidays",
    "parse_identifier",
    "parse_vacations",
    "parse_work_logs",
]
