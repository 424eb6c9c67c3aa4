"""Database access helpers.

Queries return the engine's plain records so the payroll core never sees
ORM objects or sessions.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core import records
from app.core.dates import month_bounds
from app.models import Employee, Holiday, Vacation, WorkLog


def to_employee_record(employee: Employee) -> records.Employee:
    return records.Employee(
        id=employee.id,
        full_name=employee.full_name,
        role=employee.role,
        salary=employee.salary,
        hourly_rate=employee.hourly_rate,
    )


def to_work_log_record(log: WorkLog) -> records.WorkLog:
    return records.WorkLog(
        employee_id=log.employee_id,
        date=log.date,
        hours_worked=log.hours_worked,
        id=log.id,
        description=log.description,
    )


def to_vacation_record(vacation: Vacation) -> records.Vacation:
    return records.Vacation(
        employee_id=vacation.employee_id,
        start_date=vacation.start_date,
        end_date=vacation.end_date,
        id=vacation.id,
        reason=vacation.reason,
    )


def list_employees(db: Session) -> list[records.Employee]:
    stmt = select(Employee).order_by(Employee.id)
    return [to_employee_record(item) for item in db.execute(stmt).scalars().all()]


def get_employee(db: Session, employee_id: int) -> records.Employee | None:
    employee = db.get(Employee, employee_id)
    return to_employee_record(employee) if employee is not None else None


def count_employees(db: Session) -> int:
    return db.execute(select(func.count(Employee.id))).scalar_one()


def list_work_logs(
    db: Session,
    employee_id: int | None = None,
    year: int | None = None,
    month: int | None = None,
) -> list[records.WorkLog]:
    """Work logs newest first, optionally for one employee and/or one month."""

    stmt = select(WorkLog)
    if employee_id is not None:
        stmt = stmt.where(WorkLog.employee_id == employee_id)
    if year is not None and month is not None:
        first_day, last_day = month_bounds(year, month)
        stmt = stmt.where(WorkLog.date.between(first_day, last_day))
    stmt = stmt.order_by(WorkLog.date.desc(), WorkLog.id.desc())
    return [to_work_log_record(item) for item in db.execute(stmt).scalars().all()]


def list_vacations(
    db: Session,
    employee_id: int | None = None,
    year: int | None = None,
) -> list[records.Vacation]:
    """Vacations newest first, optionally only those overlapping ``year``."""

    stmt = select(Vacation)
    if employee_id is not None:
        stmt = stmt.where(Vacation.employee_id == employee_id)
    if year is not None:
        stmt = stmt.where(
            Vacation.start_date <= date(year, 12, 31),
            Vacation.end_date >= date(year, 1, 1),
        )
    stmt = stmt.order_by(Vacation.start_date.desc(), Vacation.id.desc())
    return [to_vacation_record(item) for item in db.execute(stmt).scalars().all()]


def list_holidays(db: Session, year: int | None = None) -> list[records.Holiday]:
    stmt = select(Holiday)
    if year is not None:
        stmt = stmt.where(Holiday.date.between(date(year, 1, 1), date(year, 12, 31)))
    stmt = stmt.order_by(Holiday.date)
    return [records.Holiday(date=item.date, name=item.name) for item in db.execute(stmt).scalars().all()]


def create_employee(
    db: Session,
    full_name: str,
    role: str,
    salary: Decimal | None = None,
    hourly_rate: Decimal | None = None,
) -> Employee:
    employee = Employee(full_name=full_name, role=role, salary=salary, hourly_rate=hourly_rate)
    db.add(employee)
    db.commit()
    db.refresh(employee)
    return employee


def create_work_log(
    db: Session,
    employee: Employee,
    log_date: date,
    hours_worked: Decimal,
    description: str | None = None,
) -> WorkLog:
    log = WorkLog(
        employee_id=employee.id,
        date=log_date,
        hours_worked=hours_worked,
        description=description,
    )
    db.add(log)
    db.commit()
    db.refresh(log)
    return log


def create_vacation(
    db: Session,
    employee: Employee,
    start_date: date,
    end_date: date,
    reason: str | None = None,
) -> Vacation:
    if start_date > end_date:
        raise ValueError("Vacation start date must not be after its end date.")
    vacation = Vacation(
        employee_id=employee.id,
        start_date=start_date,
        end_date=end_date,
        reason=reason,
    )
    db.add(vacation)
    db.commit()
    db.refresh(vacation)
    return vacation


def create_holiday(db: Session, holiday_date: date, name: str | None = None) -> Holiday:
    holiday = Holiday(date=holiday_date, name=name)
    db.add(holiday)
    db.commit()
    db.refresh(holiday)
    return holiday


def bulk_load(
    db: Session,
    employees: Sequence[records.Employee],
    work_logs: Sequence[records.WorkLog],
    vacations: Sequence[records.Vacation],
    holidays: Sequence[records.Holiday],
) -> dict[str, int]:
    """Persist an imported roster, mapping roster ids to new database ids."""

    id_map: dict[object, int] = {}
    for item in employees:
        row = Employee(
            full_name=item.full_name,
            role=item.role,
            salary=item.salary,
            hourly_rate=item.hourly_rate,
        )
        db.add(row)
        db.flush()
        id_map[item.id] = row.id

    counts = {"employees": len(id_map), "work_logs": 0, "vacations": 0, "holidays": 0}
    for log in work_logs:
        if log.employee_id not in id_map:
            continue
        db.add(
            WorkLog(
                employee_id=id_map[log.employee_id],
                date=log.date,
                hours_worked=log.hours_worked or Decimal("0"),
                description=log.description,
            )
        )
        counts["work_logs"] += 1
    for vacation in vacations:
        if vacation.employee_id not in id_map:
            continue
        db.add(
            Vacation(
                employee_id=id_map[vacation.employee_id],
                start_date=vacation.start_date,
                end_date=vacation.end_date,
                reason=vacation.reason,
            )
        )
        counts["vacations"] += 1
    for holiday in holidays:
        db.add(Holiday(date=holiday.date, name=holiday.name))
        counts["holidays"] += 1
    db.commit()
    return counts
