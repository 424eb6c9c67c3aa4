"""Payroll and employee summary routes."""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.database import get_session
from app.errors import EmployeeNotFoundError, InvalidMonthError, MissingInputError
from app.schemas import EmployeeCountRead, EmployeeSummaryRead, PayrollEntryRead
from app.services import PayrollService

router = APIRouter(tags=["Payroll"])


@router.get("/payroll", response_model=list[PayrollEntryRead])
def calculate_payroll(
    month: Optional[str] = Query(None, description="Target month in YYYY-MM format."),
    db: Session = Depends(get_session),
):
    try:
        results = PayrollService(db).run_payroll(month)
    except (MissingInputError, InvalidMonthError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return [PayrollEntryRead.from_result(result) for result in results]


@router.get("/employees/count", response_model=EmployeeCountRead)
def employee_count(db: Session = Depends(get_session)):
    return EmployeeCountRead(count=PayrollService(db).count_employees())


@router.get("/employees/{employee_id}/summary", response_model=EmployeeSummaryRead)
def employee_summary(
    employee_id: int,
    month: Optional[str] = Query(None, description="Optional month in YYYY-MM format."),
    db: Session = Depends(get_session),
):
    try:
        summary = PayrollService(db).employee_summary(employee_id, month)
    except EmployeeNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Employee not found") from exc
    except (MissingInputError, InvalidMonthError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return EmployeeSummaryRead.from_summary(summary)
