from __future__ import annotations

from pathlib import Path
from typing import Iterable

import pandas as pd

from app.core.formatting import money_to_float
from app.core.records import PayrollResult
from app.core.vacation import total_deduction
from app.importers.roster import ValidationMessage

PAYROLL_COLUMNS = ["Employee ID", "Full Name", "Role", "Deduction Days", "Deductions", "Pay"]
DEDUCTION_COLUMNS = ["Employee ID", "Full Name", "Month", "Deduct Days", "Amount"]
VALIDATION_COLUMNS = ["Table", "Row", "Severity", "Issue"]


def _money_columns(currency: str) -> dict[str, str]:
    return {
        "Deductions": f"Deductions ({currency})",
        "Pay": f"Pay ({currency})",
        "Amount": f"Amount ({currency})",
    }


def payroll_df(results: Iterable[PayrollResult], currency: str = "USD") -> pd.DataFrame:
    rows = []
    for result in results:
        rows.append(
            {
                "Employee ID": result.employee.id,
                "Full Name": result.employee.full_name,
                "Role": result.employee.role.title(),
                "Deduction Days": sum(item.deduct_days for item in result.vacation_deductions),
                "Deductions": money_to_float(total_deduction(result.vacation_deductions)),
                "Pay": money_to_float(result.pay),
            }
        )
    df = pd.DataFrame(rows, columns=PAYROLL_COLUMNS)
    return df.rename(columns=_money_columns(currency))


def deductions_df(results: Iterable[PayrollResult], currency: str = "USD") -> pd.DataFrame:
    rows = []
    for result in results:
        for item in result.vacation_deductions:
            rows.append(
                {
                    "Employee ID": result.employee.id,
                    "Full Name": result.employee.full_name,
                    "Month": item.month,
                    "Deduct Days": item.deduct_days,
                    "Amount": money_to_float(item.amount),
                }
            )
    df = pd.DataFrame(rows, columns=DEDUCTION_COLUMNS)
    return df.rename(columns=_money_columns(currency))


def validation_df(messages: Iterable[ValidationMessage]) -> pd.DataFrame:
    rows = [
        {
            "Table": message.table,
            "Row": message.row_number,
            "Severity": message.level,
            "Issue": message.text,
        }
        for message in messages
    ]
    df = pd.DataFrame(rows, columns=VALIDATION_COLUMNS)
    if not df.empty:
        df = df.sort_values(["Table", "Row", "Severity"]).reset_index(drop=True)
    return df


def export_outputs(
    base_filename: str,
    payroll_frame: pd.DataFrame,
    deductions_frame: pd.DataFrame,
    validation_frame: pd.DataFrame,
    output_dir: Path,
) -> Path:
    """Write the Excel workbook and companion CSV extracts; return the workbook path."""

    output_dir.mkdir(parents=True, exist_ok=True)

    excel_path = output_dir / f"{base_filename}.xlsx"
    with pd.ExcelWriter(excel_path, engine="openpyxl") as writer:
        payroll_frame.to_excel(writer, sheet_name="Payroll", index=False)
        deductions_frame.to_excel(writer, sheet_name="Vacation_Deductions", index=False)
        validation_frame.to_excel(writer, sheet_name="Validation", index=False)

    payroll_frame.to_csv(output_dir / f"{base_filename}.csv", index=False)
    deductions_frame.to_csv(output_dir / f"{base_filename}_deductions.csv", index=False)
    validation_frame.to_csv(output_dir / f"{base_filename}_validation.csv", index=False)
    return excel_path
