"""Payroll CLI for computing monthly pay with vacation deductions.

Reads employees, work logs, vacations and public holidays from CSV or Excel,
computes the target month's payroll, and exports results to Excel/CSV
bundles.
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

import pandas as pd

from app import config
from app.core.dates import parse_month
from app.core.formatting import format_money
from app.core.money import ZERO
from app.core.payroll import compute_payroll
from app.errors import PayrollError
from app.exporting.xlsx import deductions_df, export_outputs, payroll_df, validation_df
from app.importers.roster import load_roster

logger = logging.getLogger("payroll")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments."""

    parser = argparse.ArgumentParser(description="Compute monthly payroll from an employee roster.")
    parser.add_argument("--month", required=True, help="Target month in YYYY-MM format.")
    parser.add_argument("--employees", required=True, help="Path to employees CSV or Excel file.")
    parser.add_argument("--work-logs", help="Path to work logs CSV or Excel file.")
    parser.add_argument("--vacations", help="Path to vacations CSV or Excel file.")
    parser.add_argument("--holidays", help="Path to public holidays CSV or Excel file.")
    parser.add_argument(
        "--out",
        default=str(config.EXPORT_DIR),
        help=f"Output directory for generated files (default: {config.EXPORT_DIR}).",
    )
    parser.add_argument(
        "--currency",
        default=config.CURRENCY,
        help=f"Currency code for reporting column headers (default: {config.CURRENCY}).",
    )
    parser.add_argument(
        "--free-days",
        type=int,
        default=config.FREE_VACATION_DAYS,
        help="Billable vacation days per quarter exempt from deduction.",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Print the payroll preview to stdout before writing files.",
    )
    parser.add_argument(
        "--store",
        action="store_true",
        help="Also persist the imported roster into the configured database.",
    )
    return parser.parse_args(argv)


def _optional_path(value: Optional[str]) -> Optional[Path]:
    return Path(value) if value else None


def print_preview(payroll_frame: pd.DataFrame) -> None:
    """Print the payroll table to stdout in a human-friendly layout."""

    if payroll_frame.empty:
        print("No employees found in the roster.")
        return
    print(payroll_frame.to_string(index=False))


def store_roster(roster) -> None:
    from app import crud
    from app.database import SessionLocal, init_db

    init_db()
    session = SessionLocal()
    try:
        counts = crud.bulk_load(
            session, roster.employees, roster.work_logs, roster.vacations, roster.holidays
        )
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
    logger.info("Stored roster: %s", counts)


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point."""

    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    args = parse_args(argv)
    try:
        target_year, target_month = parse_month(args.month)
    except PayrollError as exc:
        raise SystemExit(f"--month: {exc}") from exc

    roster = load_roster(
        Path(args.employees),
        work_logs_path=_optional_path(args.work_logs),
        vacations_path=_optional_path(args.vacations),
        holidays_path=_optional_path(args.holidays),
    )
    for message in roster.messages:
        logger.warning("[%s row %s] %s: %s", message.table, message.row_number, message.level, message.text)

    results = compute_payroll(
        roster.employees,
        roster.work_logs,
        roster.vacations,
        roster.holidays,
        args.month,
        free_allowance=args.free_days,
    )

    payroll_frame = payroll_df(results, args.currency)
    if args.preview:
        print_preview(payroll_frame)

    base_filename = f"payroll_{target_year:04d}_{target_month:02d}"
    export_outputs(
        base_filename,
        payroll_frame,
        deductions_df(results, args.currency),
        validation_df(roster.messages),
        Path(args.out),
    )

    if args.store:
        store_roster(roster)

    total = sum((result.pay for result in results), ZERO)
    deducted = sum(1 for result in results if result.vacation_deductions)
    print(
        f"Computed pay for {len(results)} employees, total {format_money(total, args.currency)}."
        f" Vacation deductions applied: {deducted}."
    )


if __name__ == "__main__":
    main()
