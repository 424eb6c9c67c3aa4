from decimal import Decimal

from openpyxl import load_workbook

from app.core.records import Employee, PayrollResult, VacationDeduction
from app.exporting.xlsx import deductions_df, export_outputs, payroll_df, validation_df
from app.importers.roster import ValidationMessage


def _results():
    erin = Employee(id=1, full_name="Erin Salaried", role="salaried", salary=Decimal("120000"))
    hal = Employee(id=2, full_name="Hal Hourly", role="hourly", hourly_rate=Decimal("25"))
    return [
        PayrollResult(
            employee=erin,
            pay=Decimal("9130.43"),
            vacation_deductions=[VacationDeduction("2025-01", 2, Decimal("869.57"))],
        ),
        PayrollResult(employee=hal, pay=Decimal("387.5")),
    ]


def test_payroll_df_columns_and_values():
    df = payroll_df(_results(), "EUR")
    assert list(df.columns) == [
        "Employee ID",
        "Full Name",
        "Role",
        "Deduction Days",
        "Deductions (EUR)",
        "Pay (EUR)",
    ]
    first = df.iloc[0]
    assert first["Role"] == "Salaried"
    assert first["Deduction Days"] == 2
    assert first["Deductions (EUR)"] == 869.57
    assert first["Pay (EUR)"] == 9130.43
    assert df.iloc[1]["Deductions (EUR)"] == 0.0


def test_deductions_df_has_one_row_per_deduction():
    df = deductions_df(_results(), "USD")
    assert len(df) == 1
    assert df.iloc[0]["Month"] == "2025-01"
    assert df.iloc[0]["Amount (USD)"] == 869.57


def test_validation_df_sorted_by_table_and_row():
    messages = [
        ValidationMessage("warning", "Hours worked missing; counted as zero.", "work_logs", 5),
        ValidationMessage("error", "Duplicate employee id '2'.", "employees", 4),
        ValidationMessage("error", "Hours worked must not be negative.", "work_logs", 3),
    ]
    df = validation_df(messages)
    assert list(zip(df["Table"], df["Row"])) == [("employees", 4), ("work_logs", 3), ("work_logs", 5)]


def test_export_outputs_writes_workbook_and_csvs(tmp_path):
    results = _results()
    path = export_outputs(
        "payroll_2025_01",
        payroll_df(results),
        deductions_df(results),
        validation_df([]),
        tmp_path / "exports",
    )

    assert path == tmp_path / "exports" / "payroll_2025_01.xlsx"
    workbook = load_workbook(path)
    assert workbook.sheetnames == ["Payroll", "Vacation_Deductions", "Validation"]
    sheet = workbook["Payroll"]
    assert sheet["B2"].value == "Erin Salaried"
    assert sheet["F2"].value == 9130.43
    for suffix in ("", "_deductions", "_validation"):
        assert (tmp_path / "exports" / f"payroll_2025_01{suffix}.csv").exists()


def test_export_outputs_with_no_results(tmp_path):
    path = export_outputs("empty", payroll_df([]), deductions_df([]), validation_df([]), tmp_path)

    workbook = load_workbook(path)
    sheet = workbook["Payroll"]
    assert [cell.value for cell in sheet[1]] == [
        "Employee ID",
        "Full Name",
        "Role",
        "Deduction Days",
        "Deductions (USD)",
        "Pay (USD)",
    ]
    assert sheet.max_row == 1
