import pytest

import payroll
from app import crud


@pytest.fixture()
def roster_paths(tmp_path):
    employees = tmp_path / "employees.csv"
    employees.write_text(
        "id,full_name,role,salary,hourly_rate\n"
        "1,Erin Salaried,salaried,120000,\n"
        "2,Hal Hourly,hourly,,25\n",
        encoding="utf-8",
    )
    work_logs = tmp_path / "work_logs.csv"
    work_logs.write_text(
        "employee_id,date,hours_worked\n"
        "2,2025-01-02,8\n"
        "2,2025-01-03,7.5\n",
        encoding="utf-8",
    )
    vacations = tmp_path / "vacations.csv"
    vacations.write_text(
        "employee_id,start_date,end_date\n"
        "1,2025-01-06,2025-01-08\n"
        "1,2025-02-03,2025-02-04\n",
        encoding="utf-8",
    )
    return employees, work_logs, vacations


def _argv(roster_paths, out_dir, *extra):
    employees, work_logs, vacations = roster_paths
    return [
        "--month",
        "2025-01",
        "--employees",
        str(employees),
        "--work-logs",
        str(work_logs),
        "--vacations",
        str(vacations),
        "--out",
        str(out_dir),
        *extra,
    ]


def test_cli_writes_exports_and_prints_total(roster_paths, tmp_path, capsys):
    out_dir = tmp_path / "out"
    payroll.main(_argv(roster_paths, out_dir, "--currency", "EUR"))

    output = capsys.readouterr().out
    assert "Computed pay for 2 employees, total EUR 9,517.93." in output
    assert "Vacation deductions applied: 1." in output
    assert (out_dir / "payroll_2025_01.xlsx").exists()
    assert (out_dir / "payroll_2025_01_deductions.csv").exists()


def test_cli_preview_prints_table(roster_paths, tmp_path, capsys):
    payroll.main(_argv(roster_paths, tmp_path / "out", "--preview"))
    output = capsys.readouterr().out
    assert "Erin Salaried" in output
    assert "9130.43" in output


def test_cli_free_days_option_removes_deduction(roster_paths, tmp_path, capsys):
    payroll.main(_argv(roster_paths, tmp_path / "out", "--free-days", "5"))
    output = capsys.readouterr().out
    assert "total USD 10,387.50." in output
    assert "Vacation deductions applied: 0." in output


def test_cli_store_persists_roster(roster_paths, tmp_path, test_db):
    payroll.main(_argv(roster_paths, tmp_path / "out", "--store"))

    assert crud.count_employees(test_db) == 2
    assert len(crud.list_vacations(test_db)) == 2
    assert len(crud.list_work_logs(test_db, year=2025, month=1)) == 2


def test_cli_rejects_bad_month(roster_paths, tmp_path):
    employees, _, _ = roster_paths
    with pytest.raises(SystemExit) as excinfo:
        payroll.main(["--month", "2025-13", "--employees", str(employees), "--out", str(tmp_path)])
    assert "--month" in str(excinfo.value)
