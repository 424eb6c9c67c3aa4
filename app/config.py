"""Environment-driven settings shared by the API, CLI and database layer."""
from __future__ import annotations

import os
from pathlib import Path

DEFAULT_SQLITE_PATH = Path("data/payroll.db")

DATABASE_URL = os.getenv("PAYROLL_DATABASE_URL", f"sqlite:///{DEFAULT_SQLITE_PATH}")
FREE_VACATION_DAYS = int(os.getenv("PAYROLL_FREE_VACATION_DAYS", "2"))
CURRENCY = os.getenv("PAYROLL_CURRENCY", "USD")
EXPORT_DIR = Path(os.getenv("PAYROLL_EXPORT_DIR", "exports"))
LOG_LEVEL = os.getenv("PAYROLL_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
