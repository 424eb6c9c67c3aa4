import os
import shutil
import tempfile
import pytest

# Create a temporary SQLite database file for the whole test session
_TEMP_DIR = tempfile.mkdtemp(prefix="payroll_tests_")
_DB_FILE = os.path.join(_TEMP_DIR, "test_payroll.db")
os.environ["PAYROLL_DATABASE_URL"] = f"sqlite:///{_DB_FILE}"


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Initialize a fresh temporary SQLite database for tests and clean it up after."""
    # Import after setting env var so the app uses the temp DB
    from app.database import engine, init_db

    init_db()

    yield

    engine.dispose()
    shutil.rmtree(_TEMP_DIR, ignore_errors=True)


# Each test starts with empty tables so seeded employees never leak between tests.
@pytest.fixture(autouse=True)
def _clean_domain_tables():
    from app.database import Base, SessionLocal

    session = SessionLocal()
    try:
        for table in reversed(Base.metadata.sorted_tables):
            session.execute(table.delete())
        session.commit()
    finally:
        session.close()


@pytest.fixture
def test_db():
    """Provide a database session for each test with automatic rollback."""
    from app.database import SessionLocal

    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
