"""Database configuration for the payroll web application."""
from __future__ import annotations

import logging
import os
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.config import DATABASE_URL, DEFAULT_SQLITE_PATH

logger = logging.getLogger(__name__)

if DATABASE_URL == f"sqlite:///{DEFAULT_SQLITE_PATH}":
    DEFAULT_SQLITE_PATH.parent.mkdir(parents=True, exist_ok=True)


def _create_engine(url: str):
    """Create a SQLAlchemy engine for the given URL, handling sqlite connect args."""
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(url, connect_args=connect_args, future=True)


# On local development environments an unreachable database (commonly
# PostgreSQL) falls back to the SQLite file; elsewhere the error propagates.
try:
    engine = _create_engine(DATABASE_URL)
    with engine.connect() as _conn:  # type: ignore[var-annotated]
        pass
except Exception as e:  # pragma: no cover - environment dependent
    env = os.getenv("ENVIRONMENT", "development").lower()
    logger.error("Could not connect to database at %r: %s", DATABASE_URL, e)
    if env != "development":
        raise
    DEFAULT_SQLITE_PATH.parent.mkdir(parents=True, exist_ok=True)
    fallback = f"sqlite:///{DEFAULT_SQLITE_PATH}"
    logger.warning("Falling back to SQLite for local development at %s", fallback)
    engine = _create_engine(fallback)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

Base = declarative_base()


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a database session."""

    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db() -> None:
    """Ensure database tables exist."""

    from app import models  # noqa: F401  (import ensures model metadata is registered)

    Base.metadata.create_all(bind=engine, checkfirst=True)
    logger.info("Database tables ready at %s", engine.url.render_as_string(hide_password=True))
