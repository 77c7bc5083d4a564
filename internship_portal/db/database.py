"""
Relational database utility (SQLAlchemy).

Stores the durable record of the placement engine:
- internships + internship_slots
- applications
- withdrawal_requests
- account_requests

The engine writes here only after an in-memory transition succeeded.
Works with SQLite (default) and PostgreSQL.
"""
import logging
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from internship_portal.core.config import get_settings

logger = logging.getLogger(__name__)

_engine: Engine = None


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for the given URL.
    pool_size=5: maintain 5 connections ready
    max_overflow=10: allow 10 extra connections under load
    SQLite gets no pool arguments.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False}
        )
    return create_engine(database_url, pool_size=5, max_overflow=10, echo=echo)


def get_engine() -> Engine:
    """Get or create the configured engine (singleton pattern)"""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = build_engine(settings.database_url, echo=settings.database_echo)
    return _engine


@contextmanager
def get_db_session(engine: Engine = None):
    """
    Context manager for database sessions.
    Usage:
        with get_db_session() as db:
            db.execute(text("SELECT * FROM internships"))
    """
    session = Session(bind=engine or get_engine())
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def test_database_connection(engine: Engine = None) -> bool:
    """
    Test if the database is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        with get_db_session(engine) as db:
            result = db.execute(text("SELECT 1 as test"))
            row = result.fetchone()
            return row[0] == 1
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def execute_raw_sql(sql: str, params: dict = None, engine: Engine = None) -> list:
    """
    Execute raw SQL and return results as list of dicts.
    """
    with get_db_session(engine) as db:
        result = db.execute(text(sql), params or {})
        columns = result.keys()
        return [dict(zip(columns, row)) for row in result.fetchall()]


SCHEMA = [
    """
    CREATE TABLE IF NOT EXISTS internships (
        internship_id VARCHAR(32) PRIMARY KEY,
        title VARCHAR(200) NOT NULL,
        description TEXT,
        level VARCHAR(20) NOT NULL,
        preferred_major VARCHAR(100),
        open_date VARCHAR(10),
        close_date VARCHAR(10),
        status VARCHAR(20) NOT NULL,
        visible BOOLEAN NOT NULL,
        rep_id VARCHAR(100) NOT NULL,
        company_name VARCHAR(200),
        slot_count INTEGER NOT NULL,
        created_at VARCHAR(32)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS internship_slots (
        internship_id VARCHAR(32) NOT NULL,
        slot_number INTEGER NOT NULL,
        student_id VARCHAR(100),
        PRIMARY KEY (internship_id, slot_number)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS applications (
        application_id VARCHAR(32) PRIMARY KEY,
        student_id VARCHAR(100) NOT NULL,
        internship_id VARCHAR(32) NOT NULL,
        status VARCHAR(20) NOT NULL,
        created_at VARCHAR(32)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS withdrawal_requests (
        request_id VARCHAR(32) PRIMARY KEY,
        application_id VARCHAR(32) NOT NULL,
        student_id VARCHAR(100) NOT NULL,
        reason TEXT,
        status VARCHAR(20) NOT NULL,
        requested_at VARCHAR(32),
        resolved_by VARCHAR(100),
        resolved_at VARCHAR(32)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS account_requests (
        request_id VARCHAR(32) PRIMARY KEY,
        rep_id VARCHAR(100) NOT NULL,
        status VARCHAR(20) NOT NULL,
        submitted_at VARCHAR(32),
        approver_id VARCHAR(100),
        decided_at VARCHAR(32),
        decision_notes TEXT
    )
    """,
]


def init_schema(engine: Engine = None):
    """Create tables if missing. Call this once during app startup."""
    with get_db_session(engine) as db:
        for statement in SCHEMA:
            db.execute(text(statement))
