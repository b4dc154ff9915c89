"""
Pytest fixtures for the back-office test suite.

Provides:
- Structured logging setup and log capture
- In-memory SQLite sessions with every ORM table created
- Roster / schedule builders shared by engine, service and script tests

Environment Variables:
- DATABASE_URL: SQLAlchemy URL used by the ``session`` fixture.
  If not set, an in-memory SQLite database is used.
"""

import json
import logging
import os
from io import StringIO
from uuid import uuid4

import pytest

from backoffice_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from backoffice_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)


# Actor recorded as creator of every seeded row
TEST_ACTOR_ID = uuid4()

DEFAULT_TEST_DB_URL = "sqlite://"


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture backoffice logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, service):
            service.prepare(...)
            logs = captured_logs()
            assert any(r["message"] == "payroll_preparation_completed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("backoffice")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Database fixtures
# =============================================================================


@pytest.fixture
def db_engine():
    """Fresh database with all back-office tables."""
    engine = init_engine_from_url(os.environ.get("DATABASE_URL", DEFAULT_TEST_DB_URL))
    create_tables()
    yield engine
    drop_tables()
    reset_engine()


@pytest.fixture
def session(db_engine):
    """Session bound to the test database; rolled back after each test."""
    s = get_session()
    yield s
    s.rollback()
    s.close()


@pytest.fixture
def test_actor_id():
    return TEST_ACTOR_ID
