"""
Pytest fixtures for the ledger reporting test suite.

Provides:
- Structured logging configured once per session, with LogContext cleared
  between tests and a ``captured_logs`` fixture for asserting log events
- In-memory SQLite engine with the ledger source tables
- Sample ledgers and a loaded LedgerStore
"""

import json
import logging
from io import StringIO
from typing import Generator

import pytest
from sqlalchemy.orm import Session

from ledger_kernel.db.engine import (
    create_tables,
    drop_tables,
    get_session,
    init_engine_from_url,
    reset_engine,
)
from ledger_kernel.domain.clock import DeterministicClock
from ledger_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from ledger_kernel.store import LedgerStore
from ledger_reporting.config import ReportingConfig
from ledger_reporting.service import ReportingService
from tests.factories import diagnostic, sample_ledger as build_sample_ledger


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
    Capture ledger_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, service):
            service.positions()
            logs = captured_logs()
            assert any(r["message"] == "positions_listed" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("ledger_kernel")
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
def memory_db() -> Generator[None, None, None]:
    """Fresh in-memory SQLite database with the ledger source tables."""
    init_engine_from_url("sqlite://")
    create_tables()
    yield
    drop_tables()
    reset_engine()


@pytest.fixture
def session(memory_db) -> Generator[Session, None, None]:
    sess = get_session()
    yield sess
    sess.close()


# =============================================================================
# Ledger fixtures
# =============================================================================


@pytest.fixture
def clock() -> DeterministicClock:
    return DeterministicClock()


@pytest.fixture
def sample_ledger():
    return build_sample_ledger()


@pytest.fixture
def sample_diagnostics():
    return (
        diagnostic("Balance assertion failed", line=12),
        diagnostic("Unused account Assets:Spare", line=3),
    )


@pytest.fixture
def store(sample_ledger, sample_diagnostics, clock) -> LedgerStore:
    """LedgerStore loaded with the sample ledger."""
    s = LedgerStore(clock=clock)
    s.load(sample_ledger, sample_diagnostics)
    return s


@pytest.fixture
def service(store) -> ReportingService:
    return ReportingService(store, ReportingConfig())
