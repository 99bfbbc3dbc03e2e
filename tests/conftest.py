"""
Pytest fixtures for the lending kernel test suite.

Provides:
- Structured logging configured once per session, plus ``captured_logs``
- A deterministic clock so timestamps are reproducible
- A fresh ``LendingState`` and coordinators per test
- An unseeded ``LendingDesk`` wired to the same state
"""

import json
import logging
from datetime import datetime, timezone
from io import StringIO

import pytest

from lending_kernel.domain.category import Category
from lending_kernel.domain.clock import DeterministicClock
from lending_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from lending_kernel.services.admin_service import AdminService
from lending_kernel.services.base import LendingState
from lending_kernel.services.borrow_service import BorrowService
from lending_services.lending_desk import LendingDesk

TEST_ACTOR = "S1"
ADMIN_ACTOR = "admin"
EPOCH = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG, stream=StringIO())
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
    Capture lending_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, borrow_service):
            borrow_service.borrow(...)
            logs = captured_logs()
            assert any(r["message"] == "borrow_succeeded" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("lending_kernel")
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)


# =============================================================================
# State and services
# =============================================================================


@pytest.fixture
def deterministic_clock():
    return DeterministicClock(EPOCH)


@pytest.fixture
def state(deterministic_clock):
    return LendingState.create(clock=deterministic_clock)


@pytest.fixture
def borrow_service(state):
    return BorrowService(state)


@pytest.fixture
def admin_service(state):
    return AdminService(state)


@pytest.fixture
def desk(state):
    return LendingDesk(state)


@pytest.fixture
def ball(admin_service):
    """A Ball item with 10 in stock (id 1001)."""
    return admin_service.add_item(ADMIN_ACTOR, Category.BALL, "Ball-A", 10)


@pytest.fixture
def racket(admin_service):
    return admin_service.add_item(ADMIN_ACTOR, Category.RACKET, "Racket-A", 10)


@pytest.fixture
def protective(admin_service):
    return admin_service.add_item(ADMIN_ACTOR, Category.PROTECTIVE, "Knee Pads", 10)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: mark test as long-running (threads or many examples)"
    )
