"""Shared pytest fixtures for chequetrack tests."""

import logging
import tempfile
import os
from datetime import date, datetime, timedelta, UTC
from decimal import Decimal
from itertools import count
import pytest

from chequetrack.database.factories import create_sqlite_database
from chequetrack.domain.account import AccountService
from chequetrack.domain.entities import Instrument, InstrumentKind, InstrumentStatus
from chequetrack.domain.instrument import InstrumentService


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Drop handlers the CLI installs so they never outlive a test's streams."""
    yield
    logger = logging.getLogger("chequetrack")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def instrument_service(temp_db):
    """Create an InstrumentService with a temporary database."""
    return InstrumentService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account with an opening balance of 1000."""
    account_id = account_service.create_account(
        name="Test Account", opening_balance=Decimal("1000.00")
    )
    return account_service.get_account(account_id)


@pytest.fixture
def make_instrument():
    """Build in-memory Instrument entities with sequential IDs.

    Each call gets a later ``created_at`` so creation order is stable.
    """
    ids = count(1)
    base_time = datetime(2025, 12, 1, tzinfo=UTC)

    def _make(
        kind=InstrumentKind.DEPOSIT,
        amount="100",
        status=InstrumentStatus.PENDING,
        due_date=date(2026, 1, 1),
        account_id=1,
        **extra,
    ) -> Instrument:
        instrument_id = next(ids)
        created_at = base_time + timedelta(minutes=instrument_id)
        return Instrument(
            id=instrument_id,
            account_id=account_id,
            kind=kind,
            amount=Decimal(amount),
            status=status,
            due_date=due_date,
            created_date=created_at.date(),
            created_at=created_at,
            updated_at=created_at,
            **extra,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
