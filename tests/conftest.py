"""Shared pytest fixtures for cashpanel tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
from pathlib import Path
import pytest

from cashpanel.database.factories import create_sqlite_database
from cashpanel.domain.entities import EntryKind, EntryStatus, LedgerEntry
from cashpanel.domain.ledger import LedgerService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def ledger_service(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def today():
    """Fixed reference date used across engine tests."""
    return date(2024, 3, 15)


@pytest.fixture
def make_entry():
    """Factory for ledger entries with sensible defaults."""
    counter = {"next_id": 1}

    def _make(
        amount="100.00",
        kind=EntryKind.EXPENSE,
        status=EntryStatus.PENDING,
        entry_date=date(2024, 3, 15),
        description="Entry",
        category="General",
        **kwargs,
    ):
        entry_id = kwargs.pop("id", counter["next_id"])
        counter["next_id"] = entry_id + 1
        return LedgerEntry(
            id=entry_id,
            description=description,
            category=category,
            kind=kind,
            amount=Decimal(amount),
            date=entry_date,
            status=status,
            **kwargs,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
