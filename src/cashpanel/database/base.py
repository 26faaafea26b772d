"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date

# Import entities directly to avoid circular import through domain/__init__.py
from cashpanel.domain.entities import (
    EntryKind,
    EntryStatus,
    LedgerEntry,
    RepetitionMode,
)


class Database(ABC):
    """Abstract database interface for cashpanel."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Ledger entry operations
    @abstractmethod
    def list_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[EntryKind] = None,
        status: Optional[EntryStatus] = None,
        category: Optional[str] = None,
    ) -> list[LedgerEntry]:
        """List entries ordered by date, then id.

        Args:
            start_date: Optional start date filter (inclusive)
            end_date: Optional end date filter (inclusive)
            kind: Optional revenue/expense filter
            status: Optional settled/pending filter
            category: Optional exact category filter
        """
        pass

    @abstractmethod
    def get_entry(self, entry_id: int) -> Optional[LedgerEntry]:
        """Get entry by ID."""
        pass

    @abstractmethod
    def max_entry_id(self) -> Optional[int]:
        """Return the highest stored entry ID, or None when empty."""
        pass

    @abstractmethod
    def insert_entries(self, entries: list[LedgerEntry]) -> None:
        """Insert entries in a single transaction."""
        pass

    @abstractmethod
    def update_entry(self, entry: LedgerEntry) -> None:
        """Replace the stored fields of an existing entry."""
        pass

    @abstractmethod
    def delete_entry(self, entry_id: int) -> None:
        """Delete a single entry."""
        pass

    @abstractmethod
    def delete_series(self, series_id: str) -> int:
        """Delete all entries sharing a series ID. Returns number deleted."""
        pass

    @abstractmethod
    def delete_matching_series(
        self, description: str, category: str, series_type: RepetitionMode
    ) -> int:
        """Delete series entries by description, category and series type.

        Used for entries stored without a series ID. Returns number deleted.
        """
        pass
