"""Ledger domain service."""

import logging
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional

from cashpanel.database.base import Database
from cashpanel.domain.entities import (
    EntryKind,
    EntryStatus,
    LedgerEntry,
    SeriesRequest,
)
from cashpanel.domain.errors import (
    NotFoundError,
    ValidationError,
    entry_not_found,
    entry_not_in_series,
)
from cashpanel.domain.recurrence import expand, new_entry_id
from cashpanel.utils.date_parser import month_bounds

logger = logging.getLogger(__name__)


class LedgerService:
    """Service for creating, editing and deleting ledger entries."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_entries(
        self, request: SeriesRequest, base_id: Optional[int] = None
    ) -> list[LedgerEntry]:
        """Expand a request into entries and store them.

        Args:
            request: Draft entry and repetition mode
            base_id: Optional first id of the batch (defaults to next_entry_id)

        Returns:
            Stored entries

        Raises:
            ValidationError: If description or category is empty, or amount
                is not positive
        """
        if not request.description.strip():
            raise ValidationError("Description is required")
        if not request.category.strip():
            raise ValidationError("Category is required")
        if request.amount <= 0:
            raise ValidationError("Amount must be greater than zero")

        if base_id is None:
            base_id = self.next_entry_id()
        entries = expand(request, base_id=base_id)
        self.db.insert_entries(entries)
        logger.info(
            "Created %d entr%s for '%s'",
            len(entries),
            "y" if len(entries) == 1 else "ies",
            request.description,
        )
        return entries

    def next_entry_id(self) -> int:
        """Time-based id, moved past the highest stored id when needed.

        Batches created close together would otherwise overlap.
        """
        candidate = new_entry_id()
        highest = self.db.max_entry_id()
        if highest is not None and candidate <= highest:
            return highest + 1
        return candidate

    def get_entry(self, entry_id: int) -> Optional[LedgerEntry]:
        """Get entry by ID."""
        return self.db.get_entry(entry_id)

    def require_entry(self, entry_id: int) -> LedgerEntry:
        """Get entry by ID or raise NotFoundError."""
        entry = self.db.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        return entry

    def list_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        kind: Optional[EntryKind] = None,
        status: Optional[EntryStatus] = None,
        category: Optional[str] = None,
    ) -> list[LedgerEntry]:
        """List entries with filters."""
        return self.db.list_entries(
            start_date=start_date,
            end_date=end_date,
            kind=kind,
            status=status,
            category=category,
        )

    def list_month(self, month: int, year: int) -> list[LedgerEntry]:
        """List entries dated within a month."""
        start, end = month_bounds(month, year)
        return self.db.list_entries(start_date=start, end_date=end)

    def update_entry(
        self,
        entry_id: int,
        description: Optional[str] = None,
        category: Optional[str] = None,
        kind: Optional[EntryKind] = None,
        amount: Optional[Decimal] = None,
        entry_date: Optional[date] = None,
        status: Optional[EntryStatus] = None,
    ) -> LedgerEntry:
        """Update a single entry.

        Series fields (installment, recurring flag, series id) are kept from
        the stored entry; editing never changes other entries of the series.

        Raises:
            NotFoundError: If the entry doesn't exist
            ValidationError: If the new amount is not positive
        """
        entry = self.require_entry(entry_id)
        if amount is not None and amount <= 0:
            raise ValidationError("Amount must be greater than zero")

        changes = {
            "description": description,
            "category": category,
            "kind": kind,
            "amount": amount,
            "date": entry_date,
            "status": status,
        }
        updated = replace(entry, **{k: v for k, v in changes.items() if v is not None})
        self.db.update_entry(updated)
        return updated

    def set_status(self, entry_id: int, status: EntryStatus) -> LedgerEntry:
        """Mark an entry settled or pending."""
        return self.update_entry(entry_id, status=status)

    def delete_entry(self, entry_id: int) -> None:
        """Delete a single entry.

        Raises:
            NotFoundError: If the entry doesn't exist
        """
        self.require_entry(entry_id)
        self.db.delete_entry(entry_id)

    def delete_series(self, entry_id: int) -> int:
        """Delete every entry of the series the given entry belongs to.

        Entries carrying a series id are matched by id. Older entries stored
        without one are matched on description, category and series type.

        Returns:
            Number of deleted entries

        Raises:
            NotFoundError: If the entry doesn't exist
            ValidationError: If the entry is not part of a series
        """
        entry = self.require_entry(entry_id)
        if not entry.is_series:
            raise ValidationError(entry_not_in_series(entry_id))

        if entry.series_id:
            count = self.db.delete_series(entry.series_id)
        else:
            logger.warning(
                "Entry %s has no series id; deleting by description and category",
                entry_id,
            )
            count = self.db.delete_matching_series(
                entry.description, entry.category, entry.series_type
            )
        logger.info("Deleted %d entries from series of entry %s", count, entry_id)
        return count
