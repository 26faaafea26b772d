"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from cashpanel.domain import entities as domain
from cashpanel.database.models import LedgerEntry as ORMLedgerEntry


def entry_to_domain(orm_entry: ORMLedgerEntry) -> domain.LedgerEntry:
    """Convert SQLAlchemy LedgerEntry model to domain LedgerEntry entity."""
    installment = None
    if orm_entry.installment_index is not None and orm_entry.installment_total is not None:
        installment = domain.Installment(
            index=orm_entry.installment_index, total=orm_entry.installment_total
        )
    return domain.LedgerEntry(
        id=orm_entry.id,
        description=orm_entry.description,
        category=orm_entry.category,
        kind=domain.EntryKind(orm_entry.kind),
        amount=orm_entry.amount,
        expected_amount=orm_entry.expected_amount,
        date=orm_entry.date,
        status=domain.EntryStatus(orm_entry.status),
        installment=installment,
        is_recurring=bool(orm_entry.is_recurring),
        series_id=orm_entry.series_id,
    )


def apply_entry_fields(orm_entry: ORMLedgerEntry, entry: domain.LedgerEntry) -> ORMLedgerEntry:
    """Copy domain entry fields onto a SQLAlchemy model instance."""
    orm_entry.description = entry.description
    orm_entry.category = entry.category
    orm_entry.kind = entry.kind.value
    orm_entry.amount = entry.amount
    orm_entry.expected_amount = entry.expected_amount
    orm_entry.date = entry.date
    orm_entry.status = entry.status.value
    orm_entry.installment_index = entry.installment.index if entry.installment else None
    orm_entry.installment_total = entry.installment.total if entry.installment else None
    orm_entry.is_recurring = entry.is_recurring
    orm_entry.series_id = entry.series_id
    return orm_entry


def entry_to_orm(entry: domain.LedgerEntry) -> ORMLedgerEntry:
    """Convert domain LedgerEntry entity to a new SQLAlchemy model."""
    return apply_entry_fields(ORMLedgerEntry(id=entry.id), entry)
