"""Text formatting helpers shared by CLI commands."""

from cashpanel.domain.entities import EntryKind, LedgerEntry
from cashpanel.utils.amount_parser import format_brl


def series_label(entry: LedgerEntry) -> str:
    """Short series marker, e.g. "3/10" or "recurring"."""
    if entry.installment is not None:
        return f"{entry.installment.index}/{entry.installment.total}"
    if entry.is_recurring:
        return "recurring"
    return ""


def format_entry_line(entry: LedgerEntry) -> str:
    """One-line rendering of an entry for listings."""
    sign = "+" if entry.kind == EntryKind.REVENUE else "-"
    amount = f"{sign}{format_brl(entry.amount)}"
    return (
        f"{entry.id:<18} {entry.date.isoformat():<12} {amount:>16} "
        f"{entry.status.value:<8} {entry.category[:16]:<16} {entry.description[:30]:<30} "
        f"{series_label(entry)}"
    ).rstrip()
