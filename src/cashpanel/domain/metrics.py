"""Cash metrics calculator.

All functions are pure: they take the entries and an explicit ``today`` and
never read the clock.

Realized and projected balances net revenue against expense. Overdue and
upcoming amounts do not: every pending entry contributes its raw amount,
because those two figures measure exposure rather than solvency.
"""

from collections import defaultdict
from datetime import date, timedelta
from decimal import Decimal
from typing import Any, Iterable, Sequence

from dateutil.relativedelta import relativedelta

from cashpanel.domain.entities import (
    EntryKind,
    EntryStatus,
    LedgerEntry,
    MonthlyMetrics,
)
from cashpanel.utils.date_parser import month_bounds

ZERO = Decimal("0")


def entries_in_month(
    entries: Iterable[LedgerEntry], month: int, year: int
) -> list[LedgerEntry]:
    """Filter entries dated within the given month."""
    return [e for e in entries if e.date.year == year and e.date.month == month]


def summarize(entries: Iterable[LedgerEntry], today: date) -> MonthlyMetrics:
    """Compute metrics over an already filtered set of entries."""
    settled_revenue = ZERO
    settled_expense = ZERO
    pending_receivable = ZERO
    pending_payable = ZERO
    overdue = ZERO
    upcoming = ZERO

    for entry in entries:
        if entry.status == EntryStatus.SETTLED:
            if entry.kind == EntryKind.REVENUE:
                settled_revenue += entry.amount
            else:
                settled_expense += entry.amount
            continue

        if entry.kind == EntryKind.REVENUE:
            pending_receivable += entry.amount
        else:
            pending_payable += entry.amount

        if entry.date < today:
            overdue += entry.amount
        else:
            upcoming += entry.amount

    realized = settled_revenue - settled_expense
    return MonthlyMetrics(
        realized_balance=realized,
        pending_receivable=pending_receivable,
        pending_payable=pending_payable,
        projected_balance=realized + pending_receivable - pending_payable,
        overdue_amount=overdue,
        upcoming_amount=upcoming,
    )


def compute_monthly(
    entries: Iterable[LedgerEntry], month: int, year: int, today: date
) -> MonthlyMetrics:
    """Compute realized and projected metrics for one month.

    Args:
        entries: Ledger entries (any period; filtered here)
        month: Month number 1-12
        year: Four-digit year
        today: Reference date separating overdue from upcoming

    Returns:
        MonthlyMetrics for the month
    """
    return summarize(entries_in_month(entries, month, year), today)


def compute_annual(
    entries: Iterable[LedgerEntry], year: int, today: date
) -> MonthlyMetrics:
    """Compute the same figures as compute_monthly over a whole year."""
    return summarize((e for e in entries if e.date.year == year), today)


def daily_balance_series(
    entries: Iterable[LedgerEntry], month: int, year: int, today: date
) -> list[tuple[date, Decimal]]:
    """Running realized balance for each day of a month.

    The balance starts at zero on the first of the month and only settled
    entries move it. Days after ``today`` are omitted.
    """
    start, end = month_bounds(month, year)
    if start > today:
        return []
    end = min(end, today)

    net_by_day: dict[date, Decimal] = defaultdict(lambda: ZERO)
    for entry in entries_in_month(entries, month, year):
        if entry.status == EntryStatus.SETTLED:
            net_by_day[entry.date] += entry.signed_amount

    series = []
    running = ZERO
    day = start
    while day <= end:
        running += net_by_day.get(day, ZERO)
        series.append((day, running))
        day += timedelta(days=1)
    return series


def monthly_evolution(
    entries: Sequence[LedgerEntry], today: date, months: int = 6
) -> list[dict[str, Any]]:
    """Realized revenue and expense for the last N months, oldest first."""
    first_of_month = today.replace(day=1)
    results = []
    for offset in range(months - 1, -1, -1):
        period = first_of_month - relativedelta(months=offset)
        revenue = ZERO
        expense = ZERO
        for entry in entries_in_month(entries, period.month, period.year):
            if entry.status != EntryStatus.SETTLED:
                continue
            if entry.kind == EntryKind.REVENUE:
                revenue += entry.amount
            else:
                expense += entry.amount
        results.append(
            {
                "period": period.strftime("%Y-%m"),
                "revenue": revenue,
                "expense": expense,
            }
        )
    return results


def category_distribution(
    entries: Iterable[LedgerEntry], month: int, year: int, limit: int = 8
) -> list[dict[str, Any]]:
    """Totals per kind and category for a month, largest first.

    Both settled and pending entries are counted.
    """
    totals: dict[tuple[EntryKind, str], Decimal] = defaultdict(lambda: ZERO)
    for entry in entries_in_month(entries, month, year):
        totals[(entry.kind, entry.category)] += entry.amount

    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [
        {"kind": kind, "category": category, "total": total}
        for (kind, category), total in ranked[:limit]
    ]
