"""Liquidity forecaster: first day the running cash balance turns negative."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Iterable

from cashpanel.domain.entities import EntryStatus, LedgerEntry, LiquidityForecast

DEFAULT_HORIZON_DAYS = 30


def starting_balance(entries: Iterable[LedgerEntry], today: date) -> Decimal:
    """Sum of all settled entries dated on or before today."""
    return sum(
        (e.signed_amount for e in entries if e.status == EntryStatus.SETTLED and e.date <= today),
        Decimal("0"),
    )


def forecast(
    entries: Iterable[LedgerEntry],
    today: date,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> LiquidityForecast:
    """Walk forward day by day applying pending entries to the cash balance.

    The balance is seeded with every settled entry up to ``today`` (all time,
    not only the current month). Day 1 is tomorrow; only the first day the
    balance drops below zero is reported.

    Args:
        entries: Ledger entries
        today: Reference date
        horizon_days: Number of days to simulate

    Returns:
        LiquidityForecast
    """
    entries = list(entries)
    balance = starting_balance(entries, today)

    # sorted() is stable, so same-day entries keep their original order
    pending = sorted(
        (e for e in entries if e.status == EntryStatus.PENDING and e.date >= today),
        key=lambda e: e.date,
    )
    by_day: dict[date, list[LedgerEntry]] = {}
    for entry in pending:
        by_day.setdefault(entry.date, []).append(entry)

    for offset in range(1, horizon_days + 1):
        day = today + timedelta(days=offset)
        for entry in by_day.get(day, ()):
            balance += entry.signed_amount
        if balance < 0:
            return LiquidityForecast(is_projected_negative=True, days_until_negative=offset)

    return LiquidityForecast(is_projected_negative=False)
