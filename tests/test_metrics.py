"""Tests for the cash metrics calculator."""

import random
from datetime import date, timedelta
from decimal import Decimal

from cashpanel.domain.entities import EntryKind, EntryStatus, MonthlyMetrics
from cashpanel.domain.metrics import (
    category_distribution,
    compute_annual,
    compute_monthly,
    daily_balance_series,
    monthly_evolution,
)

REVENUE = EntryKind.REVENUE
EXPENSE = EntryKind.EXPENSE
SETTLED = EntryStatus.SETTLED
PENDING = EntryStatus.PENDING


class TestComputeMonthly:
    """Tests for compute_monthly."""

    def test_empty_entries_yield_zero_metrics(self, today):
        """Test that no entries gives all-zero metrics."""
        metrics = compute_monthly([], 3, 2024, today)
        assert metrics == MonthlyMetrics.zero()
        assert metrics.realized_balance == 0
        assert metrics.pending_receivable == 0
        assert metrics.pending_payable == 0
        assert metrics.projected_balance == 0
        assert metrics.overdue_amount == 0
        assert metrics.upcoming_amount == 0

    def test_realized_balance_nets_settled_entries(self, make_entry, today):
        """Test settled revenue minus settled expense."""
        entries = [
            make_entry("1000.00", REVENUE, SETTLED, date(2024, 3, 1)),
            make_entry("250.50", EXPENSE, SETTLED, date(2024, 3, 2)),
        ]
        metrics = compute_monthly(entries, 3, 2024, today)
        assert metrics.realized_balance == Decimal("749.50")
        assert metrics.pending_receivable == 0
        assert metrics.pending_payable == 0

    def test_pending_totals_and_projection(self, make_entry, today):
        """Test pending receivable/payable and projected balance."""
        entries = [
            make_entry("500.00", REVENUE, SETTLED, date(2024, 3, 1)),
            make_entry("300.00", REVENUE, PENDING, date(2024, 3, 20)),
            make_entry("120.00", EXPENSE, PENDING, date(2024, 3, 25)),
        ]
        metrics = compute_monthly(entries, 3, 2024, today)
        assert metrics.pending_receivable == Decimal("300.00")
        assert metrics.pending_payable == Decimal("120.00")
        assert metrics.projected_balance == Decimal("680.00")

    def test_overdue_and_upcoming_do_not_net_by_kind(self, make_entry, today):
        """Test that revenue and expense both add to exposure buckets."""
        entries = [
            make_entry("100.00", REVENUE, PENDING, date(2024, 3, 10)),
            make_entry("40.00", EXPENSE, PENDING, date(2024, 3, 14)),
            make_entry("70.00", EXPENSE, PENDING, date(2024, 3, 15)),
            make_entry("30.00", REVENUE, PENDING, date(2024, 3, 31)),
        ]
        metrics = compute_monthly(entries, 3, 2024, today)
        assert metrics.overdue_amount == Decimal("140.00")
        # Entry dated today counts as upcoming
        assert metrics.upcoming_amount == Decimal("100.00")
        assert (
            metrics.overdue_amount + metrics.upcoming_amount
            == metrics.pending_receivable + metrics.pending_payable
        )

    def test_entries_outside_month_are_ignored(self, make_entry, today):
        """Test filtering by month and year."""
        entries = [
            make_entry("100.00", REVENUE, SETTLED, date(2024, 2, 29)),
            make_entry("100.00", REVENUE, SETTLED, date(2023, 3, 15)),
            make_entry("100.00", EXPENSE, PENDING, date(2024, 4, 1)),
            make_entry("10.00", REVENUE, SETTLED, date(2024, 3, 31)),
        ]
        metrics = compute_monthly(entries, 3, 2024, today)
        assert metrics.realized_balance == Decimal("10.00")
        assert metrics.pending_payable == 0

    def test_projection_identity_holds_for_random_entries(self, make_entry, today):
        """Test projected = realized + receivable - payable on random data."""
        rng = random.Random(42)
        for _ in range(25):
            entries = [
                make_entry(
                    f"{rng.randint(0, 100000) / 100:.2f}",
                    rng.choice([REVENUE, EXPENSE]),
                    rng.choice([SETTLED, PENDING]),
                    date(2024, 3, 1) + timedelta(days=rng.randint(0, 30)),
                )
                for _ in range(rng.randint(0, 30))
            ]
            m = compute_monthly(entries, 3, 2024, today)
            assert m.projected_balance == m.realized_balance + m.pending_receivable - m.pending_payable
            assert m.overdue_amount + m.upcoming_amount == m.pending_receivable + m.pending_payable


def test_compute_annual_covers_whole_year(make_entry, today):
    """Test annual metrics sum every month of the year."""
    entries = [
        make_entry("100.00", REVENUE, SETTLED, date(2024, 1, 5)),
        make_entry("50.00", EXPENSE, SETTLED, date(2024, 6, 5)),
        make_entry("20.00", EXPENSE, PENDING, date(2024, 12, 5)),
        make_entry("999.00", REVENUE, SETTLED, date(2023, 12, 31)),
    ]
    metrics = compute_annual(entries, 2024, today)
    assert metrics.realized_balance == Decimal("50.00")
    assert metrics.pending_payable == Decimal("20.00")
    assert metrics.projected_balance == Decimal("30.00")


def test_daily_balance_series_runs_until_today(make_entry, today):
    """Test running balance by day stops at today."""
    entries = [
        make_entry("100.00", REVENUE, SETTLED, date(2024, 3, 1)),
        make_entry("30.00", EXPENSE, SETTLED, date(2024, 3, 3)),
        make_entry("500.00", EXPENSE, PENDING, date(2024, 3, 2)),
        make_entry("80.00", REVENUE, SETTLED, date(2024, 3, 20)),
    ]
    series = daily_balance_series(entries, 3, 2024, today)

    assert len(series) == 15
    assert series[0] == (date(2024, 3, 1), Decimal("100.00"))
    assert series[1][1] == Decimal("100.00")
    assert series[2][1] == Decimal("70.00")
    assert series[-1] == (date(2024, 3, 15), Decimal("70.00"))


def test_daily_balance_series_for_past_and_future_months(make_entry, today):
    """Test past months are complete and future months are empty."""
    assert len(daily_balance_series([], 2, 2024, today)) == 29
    assert daily_balance_series([], 4, 2024, today) == []


def test_monthly_evolution_lists_oldest_first(make_entry, today):
    """Test realized revenue and expense per month."""
    entries = [
        make_entry("100.00", REVENUE, SETTLED, date(2024, 1, 10)),
        make_entry("40.00", EXPENSE, SETTLED, date(2024, 3, 1)),
        make_entry("900.00", REVENUE, PENDING, date(2024, 3, 1)),
    ]
    rows = monthly_evolution(entries, today, months=3)

    assert [r["period"] for r in rows] == ["2024-01", "2024-02", "2024-03"]
    assert rows[0]["revenue"] == Decimal("100.00")
    assert rows[1]["revenue"] == 0
    assert rows[2]["revenue"] == 0
    assert rows[2]["expense"] == Decimal("40.00")


def test_category_distribution_ranks_and_limits(make_entry):
    """Test category totals are ranked and capped."""
    entries = [
        make_entry("10.00", EXPENSE, category="Food"),
        make_entry("15.00", EXPENSE, category="Food"),
        make_entry("100.00", REVENUE, category="Sales"),
        make_entry("5.00", EXPENSE, category="Fees"),
    ]
    result = category_distribution(entries, 3, 2024, limit=2)

    assert [(r["kind"], r["category"], r["total"]) for r in result] == [
        (REVENUE, "Sales", Decimal("100.00")),
        (EXPENSE, "Food", Decimal("25.00")),
    ]
