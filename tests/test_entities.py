"""Tests for domain entities."""

import pytest
from dataclasses import FrozenInstanceError
from datetime import date
from decimal import Decimal

from cashpanel.domain.entities import (
    EntryKind,
    EntryStatus,
    FiscalGuideRecord,
    GuideStatus,
    Installment,
    LedgerEntry,
    MonthlyMetrics,
    RepetitionMode,
)


def make_entry(**kwargs):
    fields = dict(
        id=1,
        description="Rent",
        category="Office",
        kind=EntryKind.EXPENSE,
        amount=Decimal("1200.00"),
        date=date(2024, 3, 5),
        status=EntryStatus.PENDING,
    )
    fields.update(kwargs)
    return LedgerEntry(**fields)


class TestLedgerEntry:
    """Tests for LedgerEntry entity."""

    def test_defaults(self):
        entry = make_entry()
        assert entry.installment is None
        assert entry.is_recurring is False
        assert entry.series_id is None
        assert entry.expected_amount is None

    def test_immutability(self):
        """Test that LedgerEntry entities are immutable."""
        entry = make_entry()
        with pytest.raises(FrozenInstanceError):
            entry.amount = Decimal("1")

    def test_equality(self):
        assert make_entry() == make_entry()
        assert make_entry() != make_entry(id=2)

    def test_signed_amount(self):
        assert make_entry().signed_amount == Decimal("-1200.00")
        assert make_entry(kind=EntryKind.REVENUE).signed_amount == Decimal("1200.00")

    def test_series_type(self):
        """Test series classification of an entry."""
        assert make_entry().series_type == RepetitionMode.NONE
        assert make_entry().is_series is False

        installment = make_entry(installment=Installment(index=2, total=3))
        assert installment.series_type == RepetitionMode.INSTALLMENT
        assert installment.is_series is True

        recurring = make_entry(is_recurring=True)
        assert recurring.series_type == RepetitionMode.RECURRING
        assert recurring.is_series is True

    def test_enum_values_are_strings(self):
        assert EntryKind("revenue") == EntryKind.REVENUE
        assert EntryStatus.SETTLED.value == "settled"


def test_monthly_metrics_zero():
    zero = MonthlyMetrics.zero()
    assert zero.realized_balance == Decimal("0")
    assert zero.upcoming_amount == Decimal("0")


class TestFiscalGuideRecord:
    """Tests for FiscalGuideRecord derived values."""

    def make_guide(self, total="1.234,56", due_date="20/02/2024"):
        return FiscalGuideRecord(
            year=2024,
            period="Janeiro/2024",
            principal=total,
            fine="",
            interest="",
            total=total,
            due_date=due_date,
            raw_status="Devedor",
            status=GuideStatus.OVERDUE,
        )

    def test_total_amount_parses_brazilian_format(self):
        assert self.make_guide().total_amount == Decimal("1234.56")

    def test_empty_total_is_zero(self):
        assert self.make_guide(total="").total_amount == Decimal("0")

    def test_due(self):
        assert self.make_guide().due == date(2024, 2, 20)
        assert self.make_guide(due_date="").due is None
