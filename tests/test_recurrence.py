"""Tests for the recurrence expander."""

import pytest
from datetime import date
from decimal import Decimal

from cashpanel.domain.entities import (
    EntryKind,
    EntryStatus,
    Installment,
    RepetitionMode,
    SeriesRequest,
)
from cashpanel.domain.recurrence import expand


def make_request(mode=RepetitionMode.NONE, count=1, status=EntryStatus.SETTLED, start=date(2024, 1, 10)):
    return SeriesRequest(
        description="Notebook",
        category="Equipment",
        kind=EntryKind.EXPENSE,
        amount=Decimal("350.00"),
        date=start,
        status=status,
        repetition_mode=mode,
        count=count,
    )


def test_single_entry_keeps_date_and_status():
    """Test that mode none yields exactly one entry as requested."""
    entries = expand(make_request(), base_id=1000)

    assert len(entries) == 1
    entry = entries[0]
    assert entry.id == 1000
    assert entry.date == date(2024, 1, 10)
    assert entry.status == EntryStatus.SETTLED
    assert entry.installment is None
    assert entry.is_recurring is False
    assert entry.series_id is None
    assert entry.expected_amount == Decimal("350.00")


def test_none_mode_ignores_count():
    """Test that count is ignored when no repetition is requested."""
    entries = expand(make_request(count=5), base_id=1)
    assert len(entries) == 1


@pytest.mark.parametrize("count", [2, 3, 10, 12])
def test_installments_are_numbered(count):
    """Test installment metadata forms 1..n with total n."""
    entries = expand(make_request(RepetitionMode.INSTALLMENT, count), base_id=1)

    assert len(entries) == count
    assert [e.installment.index for e in entries] == list(range(1, count + 1))
    assert all(e.installment.total == count for e in entries)
    assert not any(e.is_recurring for e in entries)


def test_recurring_entries_have_flag_and_no_installment():
    """Test recurring mode stamps is_recurring on every entry."""
    entries = expand(make_request(RepetitionMode.RECURRING, 4), base_id=1)

    assert len(entries) == 4
    assert all(e.is_recurring for e in entries)
    assert all(e.installment is None for e in entries)


def test_only_first_entry_keeps_requested_status():
    """Test that later entries are forced to pending."""
    entries = expand(make_request(RepetitionMode.INSTALLMENT, 3, EntryStatus.SETTLED), base_id=1)

    assert entries[0].status == EntryStatus.SETTLED
    assert [e.status for e in entries[1:]] == [EntryStatus.PENDING, EntryStatus.PENDING]


def test_pending_first_entry_stays_pending():
    """Test a pending request produces an all-pending series."""
    entries = expand(make_request(RepetitionMode.RECURRING, 3, EntryStatus.PENDING), base_id=1)
    assert all(e.status == EntryStatus.PENDING for e in entries)


def test_entries_advance_one_month_each():
    """Test monthly stepping across a year boundary."""
    entries = expand(make_request(RepetitionMode.RECURRING, 4, start=date(2023, 11, 5)), base_id=1)

    assert [e.date for e in entries] == [
        date(2023, 11, 5),
        date(2023, 12, 5),
        date(2024, 1, 5),
        date(2024, 2, 5),
    ]


def test_month_end_start_lands_on_last_day_of_short_months():
    """Test a series starting on the 31st stays within each month."""
    entries = expand(make_request(RepetitionMode.INSTALLMENT, 3, start=date(2024, 1, 31)), base_id=1)

    assert entries[1].date == date(2024, 2, 29)
    assert entries[2].date == date(2024, 3, 31)


def test_ids_are_unique_and_offset():
    """Test ids are base_id + i."""
    entries = expand(make_request(RepetitionMode.INSTALLMENT, 5), base_id=500)
    assert [e.id for e in entries] == [500, 501, 502, 503, 504]


def test_default_ids_are_unique():
    """Test generated ids do not collide within a batch."""
    entries = expand(make_request(RepetitionMode.RECURRING, 6))
    assert len({e.id for e in entries}) == 6


def test_series_share_one_series_id():
    """Test every entry of a batch carries the same series id."""
    first = expand(make_request(RepetitionMode.INSTALLMENT, 3), base_id=1)
    second = expand(make_request(RepetitionMode.INSTALLMENT, 3), base_id=10)

    assert len({e.series_id for e in first}) == 1
    assert first[0].series_id is not None
    assert first[0].series_id != second[0].series_id


@pytest.mark.parametrize("count", [1, 0, -3])
def test_count_below_two_degrades_to_single_entry(count):
    """Test invalid counts are clamped instead of rejected."""
    entries = expand(make_request(RepetitionMode.INSTALLMENT, count), base_id=1)

    assert len(entries) == 1
    assert entries[0].installment is None
    assert entries[0].is_recurring is False
    assert entries[0].series_id is None
    assert entries[0].status == EntryStatus.SETTLED


def test_installment_equality_value():
    """Test installment metadata is a value object."""
    entries = expand(make_request(RepetitionMode.INSTALLMENT, 2), base_id=1)
    assert entries[1].installment == Installment(index=2, total=2)
