"""Recurrence expander: turns one draft into a series of ledger entries."""

import logging
import time
import uuid
from typing import Optional

from dateutil.relativedelta import relativedelta

from cashpanel.domain.entities import (
    EntryStatus,
    Installment,
    LedgerEntry,
    RepetitionMode,
    SeriesRequest,
)

logger = logging.getLogger(__name__)


def new_entry_id() -> int:
    """Return a time-based id (microseconds since the epoch)."""
    return int(time.time() * 1_000_000)


def expand(request: SeriesRequest, *, base_id: Optional[int] = None) -> list[LedgerEntry]:
    """Expand a series request into concrete ledger entries.

    One entry per calendar month starting at ``request.date``. Only the first
    entry keeps the requested status; later ones are forecasts and are always
    pending. Month stepping uses calendar rollover, so a start on the 31st
    lands on the last day of shorter months.

    Args:
        request: Draft entry plus repetition mode and count
        base_id: First id of the batch; entry ``i`` gets ``base_id + i``.
            Defaults to a microsecond timestamp.

    Returns:
        Entries ordered by date
    """
    mode = request.repetition_mode
    count = 1 if mode == RepetitionMode.NONE else max(1, request.count)
    if mode != RepetitionMode.NONE and count < 2:
        logger.debug(
            "Series count %s below 2 for mode %s; creating a single entry",
            request.count,
            mode.value,
        )
        mode = RepetitionMode.NONE

    if base_id is None:
        base_id = new_entry_id()

    series_id = uuid.uuid4().hex if mode != RepetitionMode.NONE else None

    entries = []
    for i in range(count):
        entries.append(
            LedgerEntry(
                id=base_id + i,
                description=request.description,
                category=request.category,
                kind=request.kind,
                amount=request.amount,
                expected_amount=request.amount,
                date=request.date + relativedelta(months=i),
                status=request.status if i == 0 else EntryStatus.PENDING,
                installment=(
                    Installment(index=i + 1, total=count)
                    if mode == RepetitionMode.INSTALLMENT
                    else None
                ),
                is_recurring=mode == RepetitionMode.RECURRING,
                series_id=series_id,
            )
        )
    return entries
