"""Domain layer for cashpanel application.

LedgerService lives in cashpanel.domain.ledger and is not re-exported here,
since it depends on the database layer which imports these entities.
"""

from cashpanel.domain.recurrence import expand
from cashpanel.domain.metrics import compute_monthly, compute_annual
from cashpanel.domain.fiscal import normalize
from cashpanel.domain.alerts import prioritize, count_pending_items, build_dashboard_alerts

__all__ = [
    "expand",
    "compute_monthly",
    "compute_annual",
    "normalize",
    "prioritize",
    "count_pending_items",
    "build_dashboard_alerts",
]
