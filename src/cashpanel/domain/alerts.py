"""Alert prioritizer: ranks actionable dashboard alerts."""

from datetime import date, timedelta
from typing import Iterable, Optional

from cashpanel.domain.entities import (
    Alert,
    AlertTarget,
    EntryStatus,
    FiscalDiagnosis,
    GuideStatus,
    LedgerEntry,
    LiquidityForecast,
    MonthlyMetrics,
    PendingCounts,
)
from cashpanel.domain.fiscal import upcoming_guides
from cashpanel.domain.forecast import forecast as forecast_liquidity
from cashpanel.domain.metrics import compute_monthly
from cashpanel.utils.amount_parser import format_brl

UPCOMING_WINDOW_DAYS = 7

# Fixed navigation table: alert key -> screen
ALERT_TARGETS: dict[str, AlertTarget] = {
    "overdue": AlertTarget.FISCAL,
    "upcoming": AlertTarget.CALENDAR,
    "negative_cash": AlertTarget.CASHFLOW,
    "all_clear": AlertTarget.DASHBOARD,
}


def _plural(count: int, singular: str, plural: str) -> str:
    return singular if count == 1 else plural


def _overdue_description(metrics: MonthlyMetrics) -> str:
    text = "Act now to avoid fines and interest."
    if metrics.overdue_amount > 0:
        text += f" {format_brl(metrics.overdue_amount)} overdue in the ledger this month."
    return text


def count_pending_items(
    entries: Iterable[LedgerEntry],
    today: date,
    window_days: int = UPCOMING_WINDOW_DAYS,
) -> PendingCounts:
    """Count pending entries already late and due within the window."""
    limit = today + timedelta(days=window_days)
    overdue = 0
    upcoming = 0
    for entry in entries:
        if entry.status != EntryStatus.PENDING:
            continue
        if entry.date < today:
            overdue += 1
        elif entry.date <= limit:
            upcoming += 1
    return PendingCounts(overdue=overdue, upcoming=upcoming)


def prioritize(
    metrics: MonthlyMetrics,
    forecast: LiquidityForecast,
    fiscal: Optional[FiscalDiagnosis],
    pending_count_next_7_days: int,
    overdue_count: int,
    reference_date: Optional[date] = None,
) -> list[Alert]:
    """Build alerts in fixed priority order.

    Order: overdue items, items due within 7 days, projected negative cash.
    When none of those apply a single "all clear" alert is returned. A missing
    fiscal diagnosis contributes nothing and never hides financial alerts.

    Args:
        metrics: Current month metrics; only the overdue alert text uses them,
            the counts decide which alerts fire
        forecast: Liquidity forecast
        fiscal: Fiscal diagnosis, or None when unavailable
        pending_count_next_7_days: Pending ledger entries due within 7 days
        overdue_count: Pending ledger entries already late
        reference_date: Date used to find fiscal guides due within 7 days;
            fiscal upcoming guides are ignored when omitted

    Returns:
        Alerts, highest priority first
    """
    overdue = overdue_count
    upcoming = pending_count_next_7_days

    if fiscal is not None:
        overdue += sum(1 for g in fiscal.guides if g.status == GuideStatus.OVERDUE)
        if fiscal.pending_declaration_count > 0:
            overdue += 1
        if reference_date is not None:
            upcoming += len(
                upcoming_guides(fiscal, reference_date, UPCOMING_WINDOW_DAYS)
            )

    alerts = []
    if overdue > 0:
        alerts.append(
            Alert(
                key="overdue",
                title=f"{overdue} overdue {_plural(overdue, 'bill or obligation', 'bills or obligations')}",
                description=_overdue_description(metrics),
                target=ALERT_TARGETS["overdue"],
                severity="critical",
            )
        )

    if upcoming > 0:
        alerts.append(
            Alert(
                key="upcoming",
                title=f"{upcoming} {_plural(upcoming, 'payment', 'payments')} due in the next {UPCOMING_WINDOW_DAYS} days",
                description="Prepare cash for next week's bills and commitments.",
                target=ALERT_TARGETS["upcoming"],
                severity="warning",
            )
        )

    if forecast.is_projected_negative:
        days = forecast.days_until_negative
        alerts.append(
            Alert(
                key="negative_cash",
                title="Projected cash balance is negative",
                description=f"Your balance may turn negative in {days} {_plural(days or 0, 'day', 'days')}.",
                target=ALERT_TARGETS["negative_cash"],
                severity="warning",
            )
        )

    if not alerts:
        alerts.append(
            Alert(
                key="all_clear",
                title="All clear",
                description="No critical pending items or upcoming due dates.",
                target=ALERT_TARGETS["all_clear"],
                severity="info",
            )
        )
    return alerts


def build_dashboard_alerts(
    entries: Iterable[LedgerEntry],
    today: date,
    fiscal: Optional[FiscalDiagnosis] = None,
    horizon_days: int = 30,
) -> list[Alert]:
    """Compute metrics, forecast and counts for today and prioritize them."""
    entries = list(entries)
    counts = count_pending_items(entries, today)
    return prioritize(
        metrics=compute_monthly(entries, today.month, today.year, today),
        forecast=forecast_liquidity(entries, today, horizon_days),
        fiscal=fiscal,
        pending_count_next_7_days=counts.upcoming,
        overdue_count=counts.overdue,
        reference_date=today,
    )
