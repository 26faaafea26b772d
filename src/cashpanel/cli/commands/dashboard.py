"""Dashboard commands: monthly metrics, liquidity forecast and alerts."""

import json
import logging

import click
from cashpanel.cli.date_filters import resolve_month, resolve_today
from cashpanel.domain.alerts import build_dashboard_alerts
from cashpanel.domain.fiscal import normalize
from cashpanel.domain.forecast import DEFAULT_HORIZON_DAYS, forecast
from cashpanel.domain.ledger import LedgerService
from cashpanel.domain.metrics import (
    category_distribution,
    compute_annual,
    compute_monthly,
    daily_balance_series,
    monthly_evolution,
)
from cashpanel.utils.amount_parser import format_brl

logger = logging.getLogger(__name__)


@click.command("metrics")
@click.option("--month", type=int, help="Month number 1-12 (default: current month)")
@click.option("--year", type=int, help="Year (default: current year)")
@click.option("--annual", is_flag=True, help="Compute over the whole year instead of one month")
@click.option("--categories", is_flag=True, help="Also show the top categories of the month")
@click.option("--today", help="Reference date (default: system date)")
@click.pass_context
def show_metrics(ctx, month: int | None, year: int | None, annual: bool, categories: bool, today: str | None):
    """Show realized and projected balances.

    Overdue and upcoming amounts add up pending revenue and expense alike:
    they measure exposure, not net balance.

    Examples:
        cashpanel metrics
        cashpanel metrics --month 2 --year 2024 --categories
        cashpanel metrics --annual --year 2024
    """
    service = LedgerService(ctx.obj["db"])
    reference = resolve_today(ctx, today)
    month, year = resolve_month(ctx, month=month, year=year, today=reference)

    entries = service.list_entries()
    if annual:
        metrics = compute_annual(entries, year, reference)
        click.echo(f"\nMetrics for {year}")
    else:
        metrics = compute_monthly(entries, month, year, reference)
        click.echo(f"\nMetrics for {year}-{month:02d}")
    click.echo("-" * 40)

    rows = [
        ("Realized balance", metrics.realized_balance),
        ("Pending receivable", metrics.pending_receivable),
        ("Pending payable", metrics.pending_payable),
        ("Projected balance", metrics.projected_balance),
        ("Overdue", metrics.overdue_amount),
        ("Upcoming", metrics.upcoming_amount),
    ]
    for label, value in rows:
        click.echo(f"{label:<22} {format_brl(value):>16}")

    if categories and not annual:
        click.echo("\nTop categories")
        click.echo("-" * 40)
        for item in category_distribution(entries, month, year):
            prefix = "R" if item["kind"].value == "revenue" else "E"
            click.echo(f"{prefix}: {item['category'][:18]:<18} {format_brl(item['total']):>16}")


@click.command("forecast")
@click.option(
    "--horizon",
    type=int,
    default=DEFAULT_HORIZON_DAYS,
    show_default=True,
    help="Number of days to simulate",
)
@click.option("--today", help="Reference date (default: system date)")
@click.pass_context
def show_forecast(ctx, horizon: int, today: str | None):
    """Find the first day the cash balance would turn negative."""
    service = LedgerService(ctx.obj["db"])
    reference = resolve_today(ctx, today)

    result = forecast(service.list_entries(), reference, horizon)
    if result.is_projected_negative:
        days = result.days_until_negative
        click.echo(
            f"Warning: balance projected negative in {days} day{'s' if days != 1 else ''}"
        )
    else:
        click.echo(f"Balance stays non-negative for the next {horizon} days")


@click.command("alerts")
@click.option(
    "--fiscal-file",
    type=click.Path(exists=True, dir_okay=False),
    help="Fiscal payload (JSON) to include DAS/DASN alerts",
)
@click.option("--today", help="Reference date (default: system date)")
@click.pass_context
def show_alerts(ctx, fiscal_file: str | None, today: str | None):
    """Show prioritized alerts with the screen each one points to."""
    service = LedgerService(ctx.obj["db"])
    reference = resolve_today(ctx, today)

    diagnosis = None
    if fiscal_file:
        try:
            with open(fiscal_file, encoding="utf-8") as f:
                diagnosis = normalize(json.load(f), reference)
        except ValueError as e:
            # Financial alerts still render without the fiscal part
            logger.warning("Fiscal diagnosis unavailable: %s", e)
            click.echo(f"Fiscal diagnosis unavailable: {e}", err=True)

    for alert in build_dashboard_alerts(service.list_entries(), reference, diagnosis):
        click.echo(f"[{alert.severity}] {alert.title} -> {alert.target.value}")
        click.echo(f"    {alert.description}")


@click.command("history")
@click.option("--months", type=int, default=6, show_default=True, help="Number of months to show")
@click.option("--daily", is_flag=True, help="Show the running realized balance of the current month by day")
@click.option("--today", help="Reference date (default: system date)")
@click.pass_context
def show_history(ctx, months: int, daily: bool, today: str | None):
    """Show realized revenue and expense over recent months."""
    service = LedgerService(ctx.obj["db"])
    reference = resolve_today(ctx, today)
    entries = service.list_entries()

    if daily:
        for day, balance in daily_balance_series(entries, reference.month, reference.year, reference):
            click.echo(f"{day.isoformat()} {format_brl(balance):>16}")
        return

    click.echo(f"{'Month':<8} {'Revenue':>16} {'Expense':>16}")
    for row in monthly_evolution(entries, reference, months):
        click.echo(f"{row['period']:<8} {format_brl(row['revenue']):>16} {format_brl(row['expense']):>16}")


def register_commands(cli):
    """Register dashboard commands with main CLI."""
    cli.add_command(show_metrics)
    cli.add_command(show_forecast)
    cli.add_command(show_alerts)
    cli.add_command(show_history)
