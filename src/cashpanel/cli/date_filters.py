"""CLI helpers for reference date and period resolution."""

from datetime import date

import click

from cashpanel.utils.date_parser import parse_date


def resolve_today(ctx, today: str | None) -> date:
    """Resolve the --today option, defaulting to the system date."""
    if not today:
        return date.today()
    try:
        return parse_date(today)
    except ValueError as e:
        click.echo(f"Error: Invalid --today date: {e}", err=True)
        ctx.exit(1)


def resolve_month(
    ctx, *, month: int | None, year: int | None, today: date
) -> tuple[int, int]:
    """Resolve --month/--year, defaulting to the month of today."""
    month = month if month is not None else today.month
    year = year if year is not None else today.year

    if not 1 <= month <= 12:
        click.echo(f"Error: Invalid month {month}. Use 1-12.", err=True)
        ctx.exit(1)

    return month, year
