"""Ledger entry management commands."""

import click
from cashpanel.cli.date_filters import resolve_month, resolve_today
from cashpanel.cli.error_handling import handle_domain_error
from cashpanel.cli.formatting import format_entry_line
from cashpanel.domain.entities import EntryKind, EntryStatus
from cashpanel.domain.ledger import LedgerService
from cashpanel.utils.amount_parser import parse_amount
from cashpanel.utils.date_parser import parse_date


@click.group("entry")
def entry_group():
    """Manage ledger entries."""
    pass


@entry_group.command("list")
@click.option("--month", type=int, help="Month number 1-12 (default: current month)")
@click.option("--year", type=int, help="Year (default: current year)")
@click.option("--all", "show_all", is_flag=True, help="List entries of every period")
@click.option("--pending", "only_pending", is_flag=True, help="Only pending entries")
@click.option("--today", help="Reference date (default: system date)")
@click.pass_context
def list_entries(ctx, month: int | None, year: int | None, show_all: bool, only_pending: bool, today: str | None):
    """List entries for a month.

    Examples:
        cashpanel entry list
        cashpanel entry list --month 3 --year 2024 --pending
        cashpanel entry list --all
    """
    service = LedgerService(ctx.obj["db"])
    status = EntryStatus.PENDING if only_pending else None

    if show_all:
        entries = service.list_entries(status=status)
    else:
        reference = resolve_today(ctx, today)
        month, year = resolve_month(ctx, month=month, year=year, today=reference)
        entries = [
            e for e in service.list_month(month, year)
            if status is None or e.status == status
        ]

    if not entries:
        click.echo("No entries found.")
        return

    click.echo(f"\nFound {len(entries)} entr{'y' if len(entries) == 1 else 'ies'}:")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<18} {'Date':<12} {'Amount':>16} {'Status':<8} {'Category':<16} {'Description':<30} Series"
    )
    click.echo("-" * 110)
    for entry in entries:
        click.echo(format_entry_line(entry))


@entry_group.command("update")
@click.argument("entry_id", type=int)
@click.option("--description", help="New description")
@click.option("--category", help="New category")
@click.option("--amount", help="New amount")
@click.option("--date", "entry_date", help="New date")
@click.option(
    "--kind",
    type=click.Choice([k.value for k in EntryKind]),
    help="New direction",
)
@click.option(
    "--status",
    type=click.Choice([s.value for s in EntryStatus]),
    help="New status",
)
@click.pass_context
def update_entry(
    ctx,
    entry_id: int,
    description: str | None,
    category: str | None,
    amount: str | None,
    entry_date: str | None,
    kind: str | None,
    status: str | None,
) -> None:
    """Update a single entry.

    Only the given fields change. Other entries of the same series are left
    untouched.

    Examples:
        cashpanel entry update 1700000000000000 --amount 80.00
        cashpanel entry update 1700000000000000 --status settled
    """
    service = LedgerService(ctx.obj["db"])

    new_amount = None
    if amount is not None:
        try:
            new_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    new_date = None
    if entry_date is not None:
        try:
            new_date = parse_date(entry_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        service.update_entry(
            entry_id,
            description=description,
            category=category,
            kind=EntryKind(kind) if kind else None,
            amount=new_amount,
            entry_date=new_date,
            status=EntryStatus(status) if status else None,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated entry {entry_id}")


@entry_group.command("settle")
@click.argument("entry_id", type=int)
@click.option("--undo", is_flag=True, help="Mark the entry pending again")
@click.pass_context
def settle_entry(ctx, entry_id: int, undo: bool) -> None:
    """Mark an entry as settled (or pending with --undo)."""
    service = LedgerService(ctx.obj["db"])
    status = EntryStatus.PENDING if undo else EntryStatus.SETTLED
    try:
        service.set_status(entry_id, status)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Entry {entry_id} marked {status.value}")


@entry_group.command("delete")
@click.argument("entry_id", type=int)
@click.option("--series", is_flag=True, help="Delete every entry of the entry's series")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_entry(ctx, entry_id: int, series: bool, yes: bool) -> None:
    """Delete an entry, or its whole installment/recurring series."""
    service = LedgerService(ctx.obj["db"])

    target = "the whole series of entry" if series else "entry"
    if not yes and not click.confirm(f"Delete {target} {entry_id}?"):
        click.echo("Cancelled.")
        return

    try:
        if series:
            count = service.delete_series(entry_id)
            click.echo(f"Deleted {count} entries")
        else:
            service.delete_entry(entry_id)
            click.echo(f"Deleted entry {entry_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(entry_group)
