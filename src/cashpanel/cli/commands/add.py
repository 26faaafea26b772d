"""Add entry command."""

import click
from cashpanel.cli.error_handling import handle_domain_error
from cashpanel.cli.formatting import format_entry_line
from cashpanel.domain.entities import (
    EntryKind,
    EntryStatus,
    RepetitionMode,
    SeriesRequest,
)
from cashpanel.domain.ledger import LedgerService
from cashpanel.utils.amount_parser import format_brl, parse_amount
from cashpanel.utils.date_parser import parse_date


@click.command("add")
@click.option("--description", required=True, help="Entry description")
@click.option("--category", required=True, help="Category name (e.g., 'Rent')")
@click.option("--amount", required=True, help="Amount, always positive (e.g., 150.00)")
@click.option(
    "--date",
    "entry_date",
    default="today",
    show_default=True,
    help="Entry date (YYYY-MM-DD, DD/MM/YYYY or relative like 'today', 'tomorrow')",
)
@click.option("--revenue/--expense", "is_revenue", default=False, help="Entry direction (default: expense)")
@click.option("--settled/--pending", "is_settled", default=False, help="Whether money already moved (default: pending)")
@click.option(
    "--repeat",
    type=click.Choice([m.value for m in RepetitionMode]),
    default=RepetitionMode.NONE.value,
    show_default=True,
    help="Split into monthly installments or repeat monthly",
)
@click.option("--count", type=int, default=2, show_default=True, help="Number of installments or months")
@click.pass_context
def add_entry(
    ctx,
    description: str,
    category: str,
    amount: str,
    entry_date: str,
    is_revenue: bool,
    is_settled: bool,
    repeat: str,
    count: int,
):
    """Add an entry, or a monthly series of entries.

    Only the first entry of a series keeps --settled; later ones are pending.

    Examples:
        cashpanel add --description "Client invoice" --category Services --amount 1200 --revenue --settled
        cashpanel add --description "New laptop" --category Equipment --amount 350 --repeat installment --count 10
        cashpanel add --description "Hosting" --category Infrastructure --amount 29.90 --repeat recurring --count 12
    """
    db = ctx.obj["db"]
    service = LedgerService(db)

    try:
        start_date = parse_date(entry_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        entry_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    request = SeriesRequest(
        description=description,
        category=category,
        kind=EntryKind.REVENUE if is_revenue else EntryKind.EXPENSE,
        amount=entry_amount,
        date=start_date,
        status=EntryStatus.SETTLED if is_settled else EntryStatus.PENDING,
        repetition_mode=RepetitionMode(repeat),
        count=count,
    )

    try:
        entries = service.create_entries(request)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if len(entries) == 1:
        click.echo(f"Created entry {entries[0].id}")
    else:
        click.echo(f"Created {len(entries)} entries")
        if request.repetition_mode == RepetitionMode.INSTALLMENT:
            click.echo(f"  Total: {format_brl(entry_amount * len(entries))}")
    for entry in entries:
        click.echo(f"  {format_entry_line(entry)}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_entry)
