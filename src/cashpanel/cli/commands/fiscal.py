"""Fiscal diagnosis command."""

import json
from decimal import Decimal

import click
from cashpanel.cli.date_filters import resolve_today
from cashpanel.cli.error_handling import handle_domain_error
from cashpanel.domain.entities import GuideStatus
from cashpanel.domain.fiscal import AVERAGE_GUIDE_VALUE, normalize
from cashpanel.utils.amount_parser import format_brl, parse_amount


@click.command("fiscal")
@click.argument("payload_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--average-guide-value",
    envvar="CASHPANEL_AVERAGE_GUIDE_VALUE",
    default=str(AVERAGE_GUIDE_VALUE),
    show_default=True,
    help="Value assumed for each missing DAS guide when estimating debt",
)
@click.option("--json", "as_json", is_flag=True, help="Print the diagnosis as JSON")
@click.option("--today", help="Reference date (default: system date)")
@click.pass_context
def fiscal_diagnosis(ctx, payload_file: str, average_guide_value: str, as_json: bool, today: str | None):
    """Diagnose DAS guides and DASN declarations from a fiscal payload file.

    Examples:
        cashpanel fiscal mei360.json
        cashpanel fiscal mei360.json --today 2024-02-01 --json
    """
    reference = resolve_today(ctx, today)

    try:
        average = parse_amount(average_guide_value)
    except ValueError as e:
        click.echo(f"Error: Invalid average guide value: {e}", err=True)
        ctx.exit(1)

    try:
        with open(payload_file, encoding="utf-8") as f:
            raw = f.read()
        diagnosis = normalize(raw, reference, average_guide_value=average)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        click.echo(json.dumps(diagnosis.to_dict(), indent=2, ensure_ascii=False))
        return

    click.echo(f"\nStatus: {diagnosis.overall_status.value.upper()}")
    debt = format_brl(diagnosis.total_estimated_debt)
    click.echo(f"Total debt: {debt}{' (estimated)' if diagnosis.is_estimated else ''}")
    click.echo(f"Pending declarations: {diagnosis.pending_declaration_count}")
    for year, months in sorted(diagnosis.estimated_months.items()):
        click.echo(f"  Estimated {months} missing guide(s) for {year}")

    if diagnosis.guides:
        click.echo("\nDAS guides")
        click.echo("-" * 60)
        for guide in diagnosis.guides:
            total = format_brl(guide.total_amount) if guide.total else "-"
            marker = "!" if guide.status == GuideStatus.OVERDUE else " "
            click.echo(
                f"{marker} {guide.period[:16]:<16} {guide.due_date:<12} {total:>14} {guide.status.value}"
            )

    if diagnosis.declarations:
        click.echo("\nDASN declarations")
        click.echo("-" * 60)
        for declaration in diagnosis.declarations:
            filed = f" on {declaration.filed_date}" if declaration.filed_date else ""
            click.echo(f"  {declaration.year or '?':<6} {declaration.status.value}{filed}")

    if diagnosis.total_estimated_debt == Decimal("0") and diagnosis.pending_declaration_count == 0:
        click.echo("\nNo pending fiscal obligations.")


def register_commands(cli):
    """Register fiscal command with main CLI."""
    cli.add_command(fiscal_diagnosis)
