"""CLI error handling helpers."""

import click

from cashpanel.domain.errors import DomainError, MalformedFiscalPayload


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    A malformed fiscal payload is reported as an unavailable diagnosis so it
    is never mistaken for a clean fiscal situation.
    """
    if isinstance(error, MalformedFiscalPayload):
        click.echo(f"Fiscal diagnosis unavailable: {error}", err=True)
        click.echo("Fetch the fiscal data again and retry.", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
