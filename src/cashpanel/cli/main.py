"""Main CLI entry point."""

import logging

import click
from cashpanel.database.factories import create_sqlite_database

# Import and register all commands at module level
from cashpanel.cli.commands import add, entry, dashboard, fiscal


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CASHPANEL_DB_PATH environment variable)",
    envvar="CASHPANEL_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Cashpanel - Small-business cash flow and fiscal dashboard.

    Record revenue and expenses (including installment and recurring series),
    follow realized versus projected balances, forecast negative cash, and
    check DAS/DASN fiscal status.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
add.register_commands(cli)
entry.register_commands(cli)
dashboard.register_commands(cli)
fiscal.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
