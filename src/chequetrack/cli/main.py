"""Main CLI entry point."""

import click
from chequetrack.database.factories import create_sqlite_database
from chequetrack.logging_config import setup_logging

# Import and register all commands at module level
from chequetrack.cli.commands import (
    account,
    add,
    balance,
    instrument,
    project,
    summary,
    transition,
    view,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CHEQUETRACK_DB_PATH environment variable)",
    envvar="CHEQUETRACK_DB_PATH",
)
@click.option(
    "--timezone",
    "timezone_name",
    help="IANA timezone used to decide what 'today' is (default: UTC)",
    envvar="CHEQUETRACK_TIMEZONE",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, timezone_name: str | None, verbose: bool):
    """Chequetrack - cheque and cash-flow tracking.

    Record cheques, deposits and withdrawals against your accounts and
    see what your balance will be on any date.
    """
    ctx.ensure_object(dict)
    setup_logging(verbose)
    ctx.obj["timezone"] = timezone_name

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
add.register_commands(cli)
view.register_commands(cli)
instrument.register_commands(cli)
transition.register_commands(cli)
balance.register_commands(cli)
project.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
