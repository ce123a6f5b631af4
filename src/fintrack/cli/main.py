"""Main CLI entry point."""

import click
from fintrack.cli.logging_setup import LOG_LEVELS, configure_logging
from fintrack.database.factories import DB_PATH_ENV_VAR, create_sqlite_database

# Import and register all commands at module level
from fintrack.cli.commands import (
    account,
    reconcile,
    transaction,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINTRACK_DB_PATH environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="FINTRACK_LOG_LEVEL",
    help="Verbosity of log output on stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Fintrack - Personal finance tracking.

    Track accounts and transactions and keep account balances consistent
    with their transaction history.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

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
transaction.register_commands(cli)
reconcile.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
