"""Main CLI entry point."""

import click
from ledgerbook.database.factories import create_database, create_sqlite_database
from ledgerbook.logging_config import configure_logging

# Import and register all commands at module level
from ledgerbook.cli.commands import (
    account,
    category,
    entry,
    gl,
    init_accounts,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERBOOK_DB_PATH environment variable)",
    envvar="LEDGERBOOK_DB_PATH",
)
@click.option(
    "--user-id",
    type=int,
    default=1,
    show_default=True,
    help="Owner of the entries being read or written",
    envvar="LEDGERBOOK_USER_ID",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (overrides LEDGERBOOK_LOG_LEVEL environment variable)",
    envvar="LEDGERBOOK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user_id: int, log_level: str | None):
    """Ledgerbook - Double-entry bookkeeping with a general ledger.

    Record entries in the cash receipt, cash disbursement and general journal
    books, then transfer them to the general ledger month by month.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)
    ctx.obj["user_id"] = user_id

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        # An explicit path wins over LEDGERBOOK_DATABASE_URL
        db = create_sqlite_database(database_path=db_path) if db_path else create_database()
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
init_accounts.register_commands(cli)
entry.register_commands(cli)
gl.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
