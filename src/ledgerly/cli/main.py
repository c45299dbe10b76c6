"""Main CLI entry point."""

import click
from ledgerly.database.factories import create_sqlite_database
from ledgerly.utils.logging import setup_logging

# Import and register all commands at module level
from ledgerly.cli.commands import (
    account,
    init_accounts,
    journal,
    post,
    report,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERLY_DB_PATH environment variable)",
    envvar="LEDGERLY_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="LEDGERLY_LOG_LEVEL",
    help="Diagnostic log level",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Ledgerly - Double-entry ledger for small businesses.

    Post sales, expenses and purchase orders as balanced journal entries and
    report trial balance, profit and loss and balance sheet.
    """
    ctx.ensure_object(dict)
    setup_logging(log_level)

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
init_accounts.register_commands(cli)
journal.register_commands(cli)
post.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
