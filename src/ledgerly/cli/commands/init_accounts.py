"""Initialize the default chart of accounts."""

import click
from ledgerly.domain.account import ChartOfAccountsService


@click.command("init-accounts")
@click.option("--force", is_flag=True, help="Overwrite accounts that share a default code")
@click.pass_context
def init_accounts(ctx, force: bool):
    """Initialize database with the default chart of accounts."""
    service = ChartOfAccountsService(ctx.obj["db"])

    existing = service.list_accounts()
    if existing and not force:
        click.echo("Accounts already exist. Use --force to overwrite.")
        return

    click.echo("Creating default chart of accounts...")
    created = service.initialize_defaults(force=force)
    click.echo(f"Successfully created {created} accounts.")


def register_commands(cli):
    """Register init-accounts command with main CLI."""
    cli.add_command(init_accounts)
