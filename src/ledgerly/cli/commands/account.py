"""Chart of accounts commands."""

import click
from ledgerly.cli.account_resolution import resolve_account_or_exit
from ledgerly.cli.error_handling import handle_domain_error
from ledgerly.domain.account import ChartOfAccountsService
from ledgerly.domain.entities import AccountType, NormalBalance
from ledgerly.domain.errors import DomainError

ACCOUNT_TYPE_CHOICE = click.Choice([t.value for t in AccountType], case_sensitive=False)
NORMAL_BALANCE_CHOICE = click.Choice([n.value for n in NormalBalance], case_sensitive=False)


def _canonical(choices, value: str | None) -> str | None:
    """Map a case-insensitive choice back to its canonical spelling."""
    if value is None:
        return None
    for choice in choices:
        if choice.value.lower() == value.lower():
            return choice.value
    return value


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    service = ChartOfAccountsService(ctx.obj["db"])

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found. Run 'ledgerly init-accounts' to load the default chart.")
        return

    click.echo("\nChart of Accounts:")
    click.echo("-" * 80)
    click.echo(f"{'Code':<8} {'Name':<40} {'Type':<16} {'Normal':<8}")
    click.echo("-" * 80)
    for acc in accounts:
        click.echo(
            f"{acc.code:<8} {acc.name[:40]:<40} {acc.type.value:<16} {acc.normal_balance.value:<8}"
        )


@account_group.command("add")
@click.argument("code")
@click.argument("name")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, default="Asset", show_default=True)
@click.option(
    "--normal-balance", type=NORMAL_BALANCE_CHOICE, default="Debit", show_default=True
)
@click.pass_context
def add_account(ctx, code: str, name: str, account_type: str, normal_balance: str):
    """Add an account to the chart.

    Examples:
        ledgerly account add 6210 "Bank Fees" --type Expense
        ledgerly account add 2410 "Loans Payable" --type Liability --normal-balance Credit
    """
    service = ChartOfAccountsService(ctx.obj["db"])
    try:
        account = service.create_account(
            {
                "code": code,
                "name": name,
                "type": _canonical(AccountType, account_type),
                "normal_balance": _canonical(NormalBalance, normal_balance),
            }
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created account {account.code} '{account.name}'")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--type", "account_type", type=ACCOUNT_TYPE_CHOICE, help="New account type")
@click.option("--normal-balance", type=NORMAL_BALANCE_CHOICE, help="New normal balance")
@click.pass_context
def update_account(ctx, account: str, name: str | None, account_type: str | None, normal_balance: str | None):
    """Update an account.

    ACCOUNT can be an account code or name.
    """
    service = ChartOfAccountsService(ctx.obj["db"])
    code = resolve_account_or_exit(ctx, service, account)
    try:
        updated = service.update_account(
            code,
            name=name,
            type=_canonical(AccountType, account_type),
            normal_balance=_canonical(NormalBalance, normal_balance),
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated account {updated.code} '{updated.name}'")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account code or name. The account can only be deleted
    if no journal line posts to it.
    """
    service = ChartOfAccountsService(ctx.obj["db"])
    code = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(code)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account {code} '{account_obj.name}'?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(code)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted account {code} '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
