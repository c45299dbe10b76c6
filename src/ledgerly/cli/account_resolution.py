"""CLI helpers for account resolution and error handling."""

from __future__ import annotations

import click
from ledgerly.domain.account import ChartOfAccountsService
from ledgerly.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: ChartOfAccountsService, account: str
) -> str:
    """Resolve account code or name, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
