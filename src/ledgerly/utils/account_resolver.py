"""Utility for resolving account names to codes."""

from ledgerly.domain.account import ChartOfAccountsService


def resolve_account(account_service: ChartOfAccountsService, account: str) -> str:
    """Resolve an account code or name to an account code.

    Codes win over names; names match case-insensitively.

    Args:
        account_service: ChartOfAccountsService instance
        account: Account code ("1110") or name ("Cash on Hand")

    Returns:
        Account code

    Raises:
        ValueError: If account is not found
    """
    account = str(account).strip()
    if account_service.get_account(account) is not None:
        return account

    wanted = account.casefold()
    for acc in account_service.list_accounts():
        if acc.name.casefold() == wanted:
            return acc.code

    raise ValueError(f"Account '{account}' not found")
