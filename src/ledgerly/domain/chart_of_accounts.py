"""Default chart of accounts and posting account configuration."""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Optional, Union

from ledgerly.domain import errors
from ledgerly.domain.entities import Account, AccountType, NormalBalance


@dataclass(frozen=True)
class PostingAccounts:
    """Account codes the posting adapters debit and credit."""

    cash: str = "1110"
    accounts_receivable: str = "1120"
    inventory: str = "1210"
    accounts_payable: str = "2110"
    vat_payable: str = "2210"
    retained_earnings: str = "3210"
    sales_revenue: str = "4110"
    sales_discount: str = "4120"
    cogs: str = "5110"
    default_expense: str = "6200"


DEFAULT_POSTING_ACCOUNTS = PostingAccounts()


def _account(code: str, name: str, type: AccountType, normal_balance: NormalBalance) -> Account:
    return Account(code=code, name=name, type=type, normal_balance=normal_balance)


_DR = NormalBalance.DEBIT
_CR = NormalBalance.CREDIT

DEFAULT_CHART_OF_ACCOUNTS: tuple[Account, ...] = (
    _account("1110", "Cash on Hand", AccountType.ASSET, _DR),
    _account("1120", "Accounts Receivable", AccountType.ASSET, _DR),
    _account("1210", "Inventory Asset", AccountType.ASSET, _DR),
    _account("1310", "Prepaid Expenses", AccountType.ASSET, _DR),
    _account("1410", "Property, Plant, & Equipment", AccountType.ASSET, _DR),
    _account("2110", "Accounts Payable", AccountType.LIABILITY, _CR),
    _account("2210", "VAT Payable", AccountType.LIABILITY, _CR),
    _account("2310", "Salaries Payable", AccountType.LIABILITY, _CR),
    _account("3110", "Owner's Equity", AccountType.EQUITY, _CR),
    _account("3210", "Retained Earnings", AccountType.EQUITY, _CR),
    _account("4110", "Sales Revenue", AccountType.REVENUE, _CR),
    _account("4120", "Sales Discount", AccountType.CONTRA_REVENUE, _DR),
    _account("5110", "Cost of Goods Sold", AccountType.COGS, _DR),
    _account("6110", "Rent Expense", AccountType.EXPENSE, _DR),
    _account("6120", "Salaries Expense", AccountType.EXPENSE, _DR),
    _account("6130", "Office Supplies Expense", AccountType.EXPENSE, _DR),
    _account("6140", "Marketing Expense", AccountType.EXPENSE, _DR),
    _account("6150", "Utilities Expense", AccountType.EXPENSE, _DR),
    _account("6160", "Transportation Expense", AccountType.EXPENSE, _DR),
    _account("6170", "Meals & Entertainment Expense", AccountType.EXPENSE, _DR),
    _account("6180", "Equipment Expense", AccountType.EXPENSE, _DR),
    _account("6190", "Professional Services Expense", AccountType.EXPENSE, _DR),
    _account("6200", "Other Expense", AccountType.EXPENSE, _DR),
)


def normalize_account(data: Union[Account, Mapping[str, Any]]) -> Account:
    """Trim and validate a chart-of-accounts row.

    Type defaults to Asset and normal balance to Debit when blank.

    Raises:
        ValidationError: If code or name is empty, or type/normal balance is unknown
    """
    if isinstance(data, Account):
        data = {
            "code": data.code,
            "name": data.name,
            "type": data.type.value,
            "normal_balance": data.normal_balance.value,
        }

    code = str(data.get("code") or "").strip()
    name = str(data.get("name") or "").strip()
    if not code:
        raise errors.ValidationError("Account code is required.")
    if not name:
        raise errors.ValidationError("Account name is required.")

    raw_type = str(data.get("type") or "").strip() or AccountType.ASSET.value
    raw_normal = data.get("normalBalance", data.get("normal_balance"))
    raw_normal = str(raw_normal or "").strip() or NormalBalance.DEBIT.value
    try:
        account_type = AccountType(raw_type)
    except ValueError:
        raise errors.ValidationError(f"Unknown account type '{raw_type}'")
    try:
        normal_balance = NormalBalance(raw_normal)
    except ValueError:
        raise errors.ValidationError(f"Unknown normal balance '{raw_normal}'")

    return Account(code=code, name=name, type=account_type, normal_balance=normal_balance)


def find_account(chart: Iterable[Account], code: Optional[str]) -> Optional[Account]:
    """Return the account with the given code, or None."""
    if not code:
        return None
    for account in chart:
        if account.code == code:
            return account
    return None


def upsert_account(
    chart: Iterable[Account], account: Union[Account, Mapping[str, Any]]
) -> list[Account]:
    """Return a new chart with ``account`` added or replaced, sorted by code."""
    normalized = normalize_account(account)
    accounts = [item for item in chart if item.code != normalized.code]
    accounts.append(normalized)
    return sorted(accounts, key=lambda item: item.code)


def delete_account(chart: Iterable[Account], code: str) -> list[Account]:
    """Return a new chart without ``code``.

    Raises:
        NotFoundError: If the code is not in the chart
    """
    chart = list(chart)
    remaining = [item for item in chart if item.code != code]
    if len(remaining) == len(chart):
        raise errors.NotFoundError(errors.account_not_found(code))
    return remaining
