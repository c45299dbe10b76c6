"""Per-account balances and ledger detail derived from a journal."""

from decimal import Decimal
from typing import Iterable, Optional

from ledgerly.domain.chart_of_accounts import find_account
from ledgerly.domain.entities import (
    Account,
    AccountBalance,
    JournalEntry,
    LedgerAccount,
    LedgerTransaction,
    ZERO,
)
from ledgerly.domain.journal import EPSILON, sort_journal_entries


def snap_to_zero(amount: Decimal) -> Decimal:
    """Treat sums within EPSILON of zero as exactly zero."""
    return ZERO if abs(amount) < EPSILON else amount


def signed_balance(account: Account, debit: Decimal, credit: Decimal) -> Decimal:
    """Balance in the account's normal-balance sign convention."""
    if account.is_debit_normal:
        return debit - credit
    return credit - debit


def build_account_balance_index(
    journal: Iterable[JournalEntry], chart_of_accounts: Iterable[Account]
) -> dict[str, AccountBalance]:
    """Accumulate debits and credits per chart-of-accounts row.

    Lines posted to codes missing from the chart are ignored.

    Returns:
        Mapping of account code to AccountBalance, in chart order
    """
    accounts = {account.code: account for account in chart_of_accounts}
    debits = {code: ZERO for code in accounts}
    credits = {code: ZERO for code in accounts}

    for entry in journal:
        for line in entry.lines:
            if line.account_code not in accounts:
                continue
            debits[line.account_code] += line.debit
            credits[line.account_code] += line.credit

    index: dict[str, AccountBalance] = {}
    for code, account in accounts.items():
        balance = signed_balance(account, debits[code], credits[code])
        index[code] = AccountBalance(
            account=account,
            debit=debits[code],
            credit=credits[code],
            balance=snap_to_zero(balance),
        )
    return index


def calculate_ledger_account(
    journal: Iterable[JournalEntry],
    chart_of_accounts: Iterable[Account],
    account_code: Optional[str],
) -> Optional[LedgerAccount]:
    """Build the running-balance ledger for one account.

    Returns:
        LedgerAccount, or None when the code is not in the chart
    """
    account = find_account(chart_of_accounts, account_code)
    if account is None:
        return None

    running_balance = ZERO
    total_debit = ZERO
    total_credit = ZERO
    transactions: list[LedgerTransaction] = []

    for entry in sort_journal_entries(journal):
        for line in entry.lines:
            if line.account_code != account_code:
                continue
            total_debit += line.debit
            total_credit += line.credit
            running_balance = snap_to_zero(
                running_balance + signed_balance(account, line.debit, line.credit)
            )
            transactions.append(
                LedgerTransaction(
                    date=entry.date,
                    description=entry.description,
                    debit=line.debit,
                    credit=line.credit,
                    balance=running_balance,
                    entry_id=entry.id,
                    reference=entry.reference,
                )
            )

    ending_balance = snap_to_zero(signed_balance(account, total_debit, total_credit))
    balance_type = (
        account.normal_balance if ending_balance >= 0 else account.normal_balance.opposite()
    )
    return LedgerAccount(
        account=account,
        transactions=tuple(transactions),
        total_debit=total_debit,
        total_credit=total_credit,
        ending_balance=ending_balance,
        balance_type=balance_type,
    )
