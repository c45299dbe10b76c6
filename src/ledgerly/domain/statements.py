"""Financial statements derived from the journal."""

from datetime import date
from decimal import Decimal
from types import MappingProxyType
from typing import Iterable, Optional

from ledgerly.domain import errors
from ledgerly.domain.chart_of_accounts import DEFAULT_POSTING_ACCOUNTS
from ledgerly.domain.entities import (
    Account,
    AccountBalance,
    AccountType,
    BalanceSheet,
    BalanceSheetLine,
    BalanceSheetTotals,
    JournalEntry,
    ProfitAndLoss,
    TrialBalance,
    TrialBalanceRow,
    ZERO,
)
from ledgerly.domain.journal import EPSILON
from ledgerly.domain.ledger import build_account_balance_index
from ledgerly.utils.date_parser import DateLike, coerce_date

EPOCH = date(1970, 1, 1)


def calculate_trial_balance(
    journal: Iterable[JournalEntry], chart_of_accounts: Iterable[Account]
) -> TrialBalance:
    """List every nonzero balance in its debit or credit column.

    A balance whose sign disagrees with the account's normal side is shown in
    the opposite column, so a debit-normal account that went net-credit is
    reported as a credit amount.
    """
    index = build_account_balance_index(journal, chart_of_accounts)
    rows: list[TrialBalanceRow] = []
    total_debit = ZERO
    total_credit = ZERO

    for holder in index.values():
        if holder.balance == 0:
            continue
        account = holder.account
        on_normal_side = holder.balance > 0
        if account.is_debit_normal == on_normal_side:
            debit, credit = abs(holder.balance), ZERO
        else:
            debit, credit = ZERO, abs(holder.balance)
        total_debit += debit
        total_credit += credit
        rows.append(
            TrialBalanceRow(
                code=account.code,
                name=account.name,
                type=account.type,
                debit=debit,
                credit=credit,
            )
        )

    rows.sort(key=lambda row: row.code)
    return TrialBalance(
        rows=tuple(rows),
        total_debit=total_debit,
        total_credit=total_credit,
        is_balanced=abs(total_debit - total_credit) < EPSILON,
    )


def _bound(value: Optional[DateLike]) -> Optional[date]:
    try:
        return coerce_date(value)
    except ValueError as e:
        raise errors.ValidationError(str(e)) from e


def _within_range(entry_date: date, start_date: Optional[date], end_date: Optional[date]) -> bool:
    if start_date is not None and entry_date < start_date:
        return False
    if end_date is not None and entry_date > end_date:
        return False
    return True


def calculate_profit_and_loss(
    journal: Iterable[JournalEntry],
    chart_of_accounts: Iterable[Account],
    start_date: Optional[DateLike] = None,
    end_date: Optional[DateLike] = None,
) -> ProfitAndLoss:
    """Summarize revenue, discounts, COGS and operating expenses.

    Entries dated within ``[start_date, end_date]`` are included; the whole
    end day counts. A missing bound leaves that side of the range open.
    Bounds may be dates, datetimes or date strings.

    Raises:
        ValidationError: If a bound cannot be parsed as a date
    """
    start_date = _bound(start_date)
    end_date = _bound(end_date)
    accounts = {account.code: account for account in chart_of_accounts}
    total_revenue = ZERO
    total_discounts = ZERO
    total_cogs = ZERO
    operating_expenses: dict[str, Decimal] = {}

    for entry in journal:
        if not _within_range(entry.date, start_date, end_date):
            continue
        for line in entry.lines:
            account = accounts.get(line.account_code)
            if account is None:
                continue
            if account.type is AccountType.REVENUE:
                total_revenue += line.credit
            elif account.type is AccountType.CONTRA_REVENUE:
                total_discounts += line.debit
            elif account.type is AccountType.COGS:
                total_cogs += line.debit
            elif account.type is AccountType.EXPENSE:
                operating_expenses[account.name] = (
                    operating_expenses.get(account.name, ZERO) + line.debit
                )

    net_revenue = total_revenue - total_discounts
    gross_profit = net_revenue - total_cogs
    total_operating_expenses = sum(operating_expenses.values(), ZERO)
    return ProfitAndLoss(
        start_date=start_date,
        end_date=end_date,
        total_revenue=total_revenue,
        total_discounts=total_discounts,
        net_revenue=net_revenue,
        total_cogs=total_cogs,
        gross_profit=gross_profit,
        operating_expenses=MappingProxyType(operating_expenses),
        total_operating_expenses=total_operating_expenses,
        net_income=gross_profit - total_operating_expenses,
    )


def _balance_sheet_line(holder: AccountBalance, balance: Decimal) -> BalanceSheetLine:
    return BalanceSheetLine(code=holder.account.code, name=holder.account.name, balance=balance)


def calculate_balance_sheet(
    journal: Iterable[JournalEntry],
    chart_of_accounts: Iterable[Account],
    as_of: Optional[DateLike] = None,
    retained_earnings_code: str = DEFAULT_POSTING_ACCOUNTS.retained_earnings,
) -> BalanceSheet:
    """Assets, liabilities and equity as of a date.

    Net income since the epoch is added to the retained earnings balance in
    memory. No closing entry is posted.
    """
    as_of = _bound(as_of) or date.today()
    chart_of_accounts = list(chart_of_accounts)
    journal = [entry for entry in journal if entry.date <= as_of]

    index = build_account_balance_index(journal, chart_of_accounts)
    pnl = calculate_profit_and_loss(journal, chart_of_accounts, start_date=EPOCH, end_date=as_of)

    sections: dict[AccountType, list[BalanceSheetLine]] = {
        AccountType.ASSET: [],
        AccountType.LIABILITY: [],
        AccountType.EQUITY: [],
    }
    for code, holder in index.items():
        balance = holder.balance
        if code == retained_earnings_code:
            balance += pnl.net_income
        if abs(balance) < EPSILON:
            continue
        section = sections.get(holder.account.type)
        if section is not None:
            section.append(_balance_sheet_line(holder, balance))

    total_assets = sum((line.balance for line in sections[AccountType.ASSET]), ZERO)
    total_liabilities = sum((line.balance for line in sections[AccountType.LIABILITY]), ZERO)
    total_equity = sum((line.balance for line in sections[AccountType.EQUITY]), ZERO)
    liabilities_and_equity = total_liabilities + total_equity

    return BalanceSheet(
        as_of=as_of,
        assets=tuple(sections[AccountType.ASSET]),
        liabilities=tuple(sections[AccountType.LIABILITY]),
        equity=tuple(sections[AccountType.EQUITY]),
        totals=BalanceSheetTotals(
            assets=total_assets,
            liabilities=total_liabilities,
            equity=total_equity,
            liabilities_and_equity=liabilities_and_equity,
            is_balanced=abs(total_assets - liabilities_and_equity) < EPSILON,
        ),
    )
