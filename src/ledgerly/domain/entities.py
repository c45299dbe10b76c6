"""Domain model entities for ledgerly.

These are pure data classes representing ledger concepts, independent of
database schema. Every engine function returns new instances of these
classes; none of them is ever mutated after construction.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

ZERO = Decimal("0")


class AccountType(str, Enum):
    """Chart-of-accounts categories."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    CONTRA_REVENUE = "Contra-Revenue"
    COGS = "COGS"
    EXPENSE = "Expense"


class NormalBalance(str, Enum):
    """Side on which an account carries a positive balance."""

    DEBIT = "Debit"
    CREDIT = "Credit"

    def opposite(self) -> "NormalBalance":
        return NormalBalance.CREDIT if self is NormalBalance.DEBIT else NormalBalance.DEBIT


@dataclass(frozen=True)
class Account:
    """Chart-of-accounts row."""

    code: str
    name: str
    type: AccountType
    normal_balance: NormalBalance

    @property
    def is_debit_normal(self) -> bool:
        return self.normal_balance is NormalBalance.DEBIT


@dataclass(frozen=True)
class JournalLine:
    """One debit or credit posting inside a journal entry."""

    account_code: str
    debit: Decimal = ZERO
    credit: Decimal = ZERO


@dataclass(frozen=True)
class JournalEntry:
    """Balanced unit of posting.

    ``reference`` correlates the entry with the business event that produced
    it and drives idempotent replacement. ``metadata`` is a weak back-reference
    (e.g. ``{"source": "sale", "saleId": 42}``) that the engine never
    dereferences.
    """

    id: str
    date: date
    description: str
    lines: tuple[JournalLine, ...]
    created_at: datetime
    reference: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), ZERO)

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), ZERO)


@dataclass(frozen=True)
class AccountBalance:
    """Accumulated debits, credits and signed balance for one account."""

    account: Account
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    balance: Decimal = ZERO


@dataclass(frozen=True)
class LedgerTransaction:
    """A single line of an account ledger with its running balance."""

    date: date
    description: str
    debit: Decimal
    credit: Decimal
    balance: Decimal
    entry_id: str
    reference: Optional[str] = None


@dataclass(frozen=True)
class LedgerAccount:
    """Per-account ledger detail."""

    account: Account
    transactions: tuple[LedgerTransaction, ...]
    total_debit: Decimal
    total_credit: Decimal
    ending_balance: Decimal
    balance_type: NormalBalance


@dataclass(frozen=True)
class TrialBalanceRow:
    """Trial balance line for an account with a nonzero balance."""

    code: str
    name: str
    type: AccountType
    debit: Decimal
    credit: Decimal


@dataclass(frozen=True)
class TrialBalance:
    """Trial balance statement."""

    rows: tuple[TrialBalanceRow, ...]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool


@dataclass(frozen=True)
class ProfitAndLoss:
    """Profit and loss statement for an inclusive date range."""

    start_date: Optional[date]
    end_date: Optional[date]
    total_revenue: Decimal
    total_discounts: Decimal
    net_revenue: Decimal
    total_cogs: Decimal
    gross_profit: Decimal
    operating_expenses: Mapping[str, Decimal]
    total_operating_expenses: Decimal
    net_income: Decimal


@dataclass(frozen=True)
class BalanceSheetLine:
    """Balance sheet line item."""

    code: str
    name: str
    balance: Decimal


@dataclass(frozen=True)
class BalanceSheetTotals:
    """Balance sheet section totals."""

    assets: Decimal
    liabilities: Decimal
    equity: Decimal
    liabilities_and_equity: Decimal
    is_balanced: bool


@dataclass(frozen=True)
class BalanceSheet:
    """Point-in-time balance sheet."""

    as_of: date
    assets: tuple[BalanceSheetLine, ...]
    liabilities: tuple[BalanceSheetLine, ...]
    equity: tuple[BalanceSheetLine, ...]
    totals: BalanceSheetTotals
