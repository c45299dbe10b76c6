"""Financial report domain service."""

from datetime import date
from typing import Optional

from ledgerly.database.base import Database
from ledgerly.domain import errors
from ledgerly.domain.chart_of_accounts import DEFAULT_POSTING_ACCOUNTS, PostingAccounts
from ledgerly.domain.entities import BalanceSheet, LedgerAccount, ProfitAndLoss, TrialBalance
from ledgerly.domain.ledger import calculate_ledger_account
from ledgerly.domain.statements import (
    calculate_balance_sheet,
    calculate_profit_and_loss,
    calculate_trial_balance,
)


class ReportService:
    """Service for building statements from the stored journal."""

    def __init__(self, db: Database, accounts: PostingAccounts = DEFAULT_POSTING_ACCOUNTS):
        """Initialize report service.

        Args:
            db: Database instance
            accounts: Posting account codes (retained earnings is read from here)
        """
        self.db = db
        self.accounts = accounts

    def trial_balance(self) -> TrialBalance:
        return calculate_trial_balance(
            self.db.list_journal_entries(), self.db.list_ledger_accounts()
        )

    def profit_and_loss(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> ProfitAndLoss:
        return calculate_profit_and_loss(
            self.db.list_journal_entries(),
            self.db.list_ledger_accounts(),
            start_date=start_date,
            end_date=end_date,
        )

    def balance_sheet(self, as_of: Optional[date] = None) -> BalanceSheet:
        return calculate_balance_sheet(
            self.db.list_journal_entries(),
            self.db.list_ledger_accounts(),
            as_of=as_of,
            retained_earnings_code=self.accounts.retained_earnings,
        )

    def ledger_account(self, code: str) -> LedgerAccount:
        """Running-balance ledger for one account.

        Raises:
            NotFoundError: If the account is not in the chart
        """
        ledger = calculate_ledger_account(
            self.db.list_journal_entries(), self.db.list_ledger_accounts(), code
        )
        if ledger is None:
            raise errors.NotFoundError(errors.account_not_found(code))
        return ledger
