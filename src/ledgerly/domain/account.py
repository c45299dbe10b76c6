"""Chart of accounts domain service."""

import logging
from typing import Any, Mapping, Optional, Union

from ledgerly.database.base import Database
from ledgerly.domain import errors
from ledgerly.domain.chart_of_accounts import (
    DEFAULT_CHART_OF_ACCOUNTS,
    delete_account as remove_from_chart,
    find_account,
    normalize_account,
    upsert_account,
)
from ledgerly.domain.entities import Account

logger = logging.getLogger(__name__)


class ChartOfAccountsService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize chart of accounts service.

        Args:
            db: Database instance
        """
        self.db = db

    def list_accounts(self) -> list[Account]:
        """List all accounts ordered by code."""
        return self.db.list_ledger_accounts()

    def get_account(self, code: str) -> Optional[Account]:
        """Get account by code.

        Args:
            code: Account code

        Returns:
            Account entity or None if not found
        """
        return self.db.get_ledger_account(str(code).strip())

    def create_account(self, account: Union[Account, Mapping[str, Any]]) -> Account:
        """Add a new account.

        Raises:
            ValidationError: If the account fields are invalid
            ConflictError: If the code already exists
        """
        normalized = normalize_account(account)
        chart = self.list_accounts()
        if find_account(chart, normalized.code) is not None:
            raise errors.ConflictError(f"Account with code '{normalized.code}' already exists")
        created = find_account(upsert_account(chart, normalized), normalized.code)
        self.db.save_ledger_account(created)
        return created

    def update_account(self, code: str, **changes: Any) -> Account:
        """Update name, type or normal balance of an existing account.

        Args:
            code: Account code
            **changes: Any of ``name``, ``type``, ``normal_balance``; None values are ignored

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the resulting account is invalid
        """
        chart = self.list_accounts()
        existing = find_account(chart, str(code).strip())
        if existing is None:
            raise errors.NotFoundError(errors.account_not_found(code))

        merged = {
            "code": existing.code,
            "name": existing.name,
            "type": existing.type.value,
            "normal_balance": existing.normal_balance.value,
        }
        merged.update({key: value for key, value in changes.items() if value is not None})
        updated = find_account(upsert_account(chart, merged), existing.code)
        self.db.save_ledger_account(updated)
        return updated

    def delete_account(self, code: str) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If the account does not exist
            DependencyError: If journal lines still post to the account
        """
        code = str(code).strip()
        remove_from_chart(self.list_accounts(), code)

        line_count = self.db.count_account_lines(code)
        if line_count > 0:
            raise errors.DependencyError(errors.account_delete_blocked(code, line_count))

        self.db.delete_ledger_account(code)

    def initialize_defaults(self, force: bool = False) -> int:
        """Load the default chart of accounts.

        Existing accounts are left alone unless ``force`` is set, in which
        case default rows overwrite same-coded accounts.

        Returns:
            Number of accounts written
        """
        existing = {account.code for account in self.list_accounts()}
        written = 0
        for account in DEFAULT_CHART_OF_ACCOUNTS:
            if account.code in existing and not force:
                continue
            self.db.save_ledger_account(account)
            written += 1
        logger.info("Initialized %d default accounts", written)
        return written
