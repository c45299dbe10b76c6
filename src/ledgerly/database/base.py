"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerly.domain.entities import Account, JournalEntry


class Database(ABC):
    """Abstract store for the chart of accounts and the journal.

    The store owns the authoritative journal. The ledger engine never writes
    to it; services compute the next journal with the pure reducers and hand
    the difference to ``apply_journal_changes``.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Chart of accounts operations
    @abstractmethod
    def list_ledger_accounts(self) -> list[Account]:
        """List chart-of-accounts rows ordered by code."""
        pass

    @abstractmethod
    def get_ledger_account(self, code: str) -> Optional[Account]:
        """Get chart-of-accounts row by code."""
        pass

    @abstractmethod
    def save_ledger_account(self, account: Account) -> None:
        """Insert or update a chart-of-accounts row."""
        pass

    @abstractmethod
    def delete_ledger_account(self, code: str) -> None:
        """Delete a chart-of-accounts row."""
        pass

    @abstractmethod
    def count_account_lines(self, code: str) -> int:
        """Count journal lines posted to an account code."""
        pass

    # Journal operations
    @abstractmethod
    def list_journal_entries(self) -> list[JournalEntry]:
        """List all journal entries."""
        pass

    @abstractmethod
    def get_journal_entry(self, entry_id: str) -> Optional[JournalEntry]:
        """Get journal entry by id."""
        pass

    @abstractmethod
    def apply_journal_changes(
        self, removed_ids: Iterable[str], added_entries: Iterable[JournalEntry]
    ) -> None:
        """Delete and insert journal entries in a single commit."""
        pass
