"""Journal domain service.

Loads the journal from the store, runs the pure reconciler and adapters, and
commits the difference between the previous and next journal.
"""

import logging
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Union

from ledgerly.database.base import Database
from ledgerly.domain import errors
from ledgerly.domain.chart_of_accounts import DEFAULT_POSTING_ACCOUNTS, PostingAccounts
from ledgerly.domain.entities import JournalEntry
from ledgerly.domain.events import Customer, Expense, Product, PurchaseOrder, Sale
from ledgerly.domain.journal import (
    create_journal_entry,
    expense_reference,
    remove_journal_entries_by_reference,
    remove_journal_entry,
    replace_journal_entries,
    sale_references,
    sort_journal_entries,
)
from ledgerly.domain.posting import (
    PostingResult,
    log_posting_errors,
    post_expense,
    post_purchase_order,
    post_purchase_order_payment,
    post_sale,
    seed_journal,
)
from ledgerly.utils.date_parser import DateLike

logger = logging.getLogger(__name__)


class JournalService:
    """Service for posting to and editing the journal."""

    def __init__(self, db: Database, accounts: PostingAccounts = DEFAULT_POSTING_ACCOUNTS):
        """Initialize journal service.

        Args:
            db: Database instance
            accounts: Account codes used by the posting adapters
        """
        self.db = db
        self.accounts = accounts

    def get_journal(self) -> list[JournalEntry]:
        """Return the journal in canonical order."""
        return sort_journal_entries(self.db.list_journal_entries())

    def list_entries(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        reference: Optional[str] = None,
    ) -> list[JournalEntry]:
        """List journal entries with optional date and reference filters."""
        entries = self.get_journal()
        if start_date is not None:
            entries = [entry for entry in entries if entry.date >= start_date]
        if end_date is not None:
            entries = [entry for entry in entries if entry.date <= end_date]
        if reference is not None:
            entries = [entry for entry in entries if entry.reference == reference]
        return entries

    def _commit(self, previous: list[JournalEntry], following: list[JournalEntry]) -> None:
        previous_ids = {entry.id for entry in previous}
        following_ids = {entry.id for entry in following}
        removed = previous_ids - following_ids
        added = [entry for entry in following if entry.id not in previous_ids]
        if not removed and not added:
            return
        logger.debug("Committing journal: %d removed, %d added", len(removed), len(added))
        self.db.apply_journal_changes(removed, added)

    def post_entries(self, entries: Iterable[JournalEntry]) -> list[JournalEntry]:
        """Post entries, superseding any existing entries with the same references.

        Returns:
            The resulting journal
        """
        previous = self.get_journal()
        following = replace_journal_entries(previous, entries)
        self._commit(previous, following)
        return following

    def remove_references(self, references: Iterable[Optional[str]]) -> list[JournalEntry]:
        """Remove every entry carrying one of ``references``.

        Returns:
            The resulting journal
        """
        previous = self.get_journal()
        following = remove_journal_entries_by_reference(previous, references)
        self._commit(previous, following)
        return following

    def create_entry(
        self,
        date: Optional[DateLike],
        description: Optional[str],
        lines: Iterable[Any],
        reference: Optional[str] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> JournalEntry:
        """Create and post a manual journal entry.

        Raises:
            ValidationError: If the entry is empty or unbalanced
        """
        entry = create_journal_entry(
            date=date,
            description=description,
            entries=lines,
            reference=reference,
            metadata=metadata if metadata is not None else {"source": "manual"},
        )
        self.post_entries([entry])
        return entry

    def delete_entry(self, target: str) -> list[JournalEntry]:
        """Delete entries whose id or reference equals ``target``.

        Returns:
            The deleted entries

        Raises:
            NotFoundError: If nothing matches
        """
        previous = self.get_journal()
        following = remove_journal_entry(previous, target)
        if len(following) == len(previous):
            raise errors.NotFoundError(errors.journal_entry_not_found(target))
        self._commit(previous, following)
        remaining = {entry.id for entry in following}
        return [entry for entry in previous if entry.id not in remaining]

    def _post_result(self, result: PostingResult) -> PostingResult:
        log_posting_errors(result)
        if result.entries:
            self.post_entries(result.entries)
        return result

    def post_sale(
        self,
        sale: Union[Sale, Mapping[str, Any]],
        products: Iterable[Union[Product, Mapping[str, Any]]] = (),
        customers: Iterable[Union[Customer, Mapping[str, Any]]] = (),
    ) -> PostingResult:
        """Post a new or edited sale.

        A half that produced no entry without error (no COGS any more) has its
        prior posting removed. A half that failed keeps its prior posting.
        """
        result = post_sale(sale, products, customers, self.accounts)
        log_posting_errors(result)
        sale_id = sale.get("id") if isinstance(sale, Mapping) else sale.id
        failed = {error.reference for error in result.errors}
        stale = [ref for ref in sale_references(sale_id) if ref not in failed]
        previous = self.get_journal()
        following = remove_journal_entries_by_reference(previous, stale)
        following = replace_journal_entries(following, result.entries)
        self._commit(previous, following)
        return result

    def remove_sale(self, sale_id: Any) -> list[JournalEntry]:
        """Remove the postings of a deleted sale."""
        return self.remove_references(sale_references(sale_id))

    def post_expense(self, expense: Union[Expense, Mapping[str, Any]]) -> PostingResult:
        """Post a new or edited expense.

        An edit that produces no entry (amount now zero) removes the prior posting.
        """
        result = post_expense(expense, self.accounts)
        log_posting_errors(result)
        if result.entries:
            self.post_entries(result.entries)
        elif result.ok:
            expense_id = expense.get("id") if isinstance(expense, Mapping) else expense.id
            self.remove_references([expense_reference(expense_id)])
        return result

    def remove_expense(self, expense_id: Any) -> list[JournalEntry]:
        """Remove the posting of a deleted expense."""
        return self.remove_references([expense_reference(expense_id)])

    def post_purchase_order(
        self, purchase_order: Union[PurchaseOrder, Mapping[str, Any]]
    ) -> PostingResult:
        """Post receipt of a purchase order."""
        return self._post_result(post_purchase_order(purchase_order, self.accounts))

    def post_purchase_order_payment(
        self,
        purchase_order: Union[PurchaseOrder, Mapping[str, Any]],
        payment_date: Optional[date] = None,
        payment_account_code: Optional[str] = None,
    ) -> PostingResult:
        """Post payment of a received purchase order."""
        return self._post_result(
            post_purchase_order_payment(
                purchase_order, payment_date, payment_account_code, self.accounts
            )
        )

    def seed(
        self,
        sales: Iterable[Union[Sale, Mapping[str, Any]]] = (),
        expenses: Iterable[Union[Expense, Mapping[str, Any]]] = (),
        products: Iterable[Union[Product, Mapping[str, Any]]] = (),
        customers: Iterable[Union[Customer, Mapping[str, Any]]] = (),
    ) -> PostingResult:
        """Post historical sales and expenses, skipping records that fail."""
        return self._post_result(
            seed_journal(sales, expenses, products, customers, self.accounts)
        )
