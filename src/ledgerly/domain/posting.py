"""Translate business events into balanced journal entries.

Each ``post_*`` function is a pure, non-raising adapter returning a
PostingResult: the entries that validated plus an error per half that did
not. One malformed record therefore never aborts a batch. The ``build_*``
functions keep the entry-or-None shape for callers that only want the
entries; they log every failure instead of returning it.
"""

import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Iterable, Mapping, Optional, TypeVar, Union

from ledgerly.domain.chart_of_accounts import DEFAULT_POSTING_ACCOUNTS, PostingAccounts
from ledgerly.domain.entities import JournalEntry, ZERO
from ledgerly.domain.events import Customer, Expense, Product, PurchaseOrder, Sale
from ledgerly.domain.journal import (
    create_journal_entry,
    expense_reference,
    sale_references,
    sort_journal_entries,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class PostingError:
    """Why a posting for ``reference`` could not be built."""

    reference: Optional[str]
    message: str


@dataclass(frozen=True)
class PostingResult:
    """Outcome of an adapter call.

    No entries and no errors means there was nothing to post.
    """

    entries: tuple[JournalEntry, ...] = ()
    errors: tuple[PostingError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def entry(self) -> Optional[JournalEntry]:
        """First entry, for adapters that produce at most one."""
        return self.entries[0] if self.entries else None

    def merge(self, other: "PostingResult") -> "PostingResult":
        return PostingResult(
            entries=self.entries + other.entries,
            errors=self.errors + other.errors,
        )


def _coerce(event: Union[T, Mapping[str, Any]], cls: Callable[..., T]) -> T:
    if isinstance(event, Mapping):
        return cls.from_dict(event)
    return event


def _raw_id(event: Any) -> Any:
    if isinstance(event, Mapping):
        return event.get("id")
    return getattr(event, "id", None)


def _attempt(reference: Optional[str], build: Callable[[], Optional[JournalEntry]]) -> PostingResult:
    try:
        entry = build()
    except Exception as e:
        # Adapters never raise; the caller decides what to do with failures.
        return PostingResult(errors=(PostingError(reference, str(e) or type(e).__name__),))
    if entry is None:
        return PostingResult()
    return PostingResult(entries=(entry,))


def _pending_identifier() -> str:
    return f"pending-{int(time.time() * 1000)}"


def post_expense(
    expense: Union[Expense, Mapping[str, Any], None],
    accounts: PostingAccounts = DEFAULT_POSTING_ACCOUNTS,
) -> PostingResult:
    """Debit the expense category (or default expense) and credit cash.

    Expenses with a non-positive amount post nothing.
    """
    if expense is None:
        return PostingResult()
    reference = expense_reference(_raw_id(expense))

    def build() -> Optional[JournalEntry]:
        record = _coerce(expense, Expense)
        if record.amount <= 0:
            return None
        debit_account = (record.category or "").strip() or accounts.default_expense
        return create_journal_entry(
            date=record.date,
            description=(
                f"Expense: {record.description}" if record.description else "Expense recorded"
            ),
            entries=[
                {"account_code": debit_account, "debit": record.amount, "credit": ZERO},
                {"account_code": accounts.cash, "debit": ZERO, "credit": record.amount},
            ],
            reference=reference,
            metadata={
                "source": "expense",
                "expenseId": record.id,
                "category": debit_account,
            },
        )

    return _attempt(reference, build)


def post_purchase_order(
    purchase_order: Union[PurchaseOrder, Mapping[str, Any], None],
    accounts: PostingAccounts = DEFAULT_POSTING_ACCOUNTS,
) -> PostingResult:
    """Debit inventory and credit accounts payable for the received goods."""
    if purchase_order is None:
        return PostingResult()
    raw_id = _raw_id(purchase_order)
    reference = f"po:{raw_id if raw_id is not None else _pending_identifier()}"

    def build() -> Optional[JournalEntry]:
        order = _coerce(purchase_order, PurchaseOrder)
        total_cost = order.total_cost
        if total_cost <= 0:
            return None
        supplier_name = order.supplier_name or "supplier"
        suffix = f" (PO #{order.id})" if order.id is not None else ""
        return create_journal_entry(
            date=order.posting_date,
            description=f"Receipt of goods from {supplier_name}{suffix}",
            entries=[
                {"account_code": accounts.inventory, "debit": total_cost, "credit": ZERO},
                {"account_code": accounts.accounts_payable, "debit": ZERO, "credit": total_cost},
            ],
            reference=reference,
            metadata={
                "source": "purchase-order",
                "purchaseOrderId": order.id,
                "supplierName": supplier_name,
            },
        )

    return _attempt(reference, build)


def post_purchase_order_payment(
    purchase_order: Union[PurchaseOrder, Mapping[str, Any], None],
    payment_date: Optional[date] = None,
    payment_account_code: Optional[str] = None,
    accounts: PostingAccounts = DEFAULT_POSTING_ACCOUNTS,
) -> PostingResult:
    """Debit accounts payable and credit the account the supplier was paid from."""
    if purchase_order is None:
        return PostingResult()
    raw_id = _raw_id(purchase_order)
    reference = f"po-payment:{raw_id if raw_id is not None else _pending_identifier()}"
    credit_account = str(payment_account_code or "").strip() or accounts.cash

    def build() -> Optional[JournalEntry]:
        order = _coerce(purchase_order, PurchaseOrder)
        total_cost = order.total_cost
        if total_cost <= 0:
            return None
        supplier_name = order.supplier_name or "supplier"
        order_label = order.id if order.id is not None else "pending"
        return create_journal_entry(
            date=payment_date,
            description=f"Payment for PO #{order_label} to {supplier_name}",
            entries=[
                {"account_code": accounts.accounts_payable, "debit": total_cost, "credit": ZERO},
                {"account_code": credit_account, "debit": ZERO, "credit": total_cost},
            ],
            reference=reference,
            metadata={
                "source": "purchase-order-payment",
                "purchaseOrderId": order.id,
                "supplierName": supplier_name,
            },
        )

    return _attempt(reference, build)


def _cost_index(products: Iterable[Union[Product, Mapping[str, Any]]]) -> dict[Any, Any]:
    index = {}
    for product in products or ():
        record = _coerce(product, Product)
        index.setdefault(record.id, record.cost)
    return index


def _customer_name(customers: Iterable[Union[Customer, Mapping[str, Any]]], customer_id: Any) -> str:
    for customer in customers or ():
        record = _coerce(customer, Customer)
        if record.id == customer_id and customer_id is not None:
            return record.name or "customer"
    return "customer"


def post_sale(
    sale: Union[Sale, Mapping[str, Any], None],
    products: Iterable[Union[Product, Mapping[str, Any]]] = (),
    customers: Iterable[Union[Customer, Mapping[str, Any]]] = (),
    accounts: PostingAccounts = DEFAULT_POSTING_ACCOUNTS,
) -> PostingResult:
    """Post a sale as a revenue entry and a COGS entry.

    The two halves are built independently: a failure in one is reported in
    the result while the other is still attempted.
    """
    if sale is None:
        return PostingResult()
    revenue_reference, cogs_reference = sale_references(_raw_id(sale))

    try:
        record = _coerce(sale, Sale)
    except Exception as e:
        message = str(e) or type(e).__name__
        return PostingResult(
            errors=(
                PostingError(revenue_reference, message),
                PostingError(cogs_reference, message),
            )
        )

    def build_revenue() -> Optional[JournalEntry]:
        customer_name = _customer_name(customers, record.customer_id)
        suffix = f" (Invoice #{record.id})" if record.id is not None else ""
        debit_account = accounts.accounts_receivable if record.is_credit else accounts.cash
        lines = [{"account_code": debit_account, "debit": record.amount_due, "credit": ZERO}]
        if record.discount > 0:
            lines.append(
                {"account_code": accounts.sales_discount, "debit": record.discount, "credit": ZERO}
            )
        lines.append(
            {"account_code": accounts.sales_revenue, "debit": ZERO, "credit": record.subtotal}
        )
        if record.tax_amount > 0:
            lines.append(
                {"account_code": accounts.vat_payable, "debit": ZERO, "credit": record.tax_amount}
            )
        return create_journal_entry(
            date=record.date,
            description=f"Sale to {customer_name}{suffix}",
            entries=lines,
            reference=revenue_reference,
            metadata={"source": "sale", "saleId": record.id, "subtype": "revenue"},
        )

    def build_cogs() -> Optional[JournalEntry]:
        costs = _cost_index(products)
        cogs_amount = ZERO
        for item in record.items:
            base_units = item.base_units
            if base_units <= 0:
                continue
            cogs_amount += costs.get(item.product_id, ZERO) * base_units
        if cogs_amount <= 0:
            return None
        return create_journal_entry(
            date=record.date,
            description=(
                f"COGS for sale #{record.id}" if record.id is not None else "COGS for sale"
            ),
            entries=[
                {"account_code": accounts.cogs, "debit": cogs_amount, "credit": ZERO},
                {"account_code": accounts.inventory, "debit": ZERO, "credit": cogs_amount},
            ],
            reference=cogs_reference,
            metadata={"source": "sale", "saleId": record.id, "subtype": "cogs"},
        )

    return _attempt(revenue_reference, build_revenue).merge(
        _attempt(cogs_reference, build_cogs)
    )


def seed_journal(
    sales: Iterable[Union[Sale, Mapping[str, Any]]] = (),
    expenses: Iterable[Union[Expense, Mapping[str, Any]]] = (),
    products: Iterable[Union[Product, Mapping[str, Any]]] = (),
    customers: Iterable[Union[Customer, Mapping[str, Any]]] = (),
    accounts: PostingAccounts = DEFAULT_POSTING_ACCOUNTS,
) -> PostingResult:
    """Fold the sale and expense adapters over historical records."""
    products = list(products or ())
    customers = list(customers or ())
    result = PostingResult()
    for sale in sales or ():
        result = result.merge(post_sale(sale, products, customers, accounts))
    for expense in expenses or ():
        result = result.merge(post_expense(expense, accounts))
    return PostingResult(entries=tuple(sort_journal_entries(result.entries)), errors=result.errors)


def log_posting_errors(result: PostingResult) -> None:
    """Log each failure of an adapter call."""
    for error in result.errors:
        logger.error("Failed to build journal entry %s: %s", error.reference, error.message)


def build_expense_journal_entry(
    expense: Union[Expense, Mapping[str, Any], None],
    accounts: PostingAccounts = DEFAULT_POSTING_ACCOUNTS,
) -> Optional[JournalEntry]:
    result = post_expense(expense, accounts)
    log_posting_errors(result)
    return result.entry


def build_purchase_order_journal_entry(
    purchase_order: Union[PurchaseOrder, Mapping[str, Any], None],
    accounts: PostingAccounts = DEFAULT_POSTING_ACCOUNTS,
) -> Optional[JournalEntry]:
    result = post_purchase_order(purchase_order, accounts)
    log_posting_errors(result)
    return result.entry


def build_purchase_order_payment_journal_entry(
    purchase_order: Union[PurchaseOrder, Mapping[str, Any], None],
    payment_date: Optional[date] = None,
    payment_account_code: Optional[str] = None,
    accounts: PostingAccounts = DEFAULT_POSTING_ACCOUNTS,
) -> Optional[JournalEntry]:
    result = post_purchase_order_payment(
        purchase_order, payment_date, payment_account_code, accounts
    )
    log_posting_errors(result)
    return result.entry


def build_sale_journal_entries(
    sale: Union[Sale, Mapping[str, Any], None],
    products: Iterable[Union[Product, Mapping[str, Any]]] = (),
    customers: Iterable[Union[Customer, Mapping[str, Any]]] = (),
    accounts: PostingAccounts = DEFAULT_POSTING_ACCOUNTS,
) -> list[JournalEntry]:
    result = post_sale(sale, products, customers, accounts)
    log_posting_errors(result)
    return list(result.entries)


def build_initial_journal(
    sales: Iterable[Union[Sale, Mapping[str, Any]]] = (),
    expenses: Iterable[Union[Expense, Mapping[str, Any]]] = (),
    products: Iterable[Union[Product, Mapping[str, Any]]] = (),
    customers: Iterable[Union[Customer, Mapping[str, Any]]] = (),
    accounts: PostingAccounts = DEFAULT_POSTING_ACCOUNTS,
) -> list[JournalEntry]:
    """Seed a sorted journal from existing sales and expenses, skipping failures."""
    result = seed_journal(sales, expenses, products, customers, accounts)
    log_posting_errors(result)
    return list(result.entries)
