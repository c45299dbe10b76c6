"""Tests for the posting adapters that turn business events into entries."""

import logging
from datetime import date
from decimal import Decimal

import pytest

from ledgerly.domain.chart_of_accounts import PostingAccounts
from ledgerly.domain.events import Expense, Sale, SaleItem
from ledgerly.domain.posting import (
    PostingResult,
    build_expense_journal_entry,
    build_initial_journal,
    build_purchase_order_journal_entry,
    build_purchase_order_payment_journal_entry,
    build_sale_journal_entries,
    post_expense,
    post_purchase_order,
    post_purchase_order_payment,
    post_sale,
    seed_journal,
)


def _lines(entry):
    return [(line.account_code, line.debit, line.credit) for line in entry.lines]


class TestExpensePosting:
    """Tests for expense postings."""

    def test_expense_debits_category_and_credits_cash(self, office_expense):
        entry = build_expense_journal_entry(office_expense)

        assert entry.reference == "expense:9"
        assert entry.date == date(2024, 3, 1)
        assert entry.description == "Expense: Office supplies"
        assert _lines(entry) == [
            ("6200", Decimal("150"), Decimal("0")),
            ("1110", Decimal("0"), Decimal("150")),
        ]
        assert entry.metadata["source"] == "expense"
        assert entry.metadata["expenseId"] == 9
        assert entry.metadata["category"] == "6200"

    def test_missing_category_uses_default_expense_account(self):
        entry = build_expense_journal_entry({"id": 2, "amount": "20.5", "date": "2024-03-02"})
        assert entry.lines[0].account_code == "6200"
        assert entry.description == "Expense recorded"

    def test_accepts_expense_record(self):
        expense = Expense(id=3, date=date(2024, 3, 3), amount=Decimal("12"), category="6110")
        entry = build_expense_journal_entry(expense)
        assert entry.lines[0].account_code == "6110"

    @pytest.mark.parametrize("amount", [0, -5, None, "abc"])
    def test_non_positive_amount_posts_nothing(self, amount):
        result = post_expense({"id": 4, "amount": amount})
        assert result.entries == ()
        assert result.ok
        assert build_expense_journal_entry({"id": 4, "amount": amount}) is None

    def test_none_posts_nothing(self):
        assert post_expense(None) == PostingResult()

    def test_bad_date_is_reported(self, caplog):
        result = post_expense({"id": 5, "amount": 10, "date": "not a date"})

        assert result.entries == ()
        assert len(result.errors) == 1
        assert result.errors[0].reference == "expense:5"

        with caplog.at_level(logging.ERROR):
            assert build_expense_journal_entry({"id": 5, "amount": 10, "date": "not a date"}) is None
        assert "expense:5" in caplog.text

    def test_custom_posting_accounts(self):
        accounts = PostingAccounts(cash="1000", default_expense="6999")
        entry = post_expense({"id": 1, "amount": 5}, accounts).entry
        assert [line.account_code for line in entry.lines] == ["6999", "1000"]


class TestSalePosting:
    """Tests for sale postings."""

    def test_cash_sale_posts_revenue_and_cogs(self, cash_sale, products):
        entries = build_sale_journal_entries(cash_sale, products)

        assert len(entries) == 2
        revenue, cogs = entries
        assert revenue.reference == "sale:1:revenue"
        assert _lines(revenue) == [
            ("1110", Decimal("105"), Decimal("0")),
            ("4110", Decimal("0"), Decimal("100")),
            ("2210", Decimal("0"), Decimal("5")),
        ]
        assert revenue.metadata["subtype"] == "revenue"
        assert cogs.reference == "sale:1:cogs"
        assert _lines(cogs) == [
            ("5110", Decimal("80"), Decimal("0")),
            ("1210", Decimal("0"), Decimal("80")),
        ]
        assert cogs.metadata["saleId"] == 1
        assert cogs.description == "COGS for sale #1"

    def test_credit_sale_with_discount(self, products, customers):
        sale = {
            "id": 2,
            "date": "2024-03-06",
            "saleType": "CREDIT",
            "customerId": 3,
            "subtotal": 200,
            "discount": 20,
            "taxAmount": 9,
            "items": [{"productId": 8, "quantity": 4, "conversion": 12}],
        }

        revenue, cogs = build_sale_journal_entries(sale, products, customers)

        assert revenue.description == "Sale to Acme Trading (Invoice #2)"
        assert _lines(revenue) == [
            ("1120", Decimal("189"), Decimal("0")),
            ("4120", Decimal("20"), Decimal("0")),
            ("4110", Decimal("0"), Decimal("200")),
            ("2210", Decimal("0"), Decimal("9")),
        ]
        # 4 packs of 12 at 2.50 each
        assert cogs.total_debit == Decimal("120.00")

    def test_unknown_customer_and_products_without_cost(self):
        sale = {"id": 5, "date": "2024-03-07", "subtotal": 50, "items": [{"productId": 99, "quantity": 1}]}

        result = post_sale(sale, products=[], customers=[])

        assert result.ok
        assert len(result.entries) == 1
        assert result.entry.description == "Sale to customer (Invoice #5)"

    def test_cogs_only_sale(self, products):
        sale = {"id": 6, "date": "2024-03-07", "subtotal": 0, "items": [{"productId": 7, "quantity": 1}]}

        result = post_sale(sale, products)

        assert [entry.reference for entry in result.entries] == ["sale:6:cogs"]
        assert len(result.errors) == 1
        assert result.errors[0].reference == "sale:6:revenue"

    def test_accepts_sale_record(self, products):
        sale = Sale(
            id=7,
            date=date(2024, 3, 8),
            items=(SaleItem(product_id=7, quantity=Decimal("3")),),
            subtotal=Decimal("150"),
        )
        revenue, cogs = build_sale_journal_entries(sale, products)
        assert revenue.total_debit == Decimal("150")
        assert cogs.total_debit == Decimal("120")

    def test_malformed_sale_reports_both_halves(self, products):
        result = post_sale({"id": 8, "date": "garbage", "subtotal": 10}, products)

        assert result.entries == ()
        assert [error.reference for error in result.errors] == ["sale:8:revenue", "sale:8:cogs"]

    def test_none_posts_nothing(self):
        assert build_sale_journal_entries(None) == []


class TestPurchaseOrderPosting:
    """Tests for purchase order receipt and payment postings."""

    def test_receipt_debits_inventory_and_credits_payable(self, purchase_order):
        entry = build_purchase_order_journal_entry(purchase_order)

        assert entry.reference == "po:12"
        assert entry.date == date(2024, 2, 25)
        assert entry.description == "Receipt of goods from Northwind (PO #12)"
        assert _lines(entry) == [
            ("1210", Decimal("450.00"), Decimal("0")),
            ("2110", Decimal("0"), Decimal("450.00")),
        ]
        assert entry.metadata["supplierName"] == "Northwind"

    @pytest.mark.parametrize(
        "dates, expected",
        [
            ({"expectedDate": "2024-02-22", "orderDate": "2024-02-20"}, date(2024, 2, 22)),
            ({"orderDate": "2024-02-20"}, date(2024, 2, 20)),
        ],
    )
    def test_posting_date_fallback(self, dates, expected):
        order = {"id": 1, "items": [{"quantity": 1, "cost": 10}], **dates}
        assert build_purchase_order_journal_entry(order).date == expected

    def test_date_defaults_to_today(self):
        entry = build_purchase_order_journal_entry({"id": 1, "items": [{"quantity": 1, "cost": 10}]})
        assert entry.date == date.today()

    def test_unsaved_order_gets_pending_reference(self):
        entry = build_purchase_order_journal_entry({"items": [{"quantity": 2, "cost": 5}]})
        assert entry.reference.startswith("po:pending-")
        assert entry.description == "Receipt of goods from supplier"

    def test_empty_order_posts_nothing(self):
        assert build_purchase_order_journal_entry({"id": 3, "items": []}) is None
        assert post_purchase_order(None) == PostingResult()

    def test_payment_credits_cash_by_default(self, purchase_order):
        entry = build_purchase_order_payment_journal_entry(purchase_order, date(2024, 3, 10))

        assert entry.reference == "po-payment:12"
        assert entry.date == date(2024, 3, 10)
        assert entry.description == "Payment for PO #12 to Northwind"
        assert _lines(entry) == [
            ("2110", Decimal("450.00"), Decimal("0")),
            ("1110", Decimal("0"), Decimal("450.00")),
        ]

    def test_payment_from_other_account(self, purchase_order):
        result = post_purchase_order_payment(purchase_order, payment_account_code=" 1120 ")
        assert result.entry.lines[1].account_code == "1120"
        assert result.entry.date == date.today()


class TestSeeding:
    """Tests for bulk seeding of historical records."""

    def test_seed_folds_sales_and_expenses_in_order(self, cash_sale, office_expense, products):
        journal = build_initial_journal(
            sales=[cash_sale], expenses=[office_expense], products=products
        )

        assert [entry.reference for entry in journal] == [
            "expense:9",
            "sale:1:revenue",
            "sale:1:cogs",
        ]

    def test_seed_skips_failures(self, cash_sale, products):
        bad_expense = {"id": 10, "amount": 10, "date": "bogus"}

        result = seed_journal(sales=[cash_sale], expenses=[bad_expense], products=products)

        assert len(result.entries) == 2
        assert [error.reference for error in result.errors] == ["expense:10"]

    def test_seed_with_nothing(self):
        assert build_initial_journal() == []
