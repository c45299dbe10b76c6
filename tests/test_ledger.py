"""Tests for account balances and running ledgers."""

from datetime import date, datetime, timedelta, UTC
from decimal import Decimal

from ledgerly.domain.entities import JournalEntry, JournalLine, NormalBalance
from ledgerly.domain.ledger import (
    build_account_balance_index,
    calculate_ledger_account,
    snap_to_zero,
)

_BASE = datetime(2024, 1, 1, tzinfo=UTC)


def _entry(entry_id, entry_date, *lines, offset=0):
    return JournalEntry(
        id=entry_id,
        date=entry_date,
        description=f"Entry {entry_id}",
        lines=tuple(JournalLine(code, debit=Decimal(dr), credit=Decimal(cr)) for code, dr, cr in lines),
        created_at=_BASE + timedelta(seconds=offset),
        reference=f"ref:{entry_id}",
    )


def test_snap_to_zero():
    assert snap_to_zero(Decimal("0.004")) == 0
    assert snap_to_zero(Decimal("-0.009")) == 0
    assert snap_to_zero(Decimal("0.01")) == Decimal("0.01")


def test_balance_index_uses_normal_side(chart):
    journal = [
        _entry("1", date(2024, 3, 1), ("1110", 500, 0), ("3110", 0, 500)),
        _entry("2", date(2024, 3, 2), ("6110", 120, 0), ("1110", 0, 120)),
    ]

    index = build_account_balance_index(journal, chart)

    assert list(index) == [account.code for account in chart]
    assert index["1110"].debit == Decimal("500")
    assert index["1110"].credit == Decimal("120")
    assert index["1110"].balance == Decimal("380")
    assert index["3110"].balance == Decimal("500")
    assert index["6110"].balance == Decimal("120")
    assert index["2110"].balance == 0


def test_balance_index_ignores_unknown_codes(chart):
    journal = [_entry("1", date(2024, 3, 1), ("9999", 10, 0), ("1110", 0, 10))]

    index = build_account_balance_index(journal, chart)

    assert "9999" not in index
    assert index["1110"].balance == Decimal("-10")


def test_balance_index_snaps_drift(chart):
    journal = [
        _entry("1", date(2024, 3, 1), ("1110", "100.004", 0), ("4110", 0, "100.004")),
        _entry("2", date(2024, 3, 2), ("4110", "100", 0), ("1110", 0, "100")),
    ]
    index = build_account_balance_index(journal, chart)
    assert index["1110"].balance == 0
    assert index["4110"].balance == 0


class TestLedgerAccount:
    """Tests for calculate_ledger_account."""

    def test_empty_journal(self, chart):
        ledger = calculate_ledger_account([], chart, "1110")

        assert ledger.transactions == ()
        assert ledger.total_debit == 0
        assert ledger.total_credit == 0
        assert ledger.ending_balance == 0
        assert ledger.balance_type is NormalBalance.DEBIT

    def test_unknown_or_missing_code(self, chart):
        assert calculate_ledger_account([], chart, "9999") is None
        assert calculate_ledger_account([], chart, None) is None
        assert calculate_ledger_account([], chart, "") is None

    def test_running_balance_in_chronological_order(self, chart):
        journal = [
            _entry("late", date(2024, 3, 3), ("1110", 0, 30), ("6110", 30, 0)),
            _entry("early", date(2024, 3, 1), ("1110", 100, 0), ("3110", 0, 100)),
            _entry("mid", date(2024, 3, 2), ("1110", 0, 20), ("6200", 20, 0)),
        ]

        ledger = calculate_ledger_account(journal, chart, "1110")

        assert [txn.entry_id for txn in ledger.transactions] == ["early", "mid", "late"]
        assert [txn.balance for txn in ledger.transactions] == [
            Decimal("100"),
            Decimal("80"),
            Decimal("50"),
        ]
        assert ledger.transactions[0].reference == "ref:early"
        assert ledger.total_debit == Decimal("100")
        assert ledger.total_credit == Decimal("50")
        assert ledger.ending_balance == Decimal("50")
        assert ledger.balance_type is NormalBalance.DEBIT

    def test_overdrawn_account_flips_balance_type(self, chart):
        journal = [_entry("1", date(2024, 3, 1), ("6110", 75, 0), ("1110", 0, 75))]

        ledger = calculate_ledger_account(journal, chart, "1110")

        assert ledger.ending_balance == Decimal("-75")
        assert ledger.balance_type is NormalBalance.CREDIT

    def test_credit_normal_account(self, chart):
        journal = [_entry("1", date(2024, 3, 1), ("1110", 40, 0), ("4110", 0, 40))]

        ledger = calculate_ledger_account(journal, chart, "4110")

        assert ledger.ending_balance == Decimal("40")
        assert ledger.balance_type is NormalBalance.CREDIT
