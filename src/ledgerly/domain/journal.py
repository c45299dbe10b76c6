"""Journal entry construction, ordering and reference reconciliation.

The journal is treated as an immutable ordered log: every function here
returns a new list and leaves its inputs untouched.
"""

import random
import string
import time
from datetime import date, datetime, UTC
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from ledgerly.domain import errors
from ledgerly.domain.entities import JournalEntry, JournalLine, ZERO
from ledgerly.utils.amount_parser import to_decimal
from ledgerly.utils.date_parser import DateLike, coerce_date

EPSILON = Decimal("0.01")

LineLike = Union[JournalLine, Mapping[str, Any]]

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_journal_id(prefix: str = "journal") -> str:
    """Return an id of the form ``<prefix>-<epoch millis>-<6 base36 chars>``."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=6))
    return f"{prefix}-{int(time.time() * 1000)}-{suffix}"


def normalize_line(line: Optional[LineLike]) -> JournalLine:
    """Normalize a line item into a JournalLine.

    The account code is stringified and trimmed. Debit and credit are coerced
    to Decimal with missing or non-numeric values treated as zero.
    """
    if line is None:
        return JournalLine(account_code="")
    if isinstance(line, JournalLine):
        return JournalLine(
            account_code=str(line.account_code or "").strip(),
            debit=to_decimal(line.debit),
            credit=to_decimal(line.credit),
        )
    account_code = line.get("accountCode", line.get("account_code"))
    return JournalLine(
        account_code=str(account_code if account_code is not None else "").strip(),
        debit=to_decimal(line.get("debit")),
        credit=to_decimal(line.get("credit")),
    )


def _totals(lines: Sequence[JournalLine]) -> tuple[Decimal, Decimal]:
    total_debit = sum((line.debit for line in lines), ZERO)
    total_credit = sum((line.credit for line in lines), ZERO)
    return total_debit, total_credit


def entries_are_balanced(lines: Iterable[Optional[LineLike]]) -> bool:
    """Return True if total debits equal total credits within EPSILON."""
    total_debit, total_credit = _totals([normalize_line(line) for line in lines])
    return abs(total_debit - total_credit) <= EPSILON


def create_journal_entry(
    date: Optional[DateLike] = None,
    description: Optional[str] = None,
    entries: Optional[Iterable[Optional[LineLike]]] = None,
    reference: Optional[str] = None,
    metadata: Optional[Mapping[str, Any]] = None,
    id: Optional[str] = None,
) -> JournalEntry:
    """Validate line items and build an immutable journal entry.

    Args:
        date: Accounting date (date, datetime or date string); defaults to today
        description: Free text description
        entries: Line items as JournalLine objects or mappings with
            ``accountCode``/``account_code``, ``debit`` and ``credit``
        reference: Optional key correlating the entry to a source event
        metadata: Optional free-form tags
        id: Entry id; generated when absent

    Returns:
        JournalEntry

    Raises:
        ValidationError: If there are no amounts, a line is negative or carries
            both a debit and a credit, or the entry does not balance
    """
    lines = tuple(normalize_line(line) for line in (entries or ()))
    if not any(line.debit or line.credit for line in lines):
        raise errors.ValidationError(errors.ENTRY_REQUIRES_LINES)
    for line in lines:
        if line.debit < 0 or line.credit < 0:
            raise errors.ValidationError(errors.LINE_NEGATIVE_AMOUNT)
        if line.debit and line.credit:
            raise errors.ValidationError(errors.LINE_DEBIT_AND_CREDIT)

    total_debit, total_credit = _totals(lines)
    if abs(total_debit - total_credit) > EPSILON:
        raise errors.ValidationError(errors.ENTRY_NOT_BALANCED)

    try:
        entry_date = coerce_date(date)
    except ValueError as e:
        raise errors.ValidationError(str(e)) from e

    created_at = datetime.now(UTC)
    return JournalEntry(
        id=id if id is not None else generate_journal_id(),
        date=entry_date or datetime.now().date(),
        description=description or "",
        lines=lines,
        created_at=created_at,
        reference=reference,
        metadata=MappingProxyType(dict(metadata or {})),
    )


def _sort_key(entry: JournalEntry) -> tuple[date, datetime, str]:
    return (entry.date, entry.created_at, str(entry.id))


def sort_journal_entries(journal: Iterable[JournalEntry]) -> list[JournalEntry]:
    """Return entries in canonical chronological order.

    Ordered by date, then creation time, then id.
    """
    return sorted(journal, key=_sort_key)


def replace_journal_entries(
    journal: Iterable[JournalEntry], new_entries: Iterable[JournalEntry]
) -> list[JournalEntry]:
    """Supersede existing entries that share a reference with ``new_entries``.

    Entries whose reference appears among the new entries are dropped, the new
    entries are appended and the result is re-sorted. An empty ``new_entries``
    returns the journal unchanged.
    """
    journal = list(journal)
    new_entries = list(new_entries)
    if not new_entries:
        return journal

    references = {entry.reference for entry in new_entries if entry.reference is not None}
    kept = [entry for entry in journal if entry.reference not in references]
    return sort_journal_entries(kept + new_entries)


def remove_journal_entries_by_reference(
    journal: Iterable[JournalEntry], references: Iterable[Optional[str]]
) -> list[JournalEntry]:
    """Remove every entry whose reference is in ``references``."""
    journal = list(journal)
    reference_set = {reference for reference in references or () if reference is not None}
    if not reference_set:
        return journal
    return [entry for entry in journal if entry.reference not in reference_set]


def remove_journal_entry(journal: Iterable[JournalEntry], target: str) -> list[JournalEntry]:
    """Remove entries whose id or reference equals ``target``."""
    return [
        entry for entry in journal if entry.id != target and entry.reference != target
    ]


def sale_references(sale_id: Any) -> tuple[str, str]:
    """References of the revenue and COGS postings of a sale."""
    identifier = "unsaved" if sale_id is None else sale_id
    return (f"sale:{identifier}:revenue", f"sale:{identifier}:cogs")


def expense_reference(expense_id: Any) -> str:
    return f"expense:{'unsaved' if expense_id is None else expense_id}"
