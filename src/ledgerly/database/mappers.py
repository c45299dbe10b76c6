"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic so the engine only ever sees frozen
domain entities.
"""

from datetime import UTC
from decimal import Decimal
from types import MappingProxyType

from ledgerly.domain import entities as domain
from ledgerly.database.models import (
    Account as ORMAccount,
    JournalEntry as ORMJournalEntry,
    JournalLine as ORMJournalLine,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        code=orm_account.code,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        normal_balance=domain.NormalBalance(orm_account.normal_balance),
    )


def account_to_orm(account: domain.Account) -> ORMAccount:
    """Convert domain Account entity to a new SQLAlchemy Account model."""
    return ORMAccount(
        code=account.code,
        name=account.name,
        type=account.type.value,
        normal_balance=account.normal_balance.value,
    )


def journal_line_to_domain(orm_line: ORMJournalLine) -> domain.JournalLine:
    """Convert SQLAlchemy JournalLine model to domain JournalLine entity."""
    return domain.JournalLine(
        account_code=orm_line.account_code,
        debit=Decimal(orm_line.debit or 0),
        credit=Decimal(orm_line.credit or 0),
    )


def journal_entry_to_domain(orm_entry: ORMJournalEntry) -> domain.JournalEntry:
    """Convert SQLAlchemy JournalEntry model to domain JournalEntry entity."""
    created_at = orm_entry.created_at
    # SQLite drops the offset on round trip
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=UTC)
    return domain.JournalEntry(
        id=orm_entry.id,
        date=orm_entry.date,
        description=orm_entry.description or "",
        lines=tuple(journal_line_to_domain(line) for line in orm_entry.lines),
        created_at=created_at,
        reference=orm_entry.reference,
        metadata=MappingProxyType(dict(orm_entry.entry_metadata or {})),
    )


def journal_entry_to_orm(entry: domain.JournalEntry) -> ORMJournalEntry:
    """Convert domain JournalEntry entity to a new SQLAlchemy JournalEntry model."""
    return ORMJournalEntry(
        id=entry.id,
        date=entry.date,
        description=entry.description,
        reference=entry.reference,
        entry_metadata=dict(entry.metadata) if entry.metadata else None,
        created_at=entry.created_at,
        lines=[
            ORMJournalLine(
                position=position,
                account_code=line.account_code,
                debit=line.debit,
                credit=line.credit,
            )
            for position, line in enumerate(entry.lines)
        ],
    )
