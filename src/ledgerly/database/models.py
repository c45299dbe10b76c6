"""SQLAlchemy models for the ledgerly database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

AMOUNT = Numeric(18, 4)


class Account(Base):
    """Chart-of-accounts row."""

    __tablename__ = "ledger_accounts"

    code = Column(String, primary_key=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    normal_balance = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class JournalEntry(Base):
    """Journal entry header."""

    __tablename__ = "journal_entries"

    id = Column(String, primary_key=True)
    date = Column(Date, nullable=False, index=True)
    description = Column(String, nullable=False, default="")
    reference = Column(String, nullable=True, index=True)
    # "metadata" is reserved on declarative classes
    entry_metadata = Column("metadata", JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    lines = relationship(
        "JournalLine",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="JournalLine.position",
    )


class JournalLine(Base):
    """Journal entry line.

    Account codes are not foreign keys: lines posted to codes outside the
    chart are kept and ignored by the reports.
    """

    __tablename__ = "journal_lines"

    id = Column(Integer, primary_key=True)
    entry_id = Column(String, ForeignKey("journal_entries.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    account_code = Column(String, nullable=False, index=True)
    debit = Column(AMOUNT, nullable=False, default=0)
    credit = Column(AMOUNT, nullable=False, default=0)

    # Relationships
    entry = relationship("JournalEntry", back_populates="lines")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
