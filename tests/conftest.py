"""Shared pytest fixtures for ledgerly tests."""

import tempfile
import os
from datetime import date
import pytest

from ledgerly.database.factories import create_sqlite_database
from ledgerly.domain.account import ChartOfAccountsService
from ledgerly.domain.chart_of_accounts import DEFAULT_CHART_OF_ACCOUNTS
from ledgerly.domain.ledger_service import JournalService
from ledgerly.domain.reports import ReportService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def chart():
    """The default chart of accounts as a list."""
    return list(DEFAULT_CHART_OF_ACCOUNTS)


@pytest.fixture
def account_service(temp_db):
    """Create a ChartOfAccountsService with a temporary database."""
    return ChartOfAccountsService(temp_db)


@pytest.fixture
def seeded_accounts(account_service):
    """Load the default chart of accounts into the temporary database."""
    account_service.initialize_defaults()
    return account_service


@pytest.fixture
def journal_service(temp_db, seeded_accounts):
    """Create a JournalService over a database with the default chart."""
    return JournalService(temp_db)


@pytest.fixture
def report_service(temp_db, seeded_accounts):
    """Create a ReportService over a database with the default chart."""
    return ReportService(temp_db)


@pytest.fixture
def products():
    return [
        {"id": 7, "name": "Widget", "cost": 40},
        {"id": 8, "name": "Gadget", "cost": "2.50"},
    ]


@pytest.fixture
def customers():
    return [{"id": 3, "name": "Acme Trading"}]


@pytest.fixture
def cash_sale():
    """Cash sale of two widgets with tax."""
    return {
        "id": 1,
        "date": "2024-03-05",
        "saleType": "Cash",
        "subtotal": 100,
        "discount": 0,
        "taxAmount": 5,
        "total": 105,
        "items": [{"productId": 7, "quantity": 2, "baseQuantity": 2}],
    }


@pytest.fixture
def office_expense():
    return {
        "id": 9,
        "amount": 150,
        "category": "6200",
        "date": "2024-03-01",
        "description": "Office supplies",
    }


@pytest.fixture
def purchase_order():
    return {
        "id": 12,
        "supplierName": "Northwind",
        "orderDate": "2024-02-20",
        "receivedAt": "2024-02-25",
        "items": [
            {"productId": 7, "quantity": 10, "cost": 40},
            {"productId": 8, "quantity": 20, "cost": "2.50"},
        ],
    }


@pytest.fixture
def march_2024():
    return date(2024, 3, 1), date(2024, 3, 31)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
