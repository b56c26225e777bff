"""Shared pytest fixtures for ledgerbook tests."""

import tempfile
import os
from datetime import date, datetime, UTC
import pytest

from ledgerbook.database.factories import create_sqlite_database
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.entry import EntryService
from ledgerbook.domain.ledger_view import LedgerViewService
from ledgerbook.domain.transfer import TransferService
from ledgerbook.domain.transfer_history import TransferHistoryService

USER_ID = 1
OTHER_USER_ID = 2

# Transfers in tests happen at a fixed moment so opening balances are stable
TRANSFER_TIME = datetime(2024, 4, 2, 9, 30, tzinfo=UTC)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def entry_service(temp_db):
    """Create an EntryService with a temporary database."""
    return EntryService(temp_db)


@pytest.fixture
def transfer_service(temp_db):
    """Create a TransferService whose clock is pinned to TRANSFER_TIME."""
    return TransferService(temp_db, clock=lambda: TRANSFER_TIME)


@pytest.fixture
def ledger_view_service(temp_db):
    return LedgerViewService(temp_db)


@pytest.fixture
def history_service(temp_db):
    return TransferHistoryService(temp_db)


@pytest.fixture
def accounts(account_service):
    """Create a small chart of accounts, keyed by code."""
    chart = [
        ("1101", "Cash on Hand", "asset"),
        ("1102", "Cash in Bank", "asset"),
        ("4101", "Sales Revenue", "revenue"),
        ("5301", "Office Rent", "expense"),
    ]
    result = {}
    for code, name, account_type in chart:
        account_id = account_service.create_account(code=code, name=name, account_type=account_type)
        result[code] = account_service.get_account(account_id)
    return result


@pytest.fixture
def categories(category_service, accounts):
    """Create one category per subsidiary book, keyed by a short name."""
    return {
        "sales": category_service.create_category(
            name="Sales Income - Cash",
            book_type="cash_receipt_journal",
            default_debit_account_id=accounts["1101"].id,
            default_credit_account_id=accounts["4101"].id,
        ),
        "service": category_service.create_category(
            name="Service Income - Cash",
            book_type="cash_receipt_journal",
            default_debit_account_id=accounts["1101"].id,
            default_credit_account_id=accounts["4101"].id,
        ),
        "rent": category_service.create_category(
            name="Office Rent Payment",
            book_type="cash_disbursement_journal",
            default_debit_account_id=accounts["5301"].id,
            default_credit_account_id=accounts["1101"].id,
        ),
        "deposit": category_service.create_category(
            name="Bank Deposits",
            book_type="general_journal",
            default_debit_account_id=accounts["1102"].id,
            default_credit_account_id=accounts["1101"].id,
        ),
    }


@pytest.fixture
def make_entry(entry_service, accounts, categories):
    """Factory creating an entry, recorded unless ``record=False``.

    Debit and credit are account codes; they default to Cash on Hand and
    Sales Revenue.
    """

    def _make_entry(
        amount: int,
        debit: str = "1101",
        credit: str = "4101",
        category: str = "sales",
        transaction_date: date = date(2024, 3, 5),
        record: bool = True,
        user_id: int = USER_ID,
        description: str = "Cash sale",
        **kwargs,
    ) -> int:
        entry_id = entry_service.create_entry(
            user_id=user_id,
            category_id=categories[category],
            amount=amount,
            description=description,
            transaction_date=transaction_date,
            debit_account_id=accounts[debit].id,
            credit_account_id=accounts[credit].id,
            **kwargs,
        )
        if record:
            entry_service.record_entry(entry_id, user_id)
        return entry_id

    return _make_entry


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
