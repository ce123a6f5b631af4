"""Shared pytest fixtures for fintrack tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal
import pytest

from fintrack.database.factories import create_sqlite_database
from fintrack.domain.account import AccountService
from fintrack.domain.reconciliation import BalanceReconciler
from fintrack.domain.transaction import TransactionService


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

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def reconciler(temp_db):
    """Create a BalanceReconciler with a temporary database."""
    return BalanceReconciler(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account with an opening balance of 100."""
    account_id = account_service.create_account(
        name="Test Account", account_type="CHECKING", currency_code="USD", balance="100"
    )
    return account_service.get_account(account_id)


@pytest.fixture
def make_legacy_account(temp_db):
    """Return a helper that stores an account the way old versions did.

    The account gets an initial balance of zero, the given running balance,
    and transactions written straight to the database without touching it.
    """

    def _make(name, balance, transactions=(), owner=None):
        account_id = temp_db.create_account(
            name=name,
            account_type="CHECKING",
            currency_code="USD",
            initial_balance=Decimal("0"),
            balance=Decimal(balance),
            owner=owner,
        )
        for day, (txn_type, amount) in enumerate(transactions, start=1):
            temp_db.create_transaction(
                account_id=account_id,
                date=date(2024, 1, day),
                amount=Decimal(amount),
                transaction_type=txn_type,
            )
        return account_id

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
