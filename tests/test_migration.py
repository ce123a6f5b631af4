"""Tests for the initial balance migration script."""

import importlib.util
from decimal import Decimal
from pathlib import Path

import pytest
from sqlalchemy import create_engine, inspect, text

from fintrack.database.factories import create_sqlite_database
from fintrack.domain.errors import PersistenceError

MIGRATION_PATH = Path(__file__).parent.parent / "migrations" / "migrate_add_initial_balance.py"


@pytest.fixture
def migration():
    """Load the migration script as a module."""
    spec = importlib.util.spec_from_file_location("migrate_add_initial_balance", MIGRATION_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def legacy_db_path(tmp_path):
    """Create a database whose accounts table predates initial_balance."""
    db_path = str(tmp_path / "legacy.db")
    engine = create_engine(f"sqlite:///{db_path}")
    with engine.begin() as conn:
        conn.execute(
            text(
                "CREATE TABLE accounts ("
                "id INTEGER PRIMARY KEY, "
                "name VARCHAR NOT NULL UNIQUE, "
                "account_type VARCHAR NOT NULL, "
                "currency_code VARCHAR(3) NOT NULL, "
                "balance NUMERIC(12, 2) NOT NULL, "
                "owner VARCHAR, "
                "is_active BOOLEAN NOT NULL DEFAULT 1, "
                "created_at DATETIME NOT NULL)"
            )
        )
        conn.execute(
            text(
                "INSERT INTO accounts (id, name, account_type, currency_code, balance, created_at) VALUES "
                "(1, 'Checking', 'CHECKING', 'USD', 1200, '2024-01-01 00:00:00'), "
                "(2, 'Empty', 'CASH', 'USD', 0, '2024-01-02 00:00:00')"
            )
        )
    engine.dispose()

    # Creates the remaining tables and the transaction types
    db = create_sqlite_database(database_path=db_path)
    db.initialize_schema()
    db.disconnect()

    engine = create_engine(f"sqlite:///{db_path}")
    with engine.begin() as conn:
        for name, amount, day in [("INCOME", 1500, 5), ("EXPENSE", 500, 6)]:
            conn.execute(
                text(
                    "INSERT INTO transactions (account_id, transaction_type_id, date, amount, created_at) "
                    "SELECT 1, id, :day, :amount, '2024-01-10 00:00:00' "
                    "FROM transaction_types WHERE name = :name"
                ),
                {"day": f"2024-01-0{day}", "amount": amount, "name": name},
            )
    engine.dispose()
    return db_path


def test_migration_adds_column_and_derives(migration, legacy_db_path, capsys):
    """Test that the column is added and the legacy balance is derived."""
    report = migration.migrate_database(database_path=legacy_db_path)

    engine = create_engine(f"sqlite:///{legacy_db_path}")
    columns = [col["name"] for col in inspect(engine).get_columns("accounts")]
    engine.dispose()
    assert "initial_balance" in columns

    by_name = {entry.account_name: entry for entry in report}
    assert by_name["Checking"].updated is True
    assert by_name["Checking"].after == Decimal("200")
    assert by_name["Empty"].updated is False

    db = create_sqlite_database(database_path=legacy_db_path)
    try:
        assert db.get_account(1).initial_balance == Decimal("200")
        assert db.get_account(1).balance == Decimal("1200")
    finally:
        db.disconnect()

    output = capsys.readouterr().out
    assert "Added column: initial_balance" in output
    assert "Account: Checking" in output


def test_migration_is_rerunnable(migration, legacy_db_path, capsys):
    """Test that a second run finds the column and changes nothing."""
    migration.migrate_database(database_path=legacy_db_path)
    report = migration.migrate_database(database_path=legacy_db_path)

    assert all(not entry.updated for entry in report)
    assert "already exists" in capsys.readouterr().out


def test_migration_main(migration, legacy_db_path, monkeypatch):
    """Test the command line entry point."""
    monkeypatch.setattr("sys.argv", ["migrate_add_initial_balance.py", "--db-path", legacy_db_path])
    assert migration.main() == 0


def test_migration_main_reports_failure_once(migration, legacy_db_path, monkeypatch, capsys):
    """Test that a failed run is reported a single time and returns 1."""

    class FailingReconciler:
        def __init__(self, db):
            pass

        def reconcile_all_accounts(self, owner=None):
            raise PersistenceError("Database write failed: disk I/O error")

    monkeypatch.setattr(migration, "BalanceReconciler", FailingReconciler)
    monkeypatch.setattr("sys.argv", ["migrate_add_initial_balance.py", "--db-path", legacy_db_path])

    assert migration.main() == 1
    captured = capsys.readouterr()
    assert (captured.out + captured.err).count("Migration failed") == 1
