#!/usr/bin/env python3
"""Migration script to add initial_balance to accounts and fill it in.

Databases created before accounts tracked their opening balance only have
the running ``balance`` column. This migration:

1. adds ``initial_balance`` (NUMERIC, default 0) to the accounts table if it
   is missing, and
2. derives the initial balance of every account whose initial balance is 0
   but whose balance is not, as ``balance - sum(signed transaction amounts)``.

Accounts that already have an initial balance are left unchanged, so the
script can be run again safely.

Usage:
    python migrations/migrate_add_initial_balance.py [--db-path PATH] [--owner NAME]
"""

import sys

from sqlalchemy import text, inspect
from fintrack.cli.commands.reconcile import print_report
from fintrack.database.factories import create_sqlite_database
from fintrack.domain.entities import ReconciliationEntry
from fintrack.domain.reconciliation import BalanceReconciler


def column_exists(engine, table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table.

    Args:
        engine: SQLAlchemy engine
        table_name: Name of the table
        column_name: Name of the column

    Returns:
        True if column exists, False otherwise
    """
    inspector = inspect(engine)
    columns = [col["name"] for col in inspector.get_columns(table_name)]
    return column_name in columns


def migrate_database(database_path: str | None = None, owner: str | None = None) -> list[ReconciliationEntry]:
    """Add the initial_balance column if needed and reconcile all accounts.

    Args:
        database_path: Path to database file. If None, uses default location.
        owner: Only reconcile this owner's accounts when given

    Returns:
        The reconciliation report, one entry per account

    Raises:
        Exception: If migration fails
    """
    db = create_sqlite_database(database_path=database_path)
    db.connect()

    try:
        session = db.session_factory()
        try:
            engine = session.bind
            if engine is None:
                raise Exception("Could not get database engine from session")
        finally:
            session.close()

        if column_exists(engine, "accounts", "initial_balance"):
            print("Column initial_balance already exists in accounts table")
        else:
            print("Starting migration: adding initial_balance column...")
            with engine.begin() as conn:
                conn.execute(
                    text("ALTER TABLE accounts ADD COLUMN initial_balance NUMERIC(12, 2) NOT NULL DEFAULT 0")
                )
            print("  Added column: initial_balance")

        print("Checking accounts...")
        report = BalanceReconciler(db).reconcile_all_accounts(owner=owner)
        print_report(report, echo=print)
        return report
    finally:
        db.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Add initial_balance to accounts and derive it for existing accounts"
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides FINTRACK_DB_PATH environment variable)",
    )
    parser.add_argument("--owner", type=str, help="Only reconcile this owner's accounts")
    args = parser.parse_args()

    try:
        migrate_database(database_path=args.db_path, owner=args.owner)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
