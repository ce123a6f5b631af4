"""Transaction domain service."""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from fintrack.domain.entities import Transaction as TransactionEntity
from fintrack.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    transaction_not_found,
    transaction_type_not_found,
)
from fintrack.domain.reconciliation import (
    CREDIT_TYPES,
    DEBIT_TYPES,
    BalanceReconciler,
    compute_transaction_sum,
    needs_initial_balance,
)
from fintrack.utils.amount_parser import parse_amount, require_cents

if TYPE_CHECKING:
    from fintrack.database.base import Database

logger = logging.getLogger(__name__)

BALANCE_TYPES = CREDIT_TYPES | DEBIT_TYPES


class TransactionService:
    """Service for managing transactions.

    Every write refreshes the owning account's cached balance from its
    initial balance and full transaction history.
    """

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        account_id: int,
        date: date,
        amount: str | int | Decimal,
        transaction_type: str,
        description: Optional[str] = None,
    ) -> int:
        """Create a transaction.

        Args:
            account_id: Account ID
            date: Transaction date
            amount: Non-negative amount; the type decides the direction
            transaction_type: Transaction type name, e.g. "EXPENSE"
            description: Optional description

        Returns:
            Transaction ID

        Raises:
            ValidationError: If amount is negative or not a number
            NotFoundError: If account or transaction type doesn't exist
        """
        amount = require_cents(parse_amount(amount))
        if amount < 0:
            raise ValidationError(
                f"Transaction amount must not be negative, got {amount}. "
                "Use the transaction type to record money going out."
            )

        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        transaction_type = transaction_type.upper()
        if self.db.get_transaction_type(transaction_type) is None:
            raise NotFoundError(transaction_type_not_found(transaction_type))

        if transaction_type not in BALANCE_TYPES:
            logger.warning(
                "%s transactions are recorded without changing the balance of account %s",
                transaction_type,
                account_id,
            )

        self._fix_legacy_account(account)

        transaction_id = self.db.create_transaction(
            account_id=account_id,
            date=date,
            amount=amount,
            transaction_type=transaction_type,
            description=description,
        )
        self.refresh_balance(account_id)
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def list_transactions(self, account_id: int) -> list[TransactionEntity]:
        """List an account's transactions, newest first.

        Raises:
            NotFoundError: If account doesn't exist
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        return self.db.list_transactions(account_id, ascending=False)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction and refresh its account's balance.

        Raises:
            NotFoundError: If transaction doesn't exist
        """
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        account = self.db.get_account(txn.account_id)
        if account is not None:
            self._fix_legacy_account(account)
        self.db.delete_transaction(transaction_id)
        self.refresh_balance(txn.account_id)

    def _fix_legacy_account(self, account) -> None:
        # Must run before the history changes, or the derived opening balance absorbs the change
        if needs_initial_balance(account):
            logger.info("Account %s has no initial balance, deriving it first", account.id)
            BalanceReconciler(self.db).reconcile_account(account.id)

    def refresh_balance(self, account_id: int) -> Decimal:
        """Recompute and store ``initial_balance + sum`` as the account balance.

        Returns:
            The new balance
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        transactions = self.db.list_transactions(account_id, ascending=True)
        balance = account.initial_balance + compute_transaction_sum(transactions)
        self.db.update_account_balance(account_id, balance)
        logger.debug("Account %s balance refreshed: %s -> %s", account_id, account.balance, balance)
        return balance
