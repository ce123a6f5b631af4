"""Account balance reconciliation.

An account stores both the balance it was opened with (``initial_balance``)
and a cached running ``balance``. They are related by::

    balance == initial_balance + sum(signed transaction amounts)

Accounts created before ``initial_balance`` existed carry ``0`` there while
their ``balance`` is correct. The reconciler solves the relation for the
missing opening balance and stores it.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional

from fintrack.domain.entities import (
    EXPENSE,
    INCOME,
    REIMBURSEMENT,
    TRANSFER,
    Account,
    ReconciliationEntry,
    ReconciliationResult,
    Transaction,
)
from fintrack.domain.errors import NotFoundError, account_not_found
from fintrack.utils.amount_parser import parse_amount, require_cents

if TYPE_CHECKING:
    from fintrack.database.base import Database

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

CREDIT_TYPES = frozenset({INCOME, REIMBURSEMENT})
DEBIT_TYPES = frozenset({EXPENSE, TRANSFER})


def signed_amount(transaction: Transaction) -> Decimal:
    """Return the effect of a transaction on its account's balance.

    Types outside CREDIT_TYPES and DEBIT_TYPES, ACCOUNT_TRANSFER_IN included,
    have no effect.
    """
    if transaction.transaction_type in CREDIT_TYPES:
        return transaction.amount
    if transaction.transaction_type in DEBIT_TYPES:
        return -transaction.amount
    return ZERO


def compute_transaction_sum(transactions: Iterable[Transaction]) -> Decimal:
    """Return the net signed effect of transactions, ignoring any opening balance."""
    return sum((signed_amount(txn) for txn in transactions), ZERO)


def derive_initial_balance(account: Account, transaction_sum: Decimal) -> Decimal:
    """Solve ``balance = initial + sum`` for the opening balance."""
    return account.balance - transaction_sum


def needs_initial_balance(account: Account) -> bool:
    """Whether the account looks like a legacy record without an opening balance."""
    return account.initial_balance == ZERO and account.balance != ZERO


class BalanceReconciler:
    """Derives and stores opening balances for accounts."""

    def __init__(self, db: Database):
        """Initialize the reconciler.

        Args:
            db: Database instance; its lifecycle stays with the caller
        """
        self.db = db

    def _load(self, account_id: int) -> tuple[Account, list[Transaction]]:
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account, self.db.list_transactions(account_id, ascending=True)

    def reconcile_account(
        self, account_id: int, initial_balance: Optional[str | int | float | Decimal] = None
    ) -> ReconciliationResult:
        """Recalculate an account's opening balance.

        An explicit ``initial_balance`` always wins. Without one, the opening
        balance is derived only for legacy accounts (stored opening balance of
        zero with a non-zero balance); otherwise the stored value is kept.
        The opening balance is written back exactly once; transactions and the
        cached balance are left alone.

        Args:
            account_id: Account to reconcile
            initial_balance: Optional manual opening balance

        Returns:
            ReconciliationResult with the opening balance and the balance it implies

        Raises:
            ValidationError: If initial_balance is not a finite number or
                has more than two decimal places
            NotFoundError: If the account does not exist
        """
        override = None
        if initial_balance is not None:
            override = require_cents(parse_amount(initial_balance))

        account, transactions = self._load(account_id)
        transaction_sum = compute_transaction_sum(transactions)

        derived = False
        if override is not None:
            new_initial = override
        elif needs_initial_balance(account):
            new_initial = derive_initial_balance(account, transaction_sum)
            derived = True
        else:
            new_initial = account.initial_balance

        calculated_balance = new_initial + transaction_sum
        self.db.update_account_initial_balance(account_id, new_initial)

        logger.info(
            "Reconciled account %s: initial balance %s -> %s, calculated balance %s",
            account_id,
            account.initial_balance,
            new_initial,
            calculated_balance,
        )
        return ReconciliationResult(
            account_id=account_id,
            initial_balance=new_initial,
            calculated_balance=calculated_balance,
            transaction_count=len(transactions),
            derived=derived,
        )

    def reconcile_all_accounts(self, owner: Optional[str] = None) -> list[ReconciliationEntry]:
        """Derive opening balances for every legacy account.

        Accounts are processed one at a time. Accounts that already have an
        opening balance, or whose balance is zero, are reported but not written.

        Args:
            owner: Only reconcile this owner's accounts when given

        Returns:
            One report entry per account, in account creation order
        """
        report = []
        for account in self.db.list_accounts(owner=owner):
            transaction_sum = compute_transaction_sum(
                self.db.list_transactions(account.id, ascending=True)
            )

            if not needs_initial_balance(account):
                logger.info(
                    "Account %s (%s): initial balance already set to %s",
                    account.id,
                    account.name,
                    account.initial_balance,
                )
                report.append(
                    ReconciliationEntry(
                        account_id=account.id,
                        account_name=account.name,
                        balance=account.balance,
                        transaction_sum=transaction_sum,
                        before=account.initial_balance,
                        after=account.initial_balance,
                        updated=False,
                    )
                )
                continue

            new_initial = derive_initial_balance(account, transaction_sum)
            self.db.update_account_initial_balance(account.id, new_initial)
            logger.info(
                "Account %s (%s): balance %s, transaction sum %s, initial balance %s -> %s",
                account.id,
                account.name,
                account.balance,
                transaction_sum,
                account.initial_balance,
                new_initial,
            )
            report.append(
                ReconciliationEntry(
                    account_id=account.id,
                    account_name=account.name,
                    balance=account.balance,
                    transaction_sum=transaction_sum,
                    before=account.initial_balance,
                    after=new_initial,
                    updated=True,
                )
            )
        return report
