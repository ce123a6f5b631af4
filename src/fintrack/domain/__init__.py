"""Domain layer for fintrack application."""

from fintrack.domain.reconciliation import BalanceReconciler
from fintrack.domain.account import AccountService
from fintrack.domain.transaction import TransactionService

__all__ = [
    "AccountService",
    "BalanceReconciler",
    "TransactionService",
]
