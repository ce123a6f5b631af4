"""Domain model entities for fintrack.

These are pure data classes representing business concepts, independent of
database schema. Monetary values are always ``Decimal``.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class AccountType(str, Enum):
    """Kinds of accounts a user can track."""

    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"
    CREDIT_CARD = "CREDIT_CARD"
    CASH = "CASH"
    INVESTMENT = "INVESTMENT"


# Transaction type taxonomy
INCOME = "INCOME"
EXPENSE = "EXPENSE"
TRANSFER = "TRANSFER"
REIMBURSEMENT = "REIMBURSEMENT"
ACCOUNT_TRANSFER_IN = "ACCOUNT_TRANSFER_IN"


@dataclass(frozen=True)
class Currency:
    """Currency reference entity."""

    code: str
    name: str
    symbol: str
    is_base: bool = False


@dataclass(frozen=True)
class TransactionType:
    """Transaction type reference entity."""

    name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class Account:
    """Account domain entity."""

    id: int
    name: str
    account_type: AccountType
    currency_code: str
    initial_balance: Decimal
    balance: Decimal
    created_at: datetime
    owner: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity.

    ``amount`` is never negative; the direction of the money comes from
    ``transaction_type``.
    """

    id: int
    account_id: int
    date: date
    amount: Decimal
    transaction_type: str
    description: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class ReconciliationResult:
    """Outcome of reconciling a single account."""

    account_id: int
    initial_balance: Decimal
    calculated_balance: Decimal
    transaction_count: int
    derived: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the response payload for a recalculate request."""
        return {
            "initialBalance": str(self.initial_balance),
            "calculatedBalance": str(self.calculated_balance),
            "transactionCount": self.transaction_count,
        }


@dataclass(frozen=True)
class ReconciliationEntry:
    """One line of a batch reconciliation report."""

    account_id: int
    account_name: str
    balance: Decimal
    transaction_sum: Decimal
    before: Decimal
    after: Decimal
    updated: bool
