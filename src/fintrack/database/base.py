"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from fintrack.domain.entities import (
    Account,
    AccountType,
    Currency,
    Transaction,
    TransactionType,
)


class Database(ABC):
    """Abstract database interface for fintrack.

    Implementations return domain entities and raise
    ``fintrack.domain.errors.PersistenceError`` when storage fails.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema and seed reference data."""
        pass

    # Reference data
    @abstractmethod
    def get_currency(self, code: str) -> Optional[Currency]:
        """Get currency by code."""
        pass

    @abstractmethod
    def list_currencies(self) -> list[Currency]:
        """List all currencies ordered by code."""
        pass

    @abstractmethod
    def get_transaction_type(self, name: str) -> Optional[TransactionType]:
        """Get transaction type by name."""
        pass

    @abstractmethod
    def list_transaction_types(self) -> list[TransactionType]:
        """List all transaction types ordered by name."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        name: str,
        account_type: AccountType,
        currency_code: str,
        initial_balance: Decimal = Decimal("0"),
        balance: Decimal = Decimal("0"),
        owner: Optional[str] = None,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, owner: Optional[str] = None) -> list[Account]:
        """List accounts, optionally only those belonging to owner."""
        pass

    @abstractmethod
    def update_account_initial_balance(self, account_id: int, initial_balance: Decimal) -> Account:
        """Store a new initial balance. Returns the updated account."""
        pass

    @abstractmethod
    def update_account_balance(self, account_id: int, balance: Decimal) -> Account:
        """Store a new cached running balance. Returns the updated account."""
        pass

    @abstractmethod
    def set_account_active(self, account_id: int, is_active: bool) -> None:
        """Activate or deactivate an account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        date: date,
        amount: Decimal,
        transaction_type: str,
        description: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(self, account_id: int, ascending: bool = True) -> list[Transaction]:
        """List an account's transactions ordered by date.

        Args:
            account_id: Account whose transactions are listed
            ascending: Oldest first when True, newest first otherwise
        """
        pass
