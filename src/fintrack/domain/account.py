"""Account domain service."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from fintrack.domain.entities import Account as AccountEntity, AccountType, Currency, TransactionType
from fintrack.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    currency_not_found,
    duplicate_account_name,
)
from fintrack.utils.amount_parser import parse_amount, require_cents

if TYPE_CHECKING:
    from fintrack.database.base import Database


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        name: str,
        account_type: AccountType | str,
        currency_code: str,
        balance: str | int | Decimal = Decimal("0"),
        owner: Optional[str] = None,
    ) -> int:
        """Create a new account.

        The opening balance is stored as both the running balance and the
        initial balance, so a new account starts out reconciled.

        Args:
            name: Account name
            account_type: One of the AccountType values
            currency_code: Currency code, e.g. "USD"
            balance: Opening balance
            owner: Optional owner name

        Returns:
            Account ID

        Raises:
            ValidationError: If the type or balance is invalid
            NotFoundError: If the currency does not exist
            ConflictError: If account name already exists
        """
        try:
            account_type = AccountType(str(account_type).upper())
        except ValueError as e:
            valid = ", ".join(t.value for t in AccountType)
            raise ValidationError(f"Invalid account type '{account_type}'. Valid types: {valid}") from e

        if self.db.get_currency(currency_code) is None:
            raise NotFoundError(currency_not_found(currency_code))

        for acc in self.db.list_accounts():
            if acc.name == name:
                raise ConflictError(duplicate_account_name(name))

        opening = require_cents(parse_amount(balance))
        return self.db.create_account(
            name=name,
            account_type=account_type,
            currency_code=currency_code.upper(),
            initial_balance=opening,
            balance=opening,
            owner=owner,
        )

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(self, owner: Optional[str] = None) -> list[AccountEntity]:
        """List accounts, optionally only those of one owner."""
        return self.db.list_accounts(owner=owner)

    def set_active(self, account_id: int, is_active: bool) -> None:
        """Activate or deactivate an account.

        Raises:
            NotFoundError: If account not found
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        self.db.set_account_active(account_id, is_active)

    def list_currencies(self) -> list[Currency]:
        return self.db.list_currencies()

    def list_transaction_types(self) -> list[TransactionType]:
        return self.db.list_transaction_types()
