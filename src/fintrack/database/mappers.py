"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal

from fintrack.domain import entities as domain
from fintrack.database.models import (
    Account as ORMAccount,
    Currency as ORMCurrency,
    Transaction as ORMTransaction,
    TransactionType as ORMTransactionType,
)


def _money(value) -> Decimal:
    """Coerce a stored numeric value to Decimal (NULL counts as zero)."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def currency_to_domain(orm_currency: ORMCurrency) -> domain.Currency:
    """Convert SQLAlchemy Currency model to domain Currency entity."""
    return domain.Currency(
        code=orm_currency.code,
        name=orm_currency.name,
        symbol=orm_currency.symbol,
        is_base=bool(orm_currency.is_base),
    )


def transaction_type_to_domain(orm_type: ORMTransactionType) -> domain.TransactionType:
    """Convert SQLAlchemy TransactionType model to domain TransactionType entity."""
    return domain.TransactionType(name=orm_type.name, description=orm_type.description)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        currency_code=orm_account.currency_code,
        initial_balance=_money(orm_account.initial_balance),
        balance=_money(orm_account.balance),
        created_at=orm_account.created_at,
        owner=orm_account.owner,
        is_active=True if orm_account.is_active is None else bool(orm_account.is_active),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        date=orm_transaction.date,
        amount=_money(orm_transaction.amount),
        transaction_type=orm_transaction.transaction_type.name,
        description=orm_transaction.description,
        created_at=orm_transaction.created_at,
    )
