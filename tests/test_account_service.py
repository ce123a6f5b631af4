"""Tests for AccountService."""

from decimal import Decimal

import pytest

from fintrack.domain.entities import AccountType
from fintrack.domain.errors import ConflictError, NotFoundError, ValidationError
from fintrack.utils.account_resolver import resolve_account


class TestAccountService:
    """Tests for account creation and lookup."""

    def test_create_account_sets_both_balances(self, account_service):
        """Test that the opening balance is stored as balance and initial balance."""
        account_id = account_service.create_account(
            name="Checking", account_type=AccountType.CHECKING, currency_code="usd", balance="1,250.40"
        )
        account = account_service.get_account(account_id)

        assert account.balance == Decimal("1250.40")
        assert account.initial_balance == Decimal("1250.40")
        assert account.currency_code == "USD"
        assert account.is_active is True

    def test_create_account_lowercase_type(self, account_service):
        """Test that account types are case-insensitive."""
        account_id = account_service.create_account(name="Card", account_type="credit_card", currency_code="EUR")
        assert account_service.get_account(account_id).account_type is AccountType.CREDIT_CARD

    def test_create_account_invalid_type(self, account_service):
        """Test that an unknown account type is rejected."""
        with pytest.raises(ValidationError, match="Invalid account type"):
            account_service.create_account(name="Odd", account_type="PIGGY_BANK", currency_code="USD")

    def test_create_account_unknown_currency(self, account_service):
        """Test that an unknown currency is rejected."""
        with pytest.raises(NotFoundError):
            account_service.create_account(name="Odd", account_type="CASH", currency_code="ABC")

    def test_create_account_duplicate_name(self, account_service, sample_account):
        """Test that account names are unique."""
        with pytest.raises(ConflictError):
            account_service.create_account(name="Test Account", account_type="CASH", currency_code="USD")

    def test_list_accounts_by_owner(self, account_service):
        """Test filtering accounts by owner."""
        account_service.create_account(name="A", account_type="CASH", currency_code="USD", owner="alex")
        account_service.create_account(name="B", account_type="CASH", currency_code="USD", owner="sam")

        assert [a.name for a in account_service.list_accounts(owner="alex")] == ["A"]
        assert len(account_service.list_accounts()) == 2

    def test_set_active(self, account_service, sample_account):
        """Test deactivating an account."""
        account_service.set_active(sample_account.id, False)
        assert account_service.get_account(sample_account.id).is_active is False

    def test_set_active_unknown_account(self, account_service):
        """Test deactivating a missing account."""
        with pytest.raises(NotFoundError):
            account_service.set_active(123, False)

    def test_reference_data_is_seeded(self, account_service):
        """Test that currencies and transaction types exist in a new database."""
        assert [c.code for c in account_service.list_currencies()] == ["EUR", "JPY", "MXN", "USD"]
        assert {t.name for t in account_service.list_transaction_types()} == {
            "ACCOUNT_TRANSFER_IN",
            "EXPENSE",
            "INCOME",
            "REIMBURSEMENT",
            "TRANSFER",
        }

    def test_initialize_schema_twice(self, temp_db, account_service):
        """Test that seeding is idempotent."""
        temp_db.initialize_schema()
        assert len(account_service.list_currencies()) == 4


class TestResolveAccount:
    """Tests for resolve_account."""

    def test_resolve_by_id(self, account_service, sample_account):
        """Test resolving by numeric ID and its string form."""
        assert resolve_account(account_service, sample_account.id) == sample_account.id
        assert resolve_account(account_service, str(sample_account.id)) == sample_account.id

    def test_resolve_by_name(self, account_service, sample_account):
        """Test resolving by name."""
        assert resolve_account(account_service, "Test Account") == sample_account.id

    def test_resolve_missing(self, account_service):
        """Test resolving unknown names and IDs."""
        with pytest.raises(NotFoundError):
            resolve_account(account_service, "Nope")
        with pytest.raises(NotFoundError):
            resolve_account(account_service, 77)
