"""Account management commands."""

import click
from fintrack.cli.account_resolution import resolve_account_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.account import AccountService
from fintrack.domain.entities import AccountType
from fintrack.domain.errors import DomainError
from fintrack.domain.reconciliation import BalanceReconciler
from fintrack.utils.amount_parser import format_amount


def _symbol(service: AccountService, currency_code: str) -> str:
    currency = service.db.get_currency(currency_code)
    return currency.symbol if currency else ""


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    default=AccountType.CHECKING.value,
    show_default=True,
    help="Account type",
)
@click.option("--currency", default="USD", show_default=True, help="Currency code")
@click.option("--balance", default="0", help="Opening balance (e.g., 1200.50)")
@click.option("--owner", help="Owner name, used to scope 'fintrack reconcile'")
@click.pass_context
def create_account(ctx, name: str, account_type: str, currency: str, balance: str, owner: str | None):
    """Create a new account.

    The opening balance becomes both the current and the initial balance.

    Examples:
        fintrack account create "Checking"
        fintrack account create "Travel Card" --type CREDIT_CARD --currency EUR
        fintrack account create "Savings" --type SAVINGS --balance 2500 --owner alex
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        account_id = service.create_account(
            name=name,
            account_type=account_type,
            currency_code=currency,
            balance=balance,
            owner=owner,
        )
        click.echo(f"Created account '{name}' (ID: {account_id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--owner", help="Only show this owner's accounts")
@click.pass_context
def list_accounts(ctx, owner: str | None):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(owner=owner)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        status = "" if acc.is_active else " (inactive)"
        balance = format_amount(acc.balance, _symbol(service, acc.currency_code))
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {acc.account_type.value:11s} | "
            f"{acc.currency_code} {balance:>14s}{status}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show details of an account.

    ACCOUNT can be an account name or ID.
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)

    acc = service.get_account(account_id)
    symbol = _symbol(service, acc.currency_code)
    click.echo(f"Account:         {acc.name} (ID: {acc.id})")
    click.echo(f"Type:            {acc.account_type.value}")
    click.echo(f"Currency:        {acc.currency_code}")
    click.echo(f"Initial balance: {format_amount(acc.initial_balance, symbol)}")
    click.echo(f"Balance:         {format_amount(acc.balance, symbol)}")
    if acc.owner:
        click.echo(f"Owner:           {acc.owner}")
    click.echo(f"Active:          {'yes' if acc.is_active else 'no'}")


@account_group.command("recalculate")
@click.argument("account", metavar="ACCOUNT")
@click.option(
    "--initial-balance",
    help="Use this opening balance instead of deriving it from the current balance",
)
@click.pass_context
def recalculate_account(ctx, account: str, initial_balance: str | None):
    """Recalculate the initial balance of an account.

    ACCOUNT can be an account name or ID.

    Without --initial-balance, accounts whose initial balance is zero get one
    derived from their current balance and transactions. Accounts that already
    have an initial balance keep it.

    Examples:
        fintrack account recalculate "Checking"
        fintrack account recalculate 1 --initial-balance 200
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        result = BalanceReconciler(db).reconcile_account(account_id, initial_balance=initial_balance)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    symbol = _symbol(service, service.get_account(account_id).currency_code)
    click.echo(f"Initial balance:    {format_amount(result.initial_balance, symbol)}")
    click.echo(f"Calculated balance: {format_amount(result.calculated_balance, symbol)}")
    click.echo(f"Transactions:       {result.transaction_count}")


@account_group.command("deactivate")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def deactivate_account(ctx, account: str):
    """Mark an account as inactive."""
    _set_active(ctx, account, False)


@account_group.command("activate")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def activate_account(ctx, account: str):
    """Mark an account as active again."""
    _set_active(ctx, account, True)


def _set_active(ctx, account: str, is_active: bool) -> None:
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)
    try:
        service.set_active(account_id, is_active)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Account {account_id} is now {'active' if is_active else 'inactive'}")


@account_group.command("currencies")
@click.pass_context
def list_currencies(ctx):
    """List available currencies."""
    service = AccountService(ctx.obj["db"])
    for currency in service.list_currencies():
        base = " (base)" if currency.is_base else ""
        click.echo(f"{currency.code}  {currency.symbol:2s} {currency.name}{base}")


@account_group.command("types")
@click.pass_context
def list_transaction_types(ctx):
    """List transaction types."""
    service = AccountService(ctx.obj["db"])
    for txn_type in service.list_transaction_types():
        click.echo(f"{txn_type.name:20s} {txn_type.description or ''}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
