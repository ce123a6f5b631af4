"""Transaction management commands."""

import click
from fintrack.cli.account_resolution import resolve_account_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.account import AccountService
from fintrack.domain.errors import DomainError
from fintrack.domain.reconciliation import signed_amount
from fintrack.domain.transaction import TransactionService
from fintrack.utils.amount_parser import format_amount
from fintrack.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.argument("account", metavar="ACCOUNT")
@click.option("--amount", required=True, help="Amount, never negative (e.g., 45.10)")
@click.option("--type", "transaction_type", required=True, help="Transaction type (see 'account types')")
@click.option("--date", "date_str", default="today", show_default=True, help="Transaction date")
@click.option("--description", help="Transaction description")
@click.pass_context
def add_transaction(ctx, account: str, amount: str, transaction_type: str, date_str: str, description: str | None):
    """Record a transaction and update the account balance.

    ACCOUNT can be an account name or ID.

    Examples:
        fintrack transaction add "Checking" --amount 1500 --type INCOME --date 2024-01-01
        fintrack transaction add 1 --amount 45.10 --type EXPENSE --description "Groceries"
    """
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    service = TransactionService(db)

    try:
        txn_date = parse_date(date_str)
        transaction_id = service.create_transaction(
            account_id=account_id,
            date=txn_date,
            amount=amount,
            transaction_type=transaction_type,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    balance = db.get_account(account_id).balance
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"New balance: {format_amount(balance)}")


@transaction_group.command("list")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def list_transactions(ctx, account: str):
    """List an account's transactions, newest first."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    transactions = TransactionService(db).list_transactions(account_id)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"{'ID':>5s}  {'Date':10s}  {'Type':20s}  {'Amount':>12s}  Description")
    click.echo("-" * 72)
    for txn in transactions:
        click.echo(
            f"{txn.id:5d}  {txn.date.isoformat():10s}  {txn.transaction_type:20s}  "
            f"{format_amount(signed_amount(txn)):>12s}  {txn.description or ''}"
        )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool):
    """Delete a transaction and update the account balance."""
    service = TransactionService(ctx.obj["db"])

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
