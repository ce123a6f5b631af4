"""Batch reconciliation command."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.entities import ReconciliationEntry
from fintrack.domain.errors import DomainError
from fintrack.domain.reconciliation import BalanceReconciler
from fintrack.utils.amount_parser import format_amount


def print_report(report: list[ReconciliationEntry], echo=click.echo) -> None:
    """Print a per-account before/after summary of a reconciliation run."""
    if not report:
        echo("No accounts found.")
        return

    for entry in report:
        if entry.updated:
            echo(f"\nAccount: {entry.account_name}")
            echo(f"   Current balance: {format_amount(entry.balance)}")
            echo(f"   Transaction sum: {format_amount(entry.transaction_sum)}")
            echo(f"   Initial balance: {format_amount(entry.before)} -> {format_amount(entry.after)}")
        else:
            echo(
                f"\n✓ Account: {entry.account_name} - initial balance already set: "
                f"{format_amount(entry.before)}"
            )

    updated = sum(1 for entry in report if entry.updated)
    echo(f"\nDone! Updated {updated} of {len(report)} accounts.")


@click.command("reconcile")
@click.option("--owner", help="Only reconcile this owner's accounts")
@click.pass_context
def reconcile_accounts(ctx, owner: str | None):
    """Derive missing initial balances for all accounts.

    Accounts with an initial balance of zero and a non-zero balance get an
    initial balance of balance minus their transaction sum. Other accounts
    are left unchanged.
    """
    try:
        report = BalanceReconciler(ctx.obj["db"]).reconcile_all_accounts(owner=owner)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    print_report(report)


def register_commands(cli):
    """Register reconcile command with main CLI."""
    cli.add_command(reconcile_accounts)
