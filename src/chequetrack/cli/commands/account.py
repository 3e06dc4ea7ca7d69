"""Account management commands."""

from decimal import Decimal

import click
from chequetrack.cli.account_resolution import resolve_account_or_exit
from chequetrack.cli.error_handling import handle_domain_error
from chequetrack.domain.account import AccountService
from chequetrack.utils.amount_parser import parse_amount, quantize_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--opening-balance",
    default="0",
    show_default=True,
    help="Opening balance that projections start from (may be negative)",
)
@click.pass_context
def create_account(ctx, name: str, opening_balance: str):
    """Create a new account.

    Examples:
        chequetrack account create "Business Current"
        chequetrack account create "Savings" --opening-balance 25000
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        balance = quantize_amount(parse_amount(opening_balance))
        account_id = service.create_account(name=name, opening_balance=balance)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created account '{name}' (ID: {account_id})")
    click.echo(f"Opening balance: {balance:,.2f}")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.name:20s} | Opening balance: {acc.opening_balance:,.2f}")


@account_group.command("set-balance")
@click.argument("account", metavar="ACCOUNT")
@click.argument("amount", metavar="AMOUNT")
@click.pass_context
def set_balance(ctx, account: str, amount: str) -> None:
    """Set the opening balance of an account.

    ACCOUNT can be an account name or ID.

    Examples:
        chequetrack account set-balance "Business Current" 1000
        chequetrack account set-balance 1 -- -250.50
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    try:
        balance = quantize_amount(parse_amount(amount))
        service.set_opening_balance(account_id, balance)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Opening balance of account {account_id} set to {balance:,.2f}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def delete_account(ctx, account: str) -> None:
    """Delete an account that has no instruments.

    ACCOUNT can be an account name or ID.
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, service, account)
    try:
        service.delete_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted account {account_id}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
