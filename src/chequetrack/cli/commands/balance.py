"""Current balance command."""

import click
from chequetrack.cli.account_resolution import resolve_account_or_exit
from chequetrack.cli.error_handling import handle_domain_error
from chequetrack.domain.account import AccountService
from chequetrack.domain.projection import ProjectionService


@click.command("balance")
@click.option("--account", required=True, help="Account name or ID")
@click.pass_context
def show_balance(ctx, account: str):
    """Show the settled balance and what is still pending.

    The current balance counts only cleared instruments.
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    projection_service = ProjectionService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    account_obj = account_service.get_account(account_id)

    try:
        current = projection_service.current_balance(account_id)
        pending = projection_service.pending_totals(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Account: {account_obj.name} (ID: {account_id})")
    click.echo(f"  Opening balance:  {account_obj.opening_balance:>14,.2f}")
    click.echo(f"  Current balance:  {current:>14,.2f}")
    click.echo(f"  Pending deposits: {pending.pending_deposits:>14,.2f}")
    click.echo(f"  Pending outflows: {pending.pending_outflows:>14,.2f}")


def register_commands(cli):
    """Register balance command with main CLI."""
    cli.add_command(show_balance)
