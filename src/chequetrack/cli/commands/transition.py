"""Status transition commands.

``chequetrack transition run`` is safe to call as often as you like (for
example from cron shortly after midnight): only instruments that are still
pending and due today are touched.
"""

import click
from chequetrack.cli.account_resolution import resolve_account_or_exit
from chequetrack.cli.error_handling import handle_domain_error
from chequetrack.domain.account import AccountService
from chequetrack.domain.transitions import StatusTransitionService


@click.group()
def transition_group():
    """Settle instruments that fall due."""
    pass


@transition_group.command("run")
@click.option("--timezone", "timezone_name", help="IANA timezone for today (overrides --timezone on the main command)")
@click.option("--account", help="Only this account (name or ID)")
@click.pass_context
def run_transitions(ctx, timezone_name: str | None, account: str | None):
    """Mark pending instruments due today as deducted or cleared.

    Cheques and withdrawals become 'deducted'; deposits become 'cleared'.

    Examples:
        chequetrack transition run --timezone Asia/Kathmandu
    """
    db = ctx.obj["db"]
    service = StatusTransitionService(db, default_timezone=ctx.obj.get("timezone"))

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        outcome = service.run_due_transitions(timezone=timezone_name, account_id=account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Local date: {outcome.local_date}")
    click.echo(f"Cheques/withdrawals deducted: {outcome.updated_cheques_withdrawals}")
    click.echo(f"Deposits cleared: {outcome.updated_deposits}")


def register_commands(cli):
    """Register transition commands with main CLI."""
    cli.add_command(transition_group, name="transition")
