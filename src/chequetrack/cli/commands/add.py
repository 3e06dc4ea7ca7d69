"""Add instrument command."""

import click
from chequetrack.cli.account_resolution import resolve_account_or_exit
from chequetrack.cli.date_filters import cli_today, parse_cli_date
from chequetrack.cli.error_handling import handle_domain_error
from chequetrack.domain.account import AccountService
from chequetrack.domain.entities import InstrumentKind, InstrumentStatus
from chequetrack.domain.instrument import InstrumentService
from chequetrack.utils.amount_parser import parse_amount, quantize_amount


@click.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option(
    "--kind",
    required=True,
    type=click.Choice([kind.value for kind in InstrumentKind], case_sensitive=False),
    help="Instrument kind",
)
@click.option("--amount", required=True, help="Positive amount (e.g., 1250.00)")
@click.option(
    "--due-date",
    required=True,
    help="Due date (YYYY-MM-DD or relative like 'today', 'tomorrow')",
)
@click.option(
    "--status",
    type=click.Choice([status.value for status in InstrumentStatus], case_sensitive=False),
    default=InstrumentStatus.PENDING.value,
    show_default=True,
    help="Initial status",
)
@click.option("--created-date", help="Date the instrument was recorded (defaults to today)")
@click.option("--cheque-number", help="Cheque number")
@click.option("--payee", help="Payee")
@click.option("--description", help="Description")
@click.option("--reference", help="Reference number")
@click.pass_context
def add_instrument(
    ctx,
    account: str,
    kind: str,
    amount: str,
    due_date: str,
    status: str,
    created_date: str | None,
    cheque_number: str | None,
    payee: str | None,
    description: str | None,
    reference: str | None,
):
    """Add a cheque, deposit or withdrawal.

    Examples:
        chequetrack add --account 1 --kind cheque --amount 500 --due-date 2026-01-04 --payee "Landlord"
        chequetrack add --account "Business" --kind deposit --amount 1200 --due-date tomorrow
    """
    db = ctx.obj["db"]
    instrument_service = InstrumentService(db)
    account_service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    today = cli_today(ctx)

    due = parse_cli_date(ctx, due_date, "due date", today)
    created = parse_cli_date(ctx, created_date, "created date", today) if created_date else today

    try:
        instrument_amount = quantize_amount(parse_amount(amount))
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        instrument_id = instrument_service.create_instrument(
            account_id=account_id,
            kind=kind,
            amount=instrument_amount,
            due_date=due,
            status=status,
            created_date=created,
            cheque_number=cheque_number,
            payee=payee,
            description=description,
            reference_number=reference,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created {kind.lower()} {instrument_id}")
    click.echo(f"  Account: {account_id}")
    click.echo(f"  Due date: {due}")
    click.echo(f"  Amount: {instrument_amount:,.2f}")
    click.echo(f"  Status: {status.lower()}")
    if payee:
        click.echo(f"  Payee: {payee}")
    if description:
        click.echo(f"  Description: {description}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_instrument)
