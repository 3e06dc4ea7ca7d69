"""Instrument maintenance commands."""

import click
from chequetrack.cli.date_filters import cli_today, parse_cli_date
from chequetrack.cli.error_handling import handle_domain_error
from chequetrack.domain.entities import InstrumentKind, InstrumentStatus
from chequetrack.domain.instrument import InstrumentService
from chequetrack.utils.amount_parser import parse_amount, quantize_amount


@click.group()
def instrument_group():
    """Update or delete instruments."""
    pass


@instrument_group.command("status")
@click.argument("instrument_id", type=int)
@click.argument(
    "status",
    type=click.Choice([status.value for status in InstrumentStatus], case_sensitive=False),
)
@click.pass_context
def set_status(ctx, instrument_id: int, status: str):
    """Set the status of an instrument by hand.

    Examples:
        chequetrack instrument status 12 cleared
    """
    service = InstrumentService(ctx.obj["db"])
    try:
        service.update_status(instrument_id, status)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Instrument {instrument_id} is now {status.lower()}")


@instrument_group.command("update")
@click.argument("instrument_id", type=int)
@click.option(
    "--kind",
    type=click.Choice([kind.value for kind in InstrumentKind], case_sensitive=False),
    help="New kind",
)
@click.option("--amount", help="New positive amount")
@click.option("--due-date", help="New due date")
@click.option("--cheque-number", help="New cheque number")
@click.option("--payee", help="New payee")
@click.option("--description", help="New description")
@click.option("--reference", help="New reference number")
@click.pass_context
def update_instrument(
    ctx,
    instrument_id: int,
    kind: str | None,
    amount: str | None,
    due_date: str | None,
    cheque_number: str | None,
    payee: str | None,
    description: str | None,
    reference: str | None,
):
    """Update fields of an instrument."""
    service = InstrumentService(ctx.obj["db"])

    due = parse_cli_date(ctx, due_date, "due date", cli_today(ctx)) if due_date else None
    try:
        new_amount = quantize_amount(parse_amount(amount)) if amount else None
        service.update_instrument(
            instrument_id,
            kind=kind,
            amount=new_amount,
            due_date=due,
            cheque_number=cheque_number,
            payee=payee,
            description=description,
            reference_number=reference,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated instrument {instrument_id}")


@instrument_group.command("delete")
@click.argument("instrument_id", type=int)
@click.pass_context
def delete_instrument(ctx, instrument_id: int):
    """Delete an instrument."""
    service = InstrumentService(ctx.obj["db"])
    try:
        service.delete_instrument(instrument_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted instrument {instrument_id}")


def register_commands(cli):
    """Register instrument commands with main CLI."""
    cli.add_command(instrument_group, name="instrument")
