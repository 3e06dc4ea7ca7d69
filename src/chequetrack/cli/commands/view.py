"""Instrument viewing commands."""

import click
from chequetrack.cli.account_resolution import resolve_account_or_exit
from chequetrack.cli.date_filters import cli_today, range_options, resolve_cli_date_range
from chequetrack.cli.error_handling import handle_domain_error
from chequetrack.domain.account import AccountService
from chequetrack.domain.entities import InstrumentKind, InstrumentStatus
from chequetrack.domain.instrument import InstrumentService


def _label(value) -> str:
    return value.value if isinstance(value, (InstrumentKind, InstrumentStatus)) else str(value)


@click.command("view")
@click.option("--account", help="Account name or ID")
@click.option(
    "--kind",
    type=click.Choice([kind.value for kind in InstrumentKind], case_sensitive=False),
    help="Only show this kind",
)
@click.option(
    "--status",
    type=click.Choice([status.value for status in InstrumentStatus], case_sensitive=False),
    help="Only show this status",
)
@range_options
@click.option("--verbose", "-v", is_flag=True, help="Show all fields for each instrument")
@click.pass_context
def view_instruments(
    ctx,
    account: str | None,
    kind: str | None,
    status: str | None,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    last_week: bool,
    last_month: bool,
    next_week: bool,
    next_month: bool,
    verbose: bool,
):
    """View instruments with optional filters on due date, kind and status."""
    db = ctx.obj["db"]
    service = InstrumentService(db)
    account_service = AccountService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, account_service, account)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "last-week": last_week,
            "last-month": last_month,
            "next-week": next_week,
            "next-month": next_month,
        },
        today=cli_today(ctx),
    )

    try:
        instruments = service.list_instruments(
            account_id=account_id, start_date=start, end_date=end, kind=kind, status=status
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not instruments:
        click.echo("No instruments found.")
        return

    accounts = {acc.id: acc.name for acc in account_service.list_accounts()}

    click.echo(f"\nFound {len(instruments)} instrument(s):")
    if verbose:
        click.echo("=" * 100)
        for item in instruments:
            click.echo(f"\nInstrument ID: {item.id}")
            click.echo(f"  Kind: {_label(item.kind)}")
            click.echo(f"  Status: {_label(item.status)}")
            click.echo(f"  Amount: {item.amount:,.2f}")
            click.echo(f"  Due date: {item.due_date}")
            click.echo(f"  Created date: {item.created_date}")
            click.echo(f"  Account: {accounts.get(item.account_id, 'Unknown')} (ID: {item.account_id})")
            if item.cheque_number:
                click.echo(f"  Cheque number: {item.cheque_number}")
            if item.payee:
                click.echo(f"  Payee: {item.payee}")
            if item.description:
                click.echo(f"  Description: {item.description}")
            if item.reference_number:
                click.echo(f"  Reference: {item.reference_number}")
            click.echo("-" * 100)
        return

    click.echo("-" * 100)
    click.echo(
        f"{'ID':<6} {'Due':<12} {'Kind':<12} {'Status':<10} {'Amount':>14}  {'Account':<20} {'Payee':<20}"
    )
    click.echo("-" * 100)
    for item in instruments:
        amount_str = f"{item.amount:,.2f}"
        click.echo(
            f"{item.id:<6} {str(item.due_date):<12} {_label(item.kind):<12} {_label(item.status):<10} "
            f"{amount_str:>14}  {accounts.get(item.account_id, 'Unknown')[:20]:<20} {(item.payee or '')[:20]:<20}"
        )


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_instruments)
