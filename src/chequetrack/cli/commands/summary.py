"""Summary commands."""

import click
from chequetrack.cli.account_resolution import resolve_account_or_exit
from chequetrack.cli.date_filters import cli_today, range_options, resolve_cli_date_range
from chequetrack.cli.error_handling import handle_domain_error
from chequetrack.domain.account import AccountService
from chequetrack.domain.entities import InstrumentKind, InstrumentStatus, SummaryTotals
from chequetrack.domain.summary import SummaryService


def _display_totals(totals: SummaryTotals) -> None:
    click.echo(f"\n{'Metric':<42} {'Amount':>16} {'Count':>8}")
    click.echo("-" * 68)
    rows = [
        ("Total Deposits", totals.by_kind.deposits, totals.kind_counts[InstrumentKind.DEPOSIT]),
        ("Total Cheques", totals.by_kind.cheques, totals.kind_counts[InstrumentKind.CHEQUE]),
        ("Total Withdrawals", totals.by_kind.withdrawals, totals.kind_counts[InstrumentKind.WITHDRAWAL]),
        ("Total Deductions (Cheques + Withdrawals)", totals.deductions, None),
        (
            "Pending Amount",
            totals.status_amounts[InstrumentStatus.PENDING],
            totals.status_counts[InstrumentStatus.PENDING],
        ),
        (
            "Deducted Amount",
            totals.status_amounts[InstrumentStatus.DEDUCTED],
            totals.status_counts[InstrumentStatus.DEDUCTED],
        ),
        (
            "Cleared Amount",
            totals.status_amounts[InstrumentStatus.CLEARED],
            totals.status_counts[InstrumentStatus.CLEARED],
        ),
        ("Net Cash Flow (Deposits - Deductions)", totals.net_cash_flow, None),
    ]
    for label, amount, count in rows:
        count_str = "-" if count is None else str(count)
        click.echo(f"{label:<42} {amount:>16,.2f} {count_str:>8}")
    click.echo(f"\nRecords: {totals.record_count}")


@click.command("summary")
@click.option("--account", help="Account name or ID (all accounts if omitted)")
@range_options
@click.option("--monthly", is_flag=True, help="Break totals down by due month")
@click.pass_context
def show_summary(
    ctx,
    account: str | None,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    last_week: bool,
    last_month: bool,
    next_week: bool,
    next_month: bool,
    monthly: bool,
):
    """Show totals by kind and status, or a monthly breakdown.

    Examples:
        chequetrack summary --this-month
        chequetrack summary --account 1 --monthly
    """
    db = ctx.obj["db"]
    service = SummaryService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

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
        if monthly:
            rows = service.monthly_breakdown(account_id, start, end)
        else:
            totals = service.summary_totals(account_id, start, end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not monthly:
        _display_totals(totals)
        return

    if not rows:
        click.echo("No instruments found.")
        return

    click.echo(
        f"\n{'Month':<9} {'Deposits':>14} {'Cheques':>14} {'Withdrawals':>14} "
        f"{'Deductions':>14} {'Net':>14} {'Count':>6}"
    )
    click.echo("-" * 91)
    for row in rows:
        click.echo(
            f"{row.month:<9} {row.totals.deposits:>14,.2f} {row.totals.cheques:>14,.2f} "
            f"{row.totals.withdrawals:>14,.2f} {row.deductions:>14,.2f} "
            f"{row.net_cash_flow:>14,.2f} {row.instrument_count:>6}"
        )


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(show_summary)
