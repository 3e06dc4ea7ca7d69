"""Balance projection command."""

import click
from chequetrack.cli.account_resolution import resolve_account_or_exit
from chequetrack.cli.date_filters import (
    cli_today,
    parse_cli_date,
    range_options,
    resolve_cli_date_range,
)
from chequetrack.cli.error_handling import handle_domain_error
from chequetrack.domain.account import AccountService
from chequetrack.domain.entities import DayProjection
from chequetrack.domain.projection import ProjectionService, get_detail_for_date
from chequetrack.utils.date_parser import parse_month
from chequetrack.utils.date_ranges import QuickRange, month_range, quick_range


def _format_day(day: DayProjection) -> str:
    totals = day.day_totals
    return (
        f"{day.date.isoformat():<12} {totals.deposits:>14,.2f} {totals.cheques:>14,.2f} "
        f"{totals.withdrawals:>14,.2f} {day.projected_balance:>16,.2f}"
    )


def _display_detail(day: DayProjection) -> None:
    click.echo(f"\nProjection for {day.date.isoformat()}:")
    click.echo(f"  Deposits due:         {day.day_totals.deposits:>14,.2f}")
    click.echo(f"  Cheques due:          {day.day_totals.cheques:>14,.2f}")
    click.echo(f"  Withdrawals due:      {day.day_totals.withdrawals:>14,.2f}")
    click.echo(f"  Cumulative deposits:  {day.cumulative_totals.deposits:>14,.2f}")
    click.echo(f"  Cumulative cheques:   {day.cumulative_totals.cheques:>14,.2f}")
    click.echo(f"  Cumulative withdrawals: {day.cumulative_totals.withdrawals:>12,.2f}")
    click.echo(f"  Projected balance:    {day.projected_balance:>14,.2f}")


@click.command("project")
@click.option("--account", required=True, help="Account name or ID")
@range_options
@click.option("--month", help="Project a calendar month (YYYY-MM)")
@click.option(
    "--buffer",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Days to add on both sides of --month",
)
@click.option("--date", "detail_date", help="Show the breakdown for a single date in the window")
@click.option("--active-only", is_flag=True, help="Only list days with instruments due")
@click.pass_context
def project_balance(
    ctx,
    account: str,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    last_week: bool,
    last_month: bool,
    next_week: bool,
    next_month: bool,
    month: str | None,
    buffer: int,
    detail_date: str | None,
    active_only: bool,
):
    """Project the balance of an account day by day.

    Pending, deducted and cleared instruments all count, starting from the
    account's opening balance. Without a range option the next 30 days are
    shown.

    Examples:
        chequetrack project --account 1 --next-week
        chequetrack project --account "Business" --month 2026-02 --buffer 5
        chequetrack project --account 1 --start-date 2026-01-01 --end-date 2026-01-07 --date 2026-01-04
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    projection_service = ProjectionService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    today = cli_today(ctx)

    period_flags = {
        "this-month": this_month,
        "last-week": last_week,
        "last-month": last_month,
        "next-week": next_week,
        "next-month": next_month,
    }

    if month is not None:
        if any(period_flags.values()) or start_date or end_date:
            click.echo("Error: --month cannot be combined with other range options.", err=True)
            ctx.exit(1)
        try:
            window = month_range(parse_month(month), buffer, buffer)
        except ValueError as e:
            handle_domain_error(ctx, e)
        start, end = window.start_date, window.end_date
    else:
        start, end = resolve_cli_date_range(
            ctx,
            start_date=start_date,
            end_date=end_date,
            period_flags=period_flags,
            today=today,
            default_range=quick_range(QuickRange.NEXT_MONTH, today),
        )
        if start is None:
            start = end
        if end is None:
            end = start

    try:
        result = projection_service.project_account(account_id, start, end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if detail_date is not None:
        on_date = parse_cli_date(ctx, detail_date, "date", today)
        day = get_detail_for_date(result, on_date)
        if day is None:
            click.echo(
                f"Error: {on_date.isoformat()} is outside the projected window "
                f"{start.isoformat()}..{end.isoformat()}",
                err=True,
            )
            ctx.exit(1)
        _display_detail(day)
        return

    click.echo(f"\nProjection {start.isoformat()} to {end.isoformat()} (opening balance {result.anchor_balance:,.2f})")
    click.echo("-" * 76)
    click.echo(f"{'Date':<12} {'Deposits':>14} {'Cheques':>14} {'Withdrawals':>14} {'Balance':>16}")
    click.echo("-" * 76)
    for day in result.days:
        if active_only and day.day_totals.deposits == 0 and day.day_totals.outflows == 0:
            continue
        click.echo(_format_day(day))

    if result.excluded:
        click.echo(
            f"\nWarning: {len(result.excluded)} instrument(s) with an unknown kind, "
            "unknown status or non-positive amount were left out.",
            err=True,
        )


def register_commands(cli):
    """Register project command with main CLI."""
    cli.add_command(project_balance)
