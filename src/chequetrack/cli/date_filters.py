"""CLI helpers for date range resolution."""

from datetime import date

import click

from chequetrack.domain.entities import ProjectionRange
from chequetrack.utils.clock import resolve_timezone_name, today_in_timezone
from chequetrack.utils.date_parser import parse_date
from chequetrack.utils.date_ranges import quick_range


def cli_today(ctx: click.Context) -> date:
    """Return today's civil date in the timezone selected for this run."""
    obj = ctx.find_root().obj or {}
    tz_name = resolve_timezone_name(obj.get("timezone"))
    try:
        return today_in_timezone(tz_name)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)


def parse_cli_date(ctx: click.Context, value: str, label: str, today: date) -> date:
    """Parse a date option or exit with a CLI error."""
    try:
        return parse_date(value, today=today)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    today: date,
    default_range: ProjectionRange | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from quick range flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one range option (--this-month, --last-week, --last-month, --next-week, --next-month) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Range options (--this-month, --next-week, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    start = None
    end = None

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                window = quick_range(period, today)
                start, end = window.start_date, window.end_date
                break
    else:
        if start_date:
            start = parse_cli_date(ctx, start_date, "start date", today)
        if end_date:
            end = parse_cli_date(ctx, end_date, "end date", today)

        if start is None and end is None and default_range is not None:
            start, end = default_range.start_date, default_range.end_date

    if start is not None and end is not None and start > end:
        click.echo(
            f"Error: Start date {start.isoformat()} must be on or before end date {end.isoformat()}",
            err=True,
        )
        ctx.exit(1)

    return start, end


def range_options(func):
    """Attach the standard date range options to a command."""
    options = [
        click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'today', 'next month')"),
        click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'tomorrow')"),
        click.option("--this-month", is_flag=True, help="Calendar month containing today"),
        click.option("--last-week", is_flag=True, help="The 7 days up to today"),
        click.option("--last-month", is_flag=True, help="The 30 days up to today"),
        click.option("--next-week", is_flag=True, help="Today and the following 7 days"),
        click.option("--next-month", is_flag=True, help="Today and the following 30 days"),
    ]
    for option in reversed(options):
        func = option(func)
    return func

