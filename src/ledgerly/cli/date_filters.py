"""CLI helpers for date range resolution."""

from datetime import date

import click

from ledgerly.utils.date_parser import get_date_range, parse_date

PERIOD_OPTIONS = ("this-month", "this-year", "last-month", "last-year")


def period_options(command):
    """Attach the --this-month/--this-year/--last-month/--last-year flags."""
    for period in reversed(PERIOD_OPTIONS):
        command = click.option(
            f"--{period}",
            period.replace("-", "_"),
            is_flag=True,
            help=f"Limit to {period.replace('-', ' ')}",
        )(command)
    return command


def parse_cli_date(ctx, value: str | None, label: str) -> date | None:
    """Parse an optional date option, exiting with an error message on failure."""
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    period_count = sum(1 for is_set in period_flags.values() if is_set)

    if period_count > 1:
        click.echo(
            "Error: Only one period option (--this-month, --this-year, --last-month, --last-year) can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if period_count > 0 and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --this-year, etc.) cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period_count == 1:
        for period, is_set in period_flags.items():
            if is_set:
                return get_date_range(period)

    start = parse_cli_date(ctx, start_date, "start date")
    end = parse_cli_date(ctx, end_date, "end date")

    if start is None and end is None and default_range is not None:
        start, end = default_range

    return start, end
