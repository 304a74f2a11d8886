"""CLI helpers for date range resolution."""

from datetime import date

import click

from ledgerit.utils.date_parser import PERIODS, get_date_range, parse_date


def period_options(command):
    """Add one ``--<period>`` flag per named period to a command."""
    for period in reversed(PERIODS):
        label = period.replace("-", " ")
        command = click.option(
            f"--{period}",
            period.replace("-", "_"),
            is_flag=True,
            help=f"Use {label} as the date window",
        )(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates.

    ``period_flags`` maps period names (``this-month``) to whether the flag
    was given.
    """
    chosen = [period for period, is_set in period_flags.items() if is_set]

    if len(chosen) > 1:
        click.echo(
            "Error: Only one period option ("
            + ", ".join(f"--{p}" for p in period_flags)
            + ") can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if chosen and (start_date or end_date):
        click.echo(
            "Error: Period options (--this-month, --next-month, etc.) cannot be combined "
            "with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if chosen:
        return get_date_range(chosen[0])

    start = None
    end = None
    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start is None and end is None and default_range is not None:
        start, end = default_range

    return start, end


def period_flags_from_kwargs(kwargs: dict) -> dict[str, bool]:
    """Pop the period flags added by ``period_options`` out of command kwargs."""
    return {period: bool(kwargs.pop(period.replace("-", "_"), False)) for period in PERIODS}
