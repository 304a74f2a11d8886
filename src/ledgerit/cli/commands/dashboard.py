"""Dashboard command."""

import json
from dataclasses import asdict
from datetime import date
from decimal import Decimal
from enum import Enum

import click
from ledgerit.cli.error_handling import handle_domain_error
from ledgerit.cli.date_filters import period_flags_from_kwargs, period_options, resolve_cli_date_range
from ledgerit.domain.dashboard import DashboardAggregator
from ledgerit.domain.entities import DashboardSummary
from ledgerit.utils.date_parser import get_date_range


def _json_default(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def summary_to_json(summary: DashboardSummary) -> str:
    """Serialize a dashboard summary; amounts are decimal strings."""
    return json.dumps(asdict(summary), default=_json_default, indent=2)


def _echo_summary(summary: DashboardSummary) -> None:
    click.echo(f"\nDashboard {summary.start_date} to {summary.end_date}")
    click.echo("=" * 50)
    rows = [
        ("Income received", summary.total_credit),
        ("Income upcoming", summary.total_credit_upcoming),
        ("Expenses paid", summary.total_debit),
        ("Expenses unpaid", summary.total_debit_unpaid),
        ("Credit card", summary.total_credit_card),
        ("Credit card upcoming", summary.total_credit_card_upcoming),
    ]
    for label, total in rows:
        click.echo(f"{label:<28} {total:>15,.2f}")
    click.echo("-" * 50)
    click.echo(f"{'Balance':<28} {summary.balance:>15,.2f}")

    if summary.category_totals:
        click.echo("\nExpenses by category:")
        for item in summary.category_totals:
            click.echo(f"  {item.name:<26} {item.total:>15,.2f}")

    if summary.accounts:
        click.echo("\nAccounts:")
        for acc in summary.accounts:
            click.echo(f"  {acc.name:<26} {acc.balance:>15,.2f}")


@click.command("dashboard")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'this month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative)")
@period_options
@click.option("--json", "as_json", is_flag=True, help="Print the dashboard as JSON")
@click.pass_context
def dashboard(ctx, start_date: str | None, end_date: str | None, as_json: bool, **kwargs):
    """Show income, expense and credit card totals for a window.

    Scheduled recurring transactions are counted as upcoming. Defaults to
    the current month.

    Examples:
        ledgerit dashboard
        ledgerit dashboard --next-month
        ledgerit dashboard --start-date 2025-01-01 --end-date 2025-03-31 --json
    """
    db = ctx.obj["db"]
    aggregator = DashboardAggregator(db)

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags_from_kwargs(kwargs),
        default_range=get_date_range("this-month"),
    )
    if start is None or end is None:
        click.echo("Error: Both --start-date and --end-date are required.", err=True)
        ctx.exit(1)

    try:
        summary = aggregator.build_dashboard(start, end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if as_json:
        click.echo(summary_to_json(summary))
    else:
        _echo_summary(summary)


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
