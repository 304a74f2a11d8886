"""Recurring transaction commands."""

import click
from ledgerit.cli.error_handling import handle_domain_error
from ledgerit.domain.ledger import TransactionLedger


@click.group()
def recurring_group():
    """Manage recurring (fixed monthly) transactions."""
    pass


@recurring_group.command("show")
@click.argument("recurring_id", type=int)
@click.pass_context
def show_recurring(ctx, recurring_id: int) -> None:
    """Show a recurring transaction and its stored occurrences."""
    db = ctx.obj["db"]
    ledger = TransactionLedger(db)

    template = ledger.get_recurring_transaction(recurring_id)
    if template is None:
        click.echo(f"Error: Recurring transaction {recurring_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"Recurring transaction {template.id}: {template.description}")
    click.echo(f"  Type: {template.transaction_type.value}")
    click.echo(f"  Amount: ${template.amount:,.2f}")
    click.echo(f"  Day of month: {template.day}")
    click.echo(f"  Starts: {template.start_date}")
    if template.credit_card_id is not None:
        click.echo(f"  Credit card: {template.credit_card_id}")
    if template.archived:
        click.echo("  Archived")

    occurrences = db.list_recurring_occurrences(template.id)
    if occurrences:
        click.echo("  Occurrences:")
        for txn in occurrences:
            status = f"paid {txn.effectuated_date}" if txn.fulfilled else "pending"
            click.echo(f"    {txn.id:<6} {txn.date}  ${txn.amount:,.2f}  {status}")


@recurring_group.command("archive")
@click.argument("recurring_id", type=int)
@click.pass_context
def archive_recurring(ctx, recurring_id: int) -> None:
    """Stop a recurring transaction. Stored occurrences are kept."""
    db = ctx.obj["db"]
    ledger = TransactionLedger(db)

    try:
        ledger.archive_recurring(recurring_id)
        click.echo(f"Archived recurring transaction {recurring_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register recurring transaction commands with main CLI."""
    cli.add_command(recurring_group, name="recurring")
