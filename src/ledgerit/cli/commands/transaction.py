"""Transaction management commands."""

import click
from ledgerit.cli.error_handling import handle_domain_error
from ledgerit.cli.date_filters import period_flags_from_kwargs, period_options, resolve_cli_date_range
from ledgerit.cli.display import echo_transaction, echo_transaction_table
from ledgerit.cli.resolution import (
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_account_or_exit,
    resolve_card_or_exit,
    resolve_category_or_exit,
)
from ledgerit.domain.ledger import TransactionLedger
from ledgerit.utils.date_parser import get_date_range


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int) -> None:
    """Show a transaction."""
    db = ctx.obj["db"]
    ledger = TransactionLedger(db)

    txn = ledger.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)
    echo_transaction(db, txn)


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'next month')")
@period_options
@click.pass_context
def list_transactions(ctx, start_date: str | None, end_date: str | None, **kwargs):
    """List transactions in a date window, newest first.

    Includes the scheduled occurrences of recurring transactions that have
    not been paid yet. Defaults to the current month.
    """
    db = ctx.obj["db"]
    ledger = TransactionLedger(db)

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
        transactions = ledger.list_transactions(start, end)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return
    echo_transaction_table(transactions)


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--category", help="Category description or ID")
@click.option("--card", help="Credit card name or ID, or empty string to clear")
@click.option("--date", "txn_date", help="Transaction date (YYYY-MM-DD or relative)")
@click.option("--amount", help="Transaction amount")
@click.option("--description", help="Transaction description")
@click.option(
    "--propagate",
    is_flag=True,
    help="Also change the recurring transaction so future months follow",
)
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    category: str | None,
    card: str | None,
    txn_date: str | None,
    amount: str | None,
    description: str | None,
    propagate: bool,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided. Use --card "" to clear the card.

    Examples:
        ledgerit transaction update 1 --amount 75.00
        ledgerit transaction update 7 --amount 1300 --propagate
    """
    db = ctx.obj["db"]
    ledger = TransactionLedger(db)

    account_id = resolve_account_or_exit(ctx, db, account) if account is not None else None
    category_id = resolve_category_or_exit(ctx, db, category) if category is not None else None

    card_id = None
    clear_card = False
    if card is not None:
        if card == "":
            clear_card = True
        else:
            card_id = resolve_card_or_exit(ctx, db, card)

    when = parse_date_or_exit(ctx, txn_date) if txn_date is not None else None
    value = parse_amount_or_exit(ctx, amount) if amount is not None else None

    try:
        ledger.update(
            transaction_id,
            account_id=account_id,
            credit_card_id=card_id,
            category_id=category_id,
            date=when,
            description=description,
            amount=value,
            clear_credit_card=clear_card,
            propagate_to_recurring=propagate,
        )
        click.echo(f"Updated transaction {transaction_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@transaction_group.command("effectuate")
@click.argument("transaction_id", type=int, required=False)
@click.option("--recurring", "recurring_id", type=int, help="Recurring transaction ID to pay this month")
@click.option("--amount", help="Amount actually paid (defaults to the scheduled amount)")
@click.option("--date", "paid_date", default="today", show_default=True, help="Payment date")
@click.option("--occurrence", help="Scheduled date of the recurring occurrence being paid")
@click.pass_context
def effectuate_transaction(
    ctx,
    transaction_id: int | None,
    recurring_id: int | None,
    amount: str | None,
    paid_date: str,
    occurrence: str | None,
) -> None:
    """Mark a transaction as paid and update the account balance.

    Give either a TRANSACTION_ID or --recurring for a scheduled occurrence
    that has no transaction yet.

    Examples:
        ledgerit transaction effectuate 12
        ledgerit transaction effectuate --recurring 3 --amount 1250.00
    """
    db = ctx.obj["db"]
    ledger = TransactionLedger(db)

    value = parse_amount_or_exit(ctx, amount) if amount is not None else None
    paid_on = parse_date_or_exit(ctx, paid_date, label="payment date")
    occurrence_on = (
        parse_date_or_exit(ctx, occurrence, label="occurrence date") if occurrence else None
    )

    try:
        txn = ledger.effectuate(
            transaction_id=transaction_id,
            recurring_transaction_id=recurring_id,
            amount=value,
            effectuated_date=paid_on,
            occurrence_date=occurrence_on,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    echo_transaction(db, txn, heading="Effectuated transaction")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction.

    Deleting a paid transaction gives its amount back to the account.

    Examples:
        ledgerit transaction delete 1
    """
    db = ctx.obj["db"]
    ledger = TransactionLedger(db)

    txn = ledger.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id} ({txn.description})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        ledger.delete(transaction_id)
        click.echo(f"Deleted transaction {transaction_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
