"""Commands that record new incomes, expenses and card purchases."""

import click
from ledgerit.cli.display import echo_transaction
from ledgerit.cli.error_handling import handle_domain_error
from ledgerit.cli.resolution import (
    parse_amount_or_exit,
    parse_date_or_exit,
    resolve_account_or_exit,
    resolve_card_or_exit,
    resolve_category_or_exit,
)
from ledgerit.domain.ledger import TransactionLedger


def _common_options(command):
    command = click.option("--description", required=True, help="Transaction description")(command)
    command = click.option(
        "--date",
        "txn_date",
        default="today",
        show_default=True,
        help="Transaction date (YYYY-MM-DD or relative like 'today', 'tomorrow')",
    )(command)
    command = click.option("--category", required=True, help="Category description or ID")(command)
    command = click.option("--account", required=True, help="Account name or ID")(command)
    command = click.option("--amount", required=True, help="Amount (e.g., 123.45 or $1,234.56)")(command)
    return command


@click.command("debit")
@_common_options
@click.option("--paid", is_flag=True, help="Record as already paid (moves the balance now)")
@click.option("--fixed", is_flag=True, help="Repeat every month on the same day")
@click.option("--day", "day_of_month", type=click.IntRange(1, 31), help="Day of month for a fixed transaction")
@click.option("--card", help="Credit card name or ID; records a card purchase")
@click.option("--installments", type=int, default=0, help="Split a card purchase into N monthly parts")
@click.pass_context
def add_debit(
    ctx,
    amount: str,
    account: str,
    category: str,
    txn_date: str,
    description: str,
    paid: bool,
    fixed: bool,
    day_of_month: int | None,
    card: str | None,
    installments: int,
):
    """Record an expense.

    Examples:
        ledgerit debit --amount 45.90 --account Checking --category Groceries --description "Market"
        ledgerit debit --amount 1200 --account Checking --category Housing --description Rent --fixed
        ledgerit debit --amount 1200 --account Checking --category Housing --description Rent --fixed --day 5
    """
    db = ctx.obj["db"]
    ledger = TransactionLedger(db)

    value = parse_amount_or_exit(ctx, amount)
    when = parse_date_or_exit(ctx, txn_date)
    account_id = resolve_account_or_exit(ctx, db, account)
    category_id = resolve_category_or_exit(ctx, db, category)
    card_id = resolve_card_or_exit(ctx, db, card) if card else None

    try:
        txn = ledger.create_debit(
            account_id=account_id,
            category_id=category_id,
            amount=value,
            date=when,
            description=description,
            fulfilled=paid,
            fixed=fixed,
            credit_card_id=card_id,
            installments=installments,
            day_of_month=day_of_month,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    echo_transaction(db, txn, heading="Created transaction")


@click.command("credit")
@_common_options
@click.option("--received", is_flag=True, help="Record as already received (moves the balance now)")
@click.option("--fixed", is_flag=True, help="Repeat every month on the same day")
@click.option("--day", "day_of_month", type=click.IntRange(1, 31), help="Day of month for a fixed transaction")
@click.pass_context
def add_credit(
    ctx,
    amount: str,
    account: str,
    category: str,
    txn_date: str,
    description: str,
    received: bool,
    fixed: bool,
    day_of_month: int | None,
):
    """Record an income.

    Examples:
        ledgerit credit --amount 5000 --account Checking --category Salary --description Salary --fixed
    """
    db = ctx.obj["db"]
    ledger = TransactionLedger(db)

    value = parse_amount_or_exit(ctx, amount)
    when = parse_date_or_exit(ctx, txn_date)
    account_id = resolve_account_or_exit(ctx, db, account)
    category_id = resolve_category_or_exit(ctx, db, category)

    try:
        txn = ledger.create_credit(
            account_id=account_id,
            category_id=category_id,
            amount=value,
            date=when,
            description=description,
            fulfilled=received,
            fixed=fixed,
            day_of_month=day_of_month,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    echo_transaction(db, txn, heading="Created transaction")


@click.command("card-purchase")
@_common_options
@click.option("--card", required=True, help="Credit card name or ID")
@click.option("--installments", type=int, default=0, help="Split into N monthly parts")
@click.option("--fixed", is_flag=True, help="Charge the card every month (subscription)")
@click.pass_context
def add_card_purchase(
    ctx,
    amount: str,
    account: str,
    category: str,
    txn_date: str,
    description: str,
    card: str,
    installments: int,
    fixed: bool,
):
    """Record a credit card purchase.

    The purchase is dated on the card's due date. With --installments the
    amount is split into equal monthly parts; the first one is shown.

    Examples:
        ledgerit card-purchase --card Visa --amount 300 --installments 3 \\
            --account Checking --category Electronics --description Headphones
    """
    db = ctx.obj["db"]
    ledger = TransactionLedger(db)

    value = parse_amount_or_exit(ctx, amount)
    when = parse_date_or_exit(ctx, txn_date)
    account_id = resolve_account_or_exit(ctx, db, account)
    category_id = resolve_category_or_exit(ctx, db, category)
    card_id = resolve_card_or_exit(ctx, db, card)

    try:
        txn = ledger.create_credit_card_purchase(
            credit_card_id=card_id,
            account_id=account_id,
            category_id=category_id,
            amount=value,
            date=when,
            description=description,
            installments=installments,
            fixed=fixed,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
    echo_transaction(db, txn, heading="Created transaction")
    if installments > 1:
        click.echo(f"  Installments: {installments} monthly parts")


def register_commands(cli):
    """Register transaction creation commands with main CLI."""
    cli.add_command(add_debit)
    cli.add_command(add_credit)
    cli.add_command(add_card_purchase)
