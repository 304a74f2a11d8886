"""Shared rendering of ledger entities for CLI output."""

import click
from ledgerit.domain.entities import Transaction, TransactionType, TransactionView


def format_amount(txn: Transaction | TransactionView) -> str:
    """Render an amount with its direction sign."""
    sign = "+" if txn.transaction_type == TransactionType.CREDIT else "-"
    return f"{sign}${txn.amount:,.2f}"


def status_label(txn: Transaction | TransactionView) -> str:
    if txn.fulfilled:
        return f"paid {txn.effectuated_date}" if txn.effectuated_date else "paid"
    return "pending"


def echo_transaction(db, txn: Transaction, heading: str = "Transaction") -> None:
    """Print one transaction with its related names."""
    account = db.get_account(txn.account_id)
    category = db.get_category(txn.category_id)

    click.echo(f"{heading} {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Type: {txn.transaction_type.value}")
    click.echo(f"  Amount: {format_amount(txn)}")
    click.echo(f"  Description: {txn.description}")
    click.echo(f"  Account: {account.name if account else txn.account_id}")
    click.echo(f"  Category: {category.description if category else txn.category_id}")
    if txn.credit_card_id is not None:
        card = db.get_credit_card(txn.credit_card_id)
        click.echo(f"  Credit card: {card.name if card else txn.credit_card_id}")
    if txn.recurring_transaction_id is not None:
        click.echo(f"  Recurring: {txn.recurring_transaction_id}")
    click.echo(f"  Status: {status_label(txn)}")


def echo_transaction_table(transactions: list[TransactionView]) -> None:
    """Print a compact table of transactions, virtual ones marked."""
    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(
        f"{'ID':<8} {'Date':<12} {'Amount':>13} {'Status':<18} {'Account':<16} "
        f"{'Category':<18} {'Description':<24}"
    )
    click.echo("-" * 110)
    for txn in transactions:
        txn_id = str(txn.id) if txn.id is not None else f"r{txn.recurring_transaction_id}"
        status = status_label(txn) + (" *" if txn.virtual else "")
        click.echo(
            f"{txn_id:<8} {str(txn.date):<12} {format_amount(txn):>13} {status:<18} "
            f"{txn.account_name[:16]:<16} {txn.category[:18]:<18} {txn.description[:24]:<24}"
        )
    if any(txn.virtual for txn in transactions):
        click.echo("* scheduled by a recurring transaction (rN = recurring ID)")
