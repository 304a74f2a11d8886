"""CLI helpers that turn command-line values into IDs, dates and amounts."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import click
from ledgerit.cli.error_handling import handle_domain_error
from ledgerit.domain.account import AccountService
from ledgerit.domain.category import CategoryService
from ledgerit.domain.credit_card import CreditCardService
from ledgerit.utils.amount_parser import parse_positive_amount
from ledgerit.utils.date_parser import parse_date
from ledgerit.utils.resolvers import resolve_account, resolve_category, resolve_credit_card


def resolve_account_or_exit(ctx: click.Context, db, account: str | int) -> int:
    """Resolve account name or ID, or exit with a CLI error."""
    try:
        return resolve_account(AccountService(db), account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_category_or_exit(ctx: click.Context, db, category: str | int) -> int:
    """Resolve category description or ID, or exit with a CLI error."""
    try:
        return resolve_category(CategoryService(db), category)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_card_or_exit(ctx: click.Context, db, card: str | int) -> int:
    """Resolve credit card name or ID, or exit with a CLI error."""
    try:
        return resolve_credit_card(CreditCardService(db), card)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def parse_date_or_exit(ctx: click.Context, value: str, label: str = "date") -> date:
    """Parse a date option, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def parse_amount_or_exit(ctx: click.Context, value: str) -> Decimal:
    """Parse a positive amount option, or exit with a CLI error."""
    try:
        return parse_positive_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid amount: {e}", err=True)
        ctx.exit(1)
