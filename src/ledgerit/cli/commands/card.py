"""Credit card management commands."""

import click
from ledgerit.cli.error_handling import handle_domain_error
from ledgerit.cli.resolution import resolve_card_or_exit
from ledgerit.domain.credit_card import CreditCardService


@click.group()
def card_group():
    """Manage credit cards."""
    pass


@card_group.command("create")
@click.argument("name", metavar="CARD_NAME")
@click.option("--closing-day", type=int, required=True, help="Day of month the statement closes")
@click.option("--due-day", type=int, required=True, help="Day of month the statement is due")
@click.pass_context
def create_card(ctx, name: str, closing_day: int, due_day: int):
    """Create a credit card.

    Purchases made before the closing day are billed on the due day of the
    same month; later purchases move to the next month.

    Examples:
        ledgerit card create "Visa" --closing-day 10 --due-day 16
    """
    db = ctx.obj["db"]
    service = CreditCardService(db)

    try:
        card_id = service.create_credit_card(name=name, closing_day=closing_day, due_day=due_day)
        click.echo(f"Created credit card '{name.strip()}' (ID: {card_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@card_group.command("list")
@click.option("--all", "include_archived", is_flag=True, help="Include archived cards")
@click.pass_context
def list_cards(ctx, include_archived: bool):
    """List credit cards."""
    db = ctx.obj["db"]
    service = CreditCardService(db)

    cards = service.list_credit_cards(include_archived=include_archived)
    if not cards:
        click.echo("No credit cards found.")
        return

    click.echo("\nCredit cards:")
    click.echo("-" * 60)
    for card in cards:
        suffix = " [archived]" if card.archived else ""
        click.echo(
            f"ID: {card.id:3d} | {card.name:20s} | closes {card.closing_day:2d} | "
            f"due {card.due_day:2d}{suffix}"
        )


@card_group.command("show")
@click.argument("card", metavar="CARD")
@click.pass_context
def show_card(ctx, card: str):
    """Show a credit card. CARD can be a name or ID."""
    db = ctx.obj["db"]
    service = CreditCardService(db)
    card_id = resolve_card_or_exit(ctx, db, card)
    card_obj = service.require_credit_card(card_id)

    click.echo(f"Credit card {card_obj.id}: {card_obj.name}")
    click.echo(f"  Closing day: {card_obj.closing_day}")
    click.echo(f"  Due day: {card_obj.due_day}")
    if card_obj.archived:
        click.echo("  Archived")


@card_group.command("archive")
@click.argument("card", metavar="CARD")
@click.pass_context
def archive_card(ctx, card: str):
    """Archive a credit card so it can't take new purchases."""
    db = ctx.obj["db"]
    service = CreditCardService(db)
    card_id = resolve_card_or_exit(ctx, db, card)

    try:
        service.archive_credit_card(card_id)
        click.echo(f"Archived credit card {card_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register credit card commands with main CLI."""
    cli.add_command(card_group, name="card")
