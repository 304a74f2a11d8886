"""Account management commands."""

import click
from ledgerit.cli.error_handling import handle_domain_error
from ledgerit.cli.resolution import resolve_account_or_exit
from ledgerit.domain.account import AccountService


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(["personal", "business"], case_sensitive=False),
    default="personal",
    show_default=True,
    help="Account type",
)
@click.pass_context
def create_account(ctx, name: str, account_type: str):
    """Create a new account with a zero balance.

    Examples:
        ledgerit account create "Checking"
        ledgerit account create "Company" --type business
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    try:
        account_id = service.create_account(name=name, account_type=account_type.lower())
        click.echo(f"Created account '{name.strip()}' (ID: {account_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their balances."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {acc.account_type.value:8s} | "
            f"Balance: ${acc.balance:,.2f}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str) -> None:
    """Show an account and its balance.

    ACCOUNT can be an account name or ID.
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, db, account)
    acc = service.require_account(account_id)

    click.echo(f"Account {acc.id}: {acc.name}")
    click.echo(f"  Type: {acc.account_type.value}")
    click.echo(f"  Balance: ${acc.balance:,.2f}")
    click.echo(f"  Created: {acc.created_at:%Y-%m-%d %H:%M}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no transaction or recurring
    transaction references it.

    Examples:
        ledgerit account delete "Checking"
        ledgerit account delete 1 --yes
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, db, account)
    account_obj = service.require_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
        click.echo(f"Deleted account '{account_obj.name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
