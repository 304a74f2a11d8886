"""Main CLI entry point."""

import click
from ledgerit.database.factories import create_database, create_sqlite_database
from ledgerit.domain.errors import DomainError
from ledgerit.logging_setup import configure_logging

# Import and register all commands at module level
from ledgerit.cli.commands import (
    account,
    category,
    card,
    add,
    transaction,
    recurring,
    dashboard,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides LEDGERIT_DB_PATH environment variable)",
    envvar="LEDGERIT_DB_PATH",
)
@click.option(
    "--database-url",
    help="SQLAlchemy database URL; takes precedence over --db-path",
    envvar="LEDGERIT_DATABASE_URL",
)
@click.option(
    "--short-month-policy",
    type=click.Choice(["clamp", "skip"], case_sensitive=False),
    help="How recurring days missing from a month are handled (default: clamp)",
    envvar="LEDGERIT_SHORT_MONTH_POLICY",
)
@click.option(
    "--log-level",
    help="Log level (DEBUG, INFO, WARNING, ERROR); default WARNING",
    envvar="LEDGERIT_LOG_LEVEL",
)
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    database_url: str | None,
    short_month_policy: str | None,
    log_level: str | None,
):
    """Ledgerit - Personal finance ledger.

    Record incomes and expenses, fixed monthly transactions and credit card
    purchases (with installments), then settle them as they are paid.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            if database_url:
                db = create_database(database_url, short_month_policy=short_month_policy)
            else:
                db = create_sqlite_database(
                    database_path=db_path, short_month_policy=short_month_policy
                )
        except DomainError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
category.register_commands(cli)
card.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
recurring.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
