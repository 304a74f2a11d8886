"""CLI error handling helpers."""

import click

from ledgerit.domain.errors import DomainError, InternalError
from ledgerit.logging_setup import get_logger

logger = get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    Storage failures are logged with their cause; the user only sees the
    message.
    """
    if isinstance(error, InternalError):
        logger.error("command failed: %s", error, exc_info=error.__cause__ is not None)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
