"""Category management commands."""

import click
from ledgerit.cli.error_handling import handle_domain_error
from ledgerit.cli.resolution import resolve_category_or_exit
from ledgerit.domain.category import CategoryService


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--all", "include_archived", is_flag=True, help="Include archived categories")
@click.pass_context
def list_categories(ctx, include_archived: bool):
    """List categories."""
    db = ctx.obj["db"]
    service = CategoryService(db)

    categories = service.list_categories(include_archived=include_archived)
    if not categories:
        click.echo("No categories found. Use 'category create' to add one.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        suffix = " [archived]" if cat.archived else ""
        click.echo(f"{cat.description} (ID: {cat.id}){suffix}")


@category_group.command("create")
@click.argument("description")
@click.pass_context
def create_category(ctx, description: str):
    """Create a new category.

    Examples:
        ledgerit category create "Groceries"
    """
    db = ctx.obj["db"]
    service = CategoryService(db)

    try:
        category_id = service.create_category(description=description)
        click.echo(f"Created category '{description.strip()}' (ID: {category_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("archive")
@click.argument("category", metavar="CATEGORY")
@click.pass_context
def archive_category(ctx, category: str):
    """Archive a category so new transactions can't use it.

    CATEGORY can be a description or ID. Existing transactions keep it.
    """
    db = ctx.obj["db"]
    service = CategoryService(db)
    category_id = resolve_category_or_exit(ctx, db, category)

    try:
        service.archive_category(category_id)
        click.echo(f"Archived category {category_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
