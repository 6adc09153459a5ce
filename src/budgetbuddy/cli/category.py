#!/usr/bin/env python3
"""
Category CLI - Household Category Commands
"""

import click

from ..categories.models import Category
from .context import get_app, report_errors


@click.group()
def category() -> None:
    """Manage spending categories."""
    pass


@category.command("list")
@click.option("--all", "include_archived", is_flag=True, help="Include archived categories")
@click.pass_context
@report_errors
def list_command(ctx: click.Context, include_archived: bool) -> None:
    """
    List household categories.

    Examples:
      budgetbuddy category list
      budgetbuddy category list --all
    """
    app = get_app(ctx)
    categories = app.categories.list_categories(include_archived=include_archived)

    if not categories:
        click.echo("No categories yet. Run 'budgetbuddy category setup-defaults' to create the default set.")
        return

    click.echo(f"Categories ({len(categories)}):")
    for cat in sorted(categories, key=lambda c: c.normalized_name):
        marker = " (archived)" if cat.is_archived else ""
        click.echo(f"  {cat.name:<20} {cat.color_hex}  {cat.icon:<12} {cat.id}{marker}")


@category.command()
@click.argument("name")
@click.option("--color", default="#007AFF", show_default=True, help="Hex color")
@click.option("--icon", default="tag", show_default=True, help="Icon name")
@click.pass_context
@report_errors
def add(ctx: click.Context, name: str, color: str, icon: str) -> None:
    """Create a category."""
    app = get_app(ctx)

    existing = app.categories.find_by_name(name, include_archived=True)
    if existing is not None:
        raise click.ClickException(f"Category '{existing.name}' already exists ({existing.id})")

    created = app.categories.create(Category(name=name.strip(), color_hex=color, icon=icon))
    click.echo(f"Created category {created.name} ({created.id})")


@category.command()
@click.argument("name_or_id")
@click.pass_context
@report_errors
def archive(ctx: click.Context, name_or_id: str) -> None:
    """Archive a category (hide it from budgets and listings)."""
    app = get_app(ctx)
    archived = app.categories.archive(app.resolve_category(name_or_id))
    click.echo(f"Archived category {archived.name}")


@category.command()
@click.argument("name_or_id")
@click.pass_context
@report_errors
def unarchive(ctx: click.Context, name_or_id: str) -> None:
    """Restore an archived category."""
    app = get_app(ctx)
    restored = app.categories.unarchive(app.resolve_category(name_or_id))
    click.echo(f"Restored category {restored.name}")


@category.command("setup-defaults")
@click.pass_context
@report_errors
def setup_defaults(ctx: click.Context) -> None:
    """Create the default categories for a household that has none."""
    app = get_app(ctx)
    created = app.categories.setup_defaults()

    if not created:
        click.echo("Household already has categories; nothing to do.")
        return

    click.echo(f"Created {len(created)} default categories:")
    for cat in created:
        click.echo(f"  {cat.name}")
