"""CLI commands for the Category aggregate."""

from __future__ import annotations

import click

from stockroom.application.add_category import AddCategoryHandler
from stockroom.application.delete_category import DeleteCategoryHandler
from stockroom.application.rename_category import RenameCategoryHandler
from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.bootstrap import (
    AppContext,
    category_repository,
    product_repository,
)


@click.command("add")
@click.option("--name", required=True, help="Category name.")
@click.pass_obj
def category_add(ctx: AppContext, name: str) -> None:
    """Add a new category."""
    handler = AddCategoryHandler(category_repo=category_repository(ctx.data_dir))

    try:
        category = handler.handle(name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{category.id} '{category.name}' added")


@click.command("list")
@click.pass_obj
def category_list(ctx: AppContext) -> None:
    """List all categories."""
    try:
        categories = category_repository(ctx.data_dir).list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not categories:
        click.echo("No categories found.")
        return

    click.echo(f"{'ID':<6} {'Name':<30}")
    click.echo("-" * 37)
    for c in categories:
        click.echo(f"{c.id:<6} {c.name:<30}")


@click.command("rename")
@click.option("--id", "category_id", required=True, type=int, help="Category ID.")
@click.option("--name", required=True, help="New category name.")
@click.pass_obj
def category_rename(ctx: AppContext, category_id: int, name: str) -> None:
    """Rename a category (its products follow)."""
    handler = RenameCategoryHandler(
        category_repo=category_repository(ctx.data_dir),
        product_repo=product_repository(ctx.data_dir),
    )

    try:
        category = handler.handle(category_id, name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{category.id} renamed to '{category.name}'")


@click.command("delete")
@click.option("--id", "category_id", required=True, type=int, help="Category ID.")
@click.pass_obj
def category_delete(ctx: AppContext, category_id: int) -> None:
    """Delete a category that has no products."""
    handler = DeleteCategoryHandler(
        category_repo=category_repository(ctx.data_dir),
        product_repo=product_repository(ctx.data_dir),
    )

    try:
        handler.handle(category_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Category #{category_id} deleted.")
