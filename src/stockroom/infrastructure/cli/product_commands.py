"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from stockroom.application.add_product import AddProductHandler
from stockroom.application.adjust_stock import AdjustStockHandler
from stockroom.application.product_status import (
    ActivateProductHandler,
    DeactivateProductHandler,
)
from stockroom.application.update_product import UpdateProductHandler
from stockroom.domain.exceptions import DomainException
from stockroom.domain.model.product import Product
from stockroom.domain.service.reporting import (
    ALL_CATEGORIES,
    filter_by_category,
    search_products,
)
from stockroom.infrastructure.bootstrap import (
    AppContext,
    category_repository,
    product_repository,
)


def _print_products(products: list[Product]) -> None:
    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Code':<10} {'Name':<24} {'Category':<18} {'Stock':>6} {'Min':>5}")
    click.echo("-" * 74)
    for p in products:
        flag = "  LOW" if p.is_low_stock else ""
        click.echo(
            f"{p.id:<6} {p.code:<10} {p.name:<24} {p.category:<18} "
            f"{p.stock:>6} {p.min_stock:>5}{flag}"
        )


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--category", required=True, help="Existing category name.")
@click.option("--stock", required=True, type=int, help="Units in stock.")
@click.option("--min-stock", required=True, type=int, help="Low-stock threshold.")
@click.option("--description", default="", help="Optional description.")
@click.pass_obj
def product_add(
    ctx: AppContext,
    name: str,
    category: str,
    stock: int,
    min_stock: int,
    description: str,
) -> None:
    """Add a new product."""
    handler = AddProductHandler(
        product_repo=product_repository(ctx.data_dir),
        category_repo=category_repository(ctx.data_dir),
    )

    try:
        product = handler.handle(
            name=name,
            category=category,
            stock=stock,
            min_stock=min_stock,
            description=description,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' ({product.code}) added "
        f"with {product.stock} in stock"
    )


@click.command("list")
@click.option("--category", default=ALL_CATEGORIES, show_default=True, help="Only this category.")
@click.option("--inactive", is_flag=True, default=False, help="List deactivated products.")
@click.pass_obj
def product_list(ctx: AppContext, category: str, inactive: bool) -> None:
    """List products."""
    repo = product_repository(ctx.data_dir)
    try:
        products = repo.list_inactive() if inactive else repo.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_products(filter_by_category(products, category))


@click.command("search")
@click.argument("query")
@click.pass_obj
def product_search(ctx: AppContext, query: str) -> None:
    """Find active products whose name contains QUERY."""
    try:
        products = product_repository(ctx.data_dir).list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_products(search_products(products, query))


@click.command("update")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--category", default=None, help="New category name.")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--min-stock", default=None, type=int, help="New low-stock threshold.")
@click.option("--description", default=None, help="New description.")
@click.option("--code", default=None, help="New internal code.")
@click.pass_obj
def product_update(
    ctx: AppContext,
    product_id: int,
    name: str | None,
    category: str | None,
    stock: int | None,
    min_stock: int | None,
    description: str | None,
    code: str | None,
) -> None:
    """Edit a product; omitted options keep their current value."""
    handler = UpdateProductHandler(
        product_repo=product_repository(ctx.data_dir),
        category_repo=category_repository(ctx.data_dir),
    )

    try:
        product = handler.handle(
            product_id,
            name=name,
            category=category,
            stock=stock,
            min_stock=min_stock,
            description=description,
            code=code,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' updated")


@click.command("stock")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Units to add (negative to remove).")
@click.pass_obj
def product_stock(ctx: AppContext, product_id: int, delta: int) -> None:
    """Adjust a product's stock by a signed amount."""
    handler = AdjustStockHandler(product_repo=product_repository(ctx.data_dir))

    try:
        new_stock = handler.handle(product_id, delta)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} stock is now {new_stock}")


@click.command("deactivate")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def product_deactivate(ctx: AppContext, product_id: int) -> None:
    """Hide a product from the active list, keeping its history."""
    handler = DeactivateProductHandler(product_repo=product_repository(ctx.data_dir))

    try:
        product = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' deactivated")


@click.command("activate")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.pass_obj
def product_activate(ctx: AppContext, product_id: int) -> None:
    """Bring a deactivated product back."""
    handler = ActivateProductHandler(product_repo=product_repository(ctx.data_dir))

    try:
        product = handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' activated")
