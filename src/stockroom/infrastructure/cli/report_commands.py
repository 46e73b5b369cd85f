"""CLI commands for reports."""

from __future__ import annotations

import click

from stockroom.application.show_low_stock import ShowLowStockHandler
from stockroom.application.show_statistics import DistributionLineDTO, ShowStatisticsHandler
from stockroom.domain.exceptions import DomainException
from stockroom.domain.service.reporting import (
    ALL_CATEGORIES,
    LowStockSortField,
    ReportPeriod,
)
from stockroom.infrastructure.bootstrap import (
    AppContext,
    product_repository,
    withdrawal_repository,
)

_BAR_WIDTH = 20


def _bar(ratio: float) -> str:
    return "#" * round(ratio * _BAR_WIDTH)


def _print_distribution(title: str, lines: list[DistributionLineDTO]) -> None:
    click.echo(title)
    if not lines:
        click.echo("  (none)")
        return
    for line in lines:
        click.echo(f"  {line.label:<24} {line.count:>5}  {_bar(line.ratio)}")


@click.command("low-stock")
@click.option("--search", default="", help="Match on name or description.")
@click.option("--category", default=ALL_CATEGORIES, show_default=True, help="Only this category.")
@click.option(
    "--sort",
    "sort_by",
    type=click.Choice([f.value for f in LowStockSortField]),
    default=LowStockSortField.DEFICIT.value,
    show_default=True,
)
@click.option("--asc", is_flag=True, default=False, help="Sort ascending.")
@click.pass_obj
def report_low_stock(
    ctx: AppContext, search: str, category: str, sort_by: str, asc: bool
) -> None:
    """Show products at or below their minimum stock."""
    handler = ShowLowStockHandler(product_repo=product_repository(ctx.data_dir))

    try:
        lines = handler.handle(
            search=search,
            category=category,
            sort_by=LowStockSortField(sort_by),
            descending=not asc,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No products are low on stock.")
        return

    click.echo(f"{'Code':<10} {'Name':<24} {'Category':<18} {'Stock':>6} {'Min':>5} {'Deficit':>8}")
    click.echo("-" * 74)
    for line in lines:
        click.echo(
            f"{line.code:<10} {line.name:<24} {line.category:<18} "
            f"{line.stock:>6} {line.min_stock:>5} {line.deficit:>8}"
        )


@click.command("stats")
@click.option(
    "--period",
    type=click.Choice([p.value for p in ReportPeriod]),
    default=ReportPeriod.MONTH.value,
    show_default=True,
)
@click.pass_obj
def report_stats(ctx: AppContext, period: str) -> None:
    """Show inventory and withdrawal statistics."""
    handler = ShowStatisticsHandler(
        product_repo=product_repository(ctx.data_dir),
        withdrawal_repo=withdrawal_repository(ctx.data_dir),
    )

    try:
        stats = handler.handle(ReportPeriod(period))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Products:           {stats.total_products}")
    click.echo(f"Low stock:          {stats.low_stock_count}")
    click.echo(f"Withdrawals ({stats.period}): {stats.total_withdrawals}")
    click.echo(f"Items withdrawn:    {stats.total_items_withdrawn}")
    click.echo()
    _print_distribution("Top categories", stats.top_categories)
    click.echo()
    click.echo("Most withdrawn products")
    if not stats.top_products:
        click.echo("  (none)")
    for top in stats.top_products:
        suffix = "" if top.is_active is not False else "  (inactive)"
        click.echo(f"  {top.name:<24} {top.quantity:>5}{suffix}")
    click.echo()
    _print_distribution("Withdrawals by section", stats.sections)
