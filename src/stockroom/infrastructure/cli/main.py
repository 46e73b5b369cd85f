import logging
from pathlib import Path

import click

from stockroom.domain.exceptions import DomainException
from stockroom.infrastructure.bootstrap import DEFAULT_DATA_DIR, AppContext, current_user
from stockroom.infrastructure.cli.category_commands import (
    category_add,
    category_delete,
    category_list,
    category_rename,
)
from stockroom.infrastructure.cli.product_commands import (
    product_activate,
    product_add,
    product_deactivate,
    product_list,
    product_search,
    product_stock,
    product_update,
)
from stockroom.infrastructure.cli.report_commands import report_low_stock, report_stats
from stockroom.infrastructure.cli.withdrawal_commands import (
    withdrawal_create,
    withdrawal_list,
    withdrawal_sections,
    withdrawal_show,
)

_LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_DATA_DIR,
    envvar="STOCKROOM_DATA_DIR",
    show_default=True,
    help="Directory holding the JSON data files.",
)
@click.option("--user-id", type=int, envvar="STOCKROOM_USER_ID", help="Signed-in user ID.")
@click.option("--user-name", envvar="STOCKROOM_USER_NAME", help="Signed-in user name.")
@click.option("--user-section", envvar="STOCKROOM_USER_SECTION", help="Signed-in user section.")
@click.option("-v", "--verbose", count=True, help="Increase log output (-v, -vv).")
@click.pass_context
def cli(
    ctx: click.Context,
    data_dir: Path,
    user_id: int | None,
    user_name: str | None,
    user_section: str | None,
    verbose: int,
) -> None:
    """Stockroom: warehouse inventory and withdrawals"""
    logging.basicConfig(
        level=_LOG_LEVELS.get(verbose, logging.DEBUG),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        user = current_user(user_id, user_name, user_section)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    ctx.obj = AppContext(data_dir=data_dir, user=user)


@cli.group()
def category() -> None:
    """Manage categories."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def withdrawal() -> None:
    """Record and review stock withdrawals."""


@cli.group()
def report() -> None:
    """Low-stock and usage reports."""


# Register subcommands
category.add_command(category_add)
category.add_command(category_list)
category.add_command(category_rename)
category.add_command(category_delete)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_update)
product.add_command(product_stock)
product.add_command(product_deactivate)
product.add_command(product_activate)
product.add_command(product_search)
withdrawal.add_command(withdrawal_create)
withdrawal.add_command(withdrawal_list)
withdrawal.add_command(withdrawal_show)
withdrawal.add_command(withdrawal_sections)
report.add_command(report_low_stock)
report.add_command(report_stats)
