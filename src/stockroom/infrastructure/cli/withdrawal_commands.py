"""CLI commands for the Withdrawal aggregate."""

from __future__ import annotations

from datetime import datetime

import click

from stockroom.application.confirm_withdrawal import ConfirmWithdrawalHandler
from stockroom.application.dto import WithdrawalDTO, WithdrawalItemSpec
from stockroom.application.session import WithdrawalSession
from stockroom.application.show_withdrawals import (
    ListWithdrawalsHandler,
    ShowWithdrawalHandler,
)
from stockroom.domain.exceptions import DomainException
from stockroom.domain.model.value_objects import KNOWN_SECTIONS
from stockroom.infrastructure.bootstrap import (
    AppContext,
    product_repository,
    withdrawal_repository,
)


def _parse_items(raw: str) -> list[WithdrawalItemSpec]:
    """Parse 'Paper:3,Toner:1' into WithdrawalItemSpec list."""
    specs: list[WithdrawalItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductName:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{name}'."
            )
        specs.append(WithdrawalItemSpec(product_name=name.strip(), quantity=qty))
    return specs


def _display_withdrawal(dto: WithdrawalDTO) -> None:
    click.echo(f"Withdrawal #{dto.id}  ({dto.created_at})")
    click.echo(f"Withdrawn by:  {dto.withdrawer_name} ({dto.withdrawer_section})")
    click.echo(f"Registered by: {dto.registered_by} ({dto.registered_by_section})")
    if dto.notes:
        click.echo(f"Notes: {dto.notes}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Category':<18} {'Qty':>5}")
    click.echo(f"  {'-'*49}")
    for item in dto.items:
        click.echo(f"  {item.product_name:<24} {item.category:<18} {item.quantity:>5}")
    click.echo(f"  {'-'*49}")
    click.echo(f"  {'Total items':<43} {dto.total_items:>5}")


@click.command("create")
@click.option("--items", required=True, help="Items as 'Product:Qty,Product:Qty'.")
@click.option("--withdrawer", required=True, help="Name of the person taking the items.")
@click.option("--section", required=True, help="Section of the person taking the items.")
@click.option("--notes", default=None, help="Optional notes.")
@click.pass_obj
def withdrawal_create(
    ctx: AppContext,
    items: str,
    withdrawer: str,
    section: str,
    notes: str | None,
) -> None:
    """Record a withdrawal and deduct its items from stock."""
    specs = _parse_items(items)

    withdrawal_repo = withdrawal_repository(ctx.data_dir)
    session = WithdrawalSession(
        product_repo=product_repository(ctx.data_dir),
        withdrawal_repo=withdrawal_repo,
    )
    handler = ConfirmWithdrawalHandler(session, withdrawal_repo)

    try:
        session.load()
        session.add_specs_to_cart(specs)
        dto = handler.handle(
            withdrawer_name=withdrawer,
            withdrawer_section=section,
            notes=notes,
            current_user=ctx.user,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_withdrawal(dto)


@click.command("list")
@click.option("--from", "start", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="First day to include (YYYY-MM-DD).")
@click.option("--to", "end", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Last day to include (YYYY-MM-DD).")
@click.option("--limit", type=click.IntRange(min=0), default=None,
              help="Only the N most recent withdrawals.")
@click.pass_obj
def withdrawal_list(
    ctx: AppContext, start: datetime | None, end: datetime | None, limit: int | None
) -> None:
    """List withdrawals, newest first."""
    handler = ListWithdrawalsHandler(withdrawal_repo=withdrawal_repository(ctx.data_dir))

    try:
        dtos = handler.handle(
            start=start.date() if start else None,
            end=end.date() if end else None,
            limit=limit,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No withdrawals found.")
        return

    click.echo(f"{'ID':<6} {'Date':<21} {'Withdrawer':<22} {'Section':<22} {'Items':>6}")
    click.echo("-" * 80)
    for dto in dtos:
        click.echo(
            f"{dto.id:<6} {dto.created_at:<21} {dto.withdrawer_name:<22} "
            f"{dto.withdrawer_section:<22} {dto.total_items:>6}"
        )
    click.echo("-" * 80)
    click.echo(f"{len(dtos)} withdrawals, {sum(d.total_items for d in dtos)} items, "
               f"{len({d.withdrawer_name for d in dtos})} people")


@click.command("show")
@click.option("--id", "withdrawal_id", required=True, type=int, help="Withdrawal ID.")
@click.pass_obj
def withdrawal_show(ctx: AppContext, withdrawal_id: int) -> None:
    """Show details of a withdrawal."""
    handler = ShowWithdrawalHandler(withdrawal_repo=withdrawal_repository(ctx.data_dir))

    try:
        dto = handler.handle(withdrawal_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_withdrawal(dto)


@click.command("sections")
def withdrawal_sections() -> None:
    """List the organisation's known sections."""
    for section in KNOWN_SECTIONS:
        click.echo(section)
