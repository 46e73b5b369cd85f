"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.model.withdrawal import Withdrawal


@dataclass(frozen=True)
class WithdrawalItemSpec:
    """Input: what the withdrawer asked for (product name + quantity)."""

    product_name: str
    quantity: int


@dataclass(frozen=True)
class WithdrawalItemDTO:
    """Output: a single withdrawn line as displayed to the user."""

    product_id: int
    product_name: str
    category: str
    quantity: int


@dataclass(frozen=True)
class WithdrawalDTO:
    """Output: a complete withdrawal as displayed to the user."""

    id: int
    registered_by: str
    registered_by_section: str
    withdrawer_name: str
    withdrawer_section: str
    notes: str | None
    items: list[WithdrawalItemDTO]
    total_items: int
    created_at: str

    @staticmethod
    def from_domain(withdrawal: Withdrawal) -> WithdrawalDTO:
        return WithdrawalDTO(
            id=withdrawal.id,  # type: ignore[arg-type]
            registered_by=withdrawal.registered_by.name,
            registered_by_section=withdrawal.registered_by.section,
            withdrawer_name=withdrawal.withdrawer_name,
            withdrawer_section=withdrawal.withdrawer_section,
            notes=withdrawal.notes,
            items=[
                WithdrawalItemDTO(
                    product_id=item.product_id,
                    product_name=item.product.name,
                    category=item.product.category,
                    quantity=item.quantity.value,
                )
                for item in withdrawal.items
            ],
            total_items=withdrawal.total_items,
            created_at=withdrawal.created_at.strftime("%Y-%m-%d %H:%M UTC"),
        )
