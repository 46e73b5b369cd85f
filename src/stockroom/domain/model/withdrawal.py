"""Withdrawal aggregate — a confirmed removal of stock from the warehouse.

A withdrawal is created as a whole, with all its items, and is never
edited afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.product import Product
from stockroom.domain.model.value_objects import Quantity, UserIdentity


@dataclass(frozen=True)
class WithdrawalItem:
    """A withdrawn quantity of one product, with the product as it was sent."""

    product_id: int
    quantity: Quantity
    product: Product


@dataclass
class Withdrawal:
    """Aggregate root for stock withdrawals.

    ``registered_by`` is the signed-in user who recorded the withdrawal;
    ``withdrawer_name``/``withdrawer_section`` identify who took the items.

    Use ``Withdrawal.create()`` for new withdrawals.  ``total_items`` is
    fixed there as the sum of item quantities.
    """

    id: int | None
    items: list[WithdrawalItem]
    total_items: int
    registered_by: UserIdentity
    withdrawer_name: str
    withdrawer_section: str
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        registered_by: UserIdentity,
        withdrawer_name: str,
        withdrawer_section: str,
        items: list[WithdrawalItem],
        notes: str | None = None,
    ) -> Withdrawal:
        """Create a new withdrawal, enforcing all invariants."""
        if not withdrawer_name or not withdrawer_name.strip():
            raise ValidationError("Withdrawer name is required")
        if not withdrawer_section or not withdrawer_section.strip():
            raise ValidationError("Withdrawer section is required")
        if not items:
            raise ValidationError("A withdrawal must contain at least one item")

        return Withdrawal(
            id=None,
            items=list(items),
            total_items=sum(item.quantity.value for item in items),
            registered_by=registered_by,
            withdrawer_name=withdrawer_name.strip(),
            withdrawer_section=withdrawer_section.strip(),
            notes=notes.strip() if notes and notes.strip() else None,
        )

    def quantity_of(self, product_id: int) -> int:
        return sum(
            item.quantity.value for item in self.items if item.product_id == product_id
        )
