"""Cart aggregate — pending withdrawal lines for one session.

The cart is never persisted.  It holds at most one line per product
(adding the same product again merges quantities) and keeps lines in
the order they were first added.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator
from dataclasses import dataclass

from stockroom.domain.exceptions import EntityNotFoundError, InvalidQuantity
from stockroom.domain.model.product import Product
from stockroom.domain.service.stock_validator import validate_quantity


@dataclass
class CartItem:
    """One pending line: a product snapshot and how many units to take.

    ``product`` is a copy taken when the line was first added; it is what
    gets sent with the withdrawal, not a fresh read.
    """

    product_id: int
    quantity: int
    product: Product


class Cart:

    def __init__(self) -> None:
        self._items: dict[int, CartItem] = {}

    # --- Queries --------------------------------------------------------------

    @property
    def items(self) -> list[CartItem]:
        return list(self._items.values())

    def get(self, product_id: int) -> CartItem | None:
        return self._items.get(product_id)

    def quantity_of(self, product_id: int) -> int:
        item = self._items.get(product_id)
        return item.quantity if item is not None else 0

    def total_items(self) -> int:
        return sum(item.quantity for item in self._items.values())

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CartItem]:
        return iter(self.items)

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product: Product, quantity: int) -> CartItem:
        """Add ``quantity`` units of ``product``, merging with an existing line.

        On failure the cart is left exactly as it was.
        """
        if quantity <= 0:
            raise InvalidQuantity(quantity)

        existing = self._items.get(product.id)  # type: ignore[arg-type]
        if existing is not None:
            existing.quantity = validate_quantity(product, quantity, existing.quantity)
            return existing

        validate_quantity(product, quantity)
        item = CartItem(
            product_id=product.id,  # type: ignore[arg-type]
            quantity=quantity,
            product=dataclasses.replace(product),
        )
        self._items[item.product_id] = item
        return item

    def remove_item(self, product_id: int) -> None:
        """Drop the line for ``product_id``; absent lines are ignored."""
        self._items.pop(product_id, None)

    def update_quantity(
        self,
        product_id: int,
        quantity: int,
        live_product: Product | None = None,
    ) -> None:
        """Replace a line's quantity with an absolute value.

        A quantity of zero or less removes the line.  Otherwise the new
        quantity is checked against ``live_product.stock`` (falling back
        to the line's snapshot when no live product is given).
        """
        if quantity <= 0:
            self.remove_item(product_id)
            return

        item = self._items.get(product_id)
        if item is None:
            raise EntityNotFoundError(f"Product #{product_id} is not in the cart")

        reference = live_product if live_product is not None else item.product
        item.quantity = validate_quantity(reference, quantity)

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> list[CartItem]:
        """Deep copy of the current lines, for callers that need to compare."""
        return [dataclasses.replace(item, product=dataclasses.replace(item.product))
                for item in self._items.values()]
