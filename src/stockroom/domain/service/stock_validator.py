"""Domain service: Stock Validator.

Decides whether a quantity of a product may be placed in the cart.
The ceiling is always the product's whole stock: whatever is already
in the cart is part of the same proposed total.
"""

from __future__ import annotations

from stockroom.domain.exceptions import InsufficientStock, InvalidQuantity
from stockroom.domain.model.product import Product


def validate_quantity(
    product: Product,
    requested_quantity: int,
    existing_cart_quantity: int = 0,
) -> int:
    """Return the accepted cart total for ``product``.

    Raises InvalidQuantity if ``requested_quantity`` is below 1 and
    InsufficientStock if the combined total exceeds ``product.stock``.
    Checks against the last-known local stock, which may be stale.
    """
    if requested_quantity < 1:
        raise InvalidQuantity(requested_quantity)

    total = existing_cart_quantity + requested_quantity
    if total > product.stock:
        raise InsufficientStock(
            product_name=product.name,
            requested=total,
            available=product.stock,
        )
    return total
