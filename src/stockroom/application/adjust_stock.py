"""Application service: Adjust Stock use case.

Applies a signed delta to an active product's stock (restocking or a
manual correction).  Withdrawals do not go through here.
"""

from __future__ import annotations

import logging

from stockroom.domain.exceptions import EntityNotFoundError
from stockroom.domain.repository.product_repository import ProductRepository

LOGGER = logging.getLogger(__name__)


class AdjustStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int, delta: int) -> int:
        """Return the product's new stock."""
        product = self._product_repo.get_by_id(product_id)
        if product is None or not product.is_active:
            raise EntityNotFoundError(f"Product #{product_id} not found or inactive")

        product.adjust_stock(delta)
        self._product_repo.save(product)
        LOGGER.info("Stock of '%s' adjusted by %+d to %d", product.name, delta, product.stock)
        return product.stock
