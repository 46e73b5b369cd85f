"""Application services: Deactivate / Activate Product use cases.

Deactivated products drop out of the active list (and so out of the
cart and the low-stock report) but stay resolvable by ID so past
withdrawals still name them.
"""

from __future__ import annotations

from stockroom.domain.exceptions import DuplicateNameError, EntityNotFoundError
from stockroom.domain.model.product import Product
from stockroom.domain.repository.product_repository import ProductRepository


class DeactivateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int) -> Product:
        product = _get(self._product_repo, product_id)
        product.deactivate()
        self._product_repo.save(product)
        return product


class ActivateProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: int) -> Product:
        product = _get(self._product_repo, product_id)

        # Names are only unique among active products
        clash = self._product_repo.get_by_name(product.name)
        if clash is not None and clash.id != product.id:
            raise DuplicateNameError(
                f"An active product named '{product.name}' already exists"
            )

        product.activate()
        self._product_repo.save(product)
        return product


def _get(product_repo: ProductRepository, product_id: int) -> Product:
    product = product_repo.get_by_id(product_id)
    if product is None:
        raise EntityNotFoundError(f"Product #{product_id} not found")
    return product
