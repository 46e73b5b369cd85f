"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from stockroom.domain.exceptions import DuplicateNameError
from stockroom.domain.model.product import Product
from stockroom.domain.repository.category_repository import CategoryRepository
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.domain.service.category_resolution import resolve_category
from stockroom.domain.service.product_code import next_product_code

LOGGER = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(
        self,
        name: str,
        category: str,
        stock: int,
        min_stock: int,
        description: str = "",
    ) -> Product:
        """Add a new product to the warehouse.

        The product gets the next free ``PROD-NNNN`` code.
        """
        product = Product.create(
            name=name,
            category=category,
            stock=stock,
            min_stock=min_stock,
            description=description,
        )

        # Store the category's canonical spelling
        product.category = resolve_category(self._category_repo, product.category).name

        if self._product_repo.get_by_name(product.name) is not None:
            raise DuplicateNameError(
                f"An active product named '{product.name}' already exists"
            )

        product.code = next_product_code(
            self._product_repo.list_all() + self._product_repo.list_inactive()
        )
        self._product_repo.save(product)
        LOGGER.info("Product #%s '%s' added as %s", product.id, product.name, product.code)
        return product
