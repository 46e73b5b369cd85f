"""Application service: Update Product use case."""

from __future__ import annotations

from stockroom.domain.exceptions import DuplicateNameError, EntityNotFoundError
from stockroom.domain.model.product import Product
from stockroom.domain.repository.category_repository import CategoryRepository
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.domain.service.category_resolution import resolve_category


class UpdateProductHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        category_repo: CategoryRepository,
    ) -> None:
        self._product_repo = product_repo
        self._category_repo = category_repo

    def handle(
        self,
        product_id: int,
        name: str | None = None,
        category: str | None = None,
        stock: int | None = None,
        min_stock: int | None = None,
        description: str | None = None,
        code: str | None = None,
    ) -> Product:
        """Edit a product; fields left as None keep their current value.

        Past withdrawals are not affected; they hold their own snapshot
        of the product.
        """
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        resolved = resolve_category(
            self._category_repo, category if category is not None else product.category
        )

        if name is not None:
            clash = self._product_repo.get_by_name(name.strip())
            if clash is not None and clash.id != product.id:
                raise DuplicateNameError(
                    f"An active product named '{name.strip()}' already exists"
                )

        product.update_details(
            name=name,
            category=resolved.name,
            stock=stock,
            min_stock=min_stock,
            description=description,
            code=code,
        )
        self._product_repo.save(product)
        return product
