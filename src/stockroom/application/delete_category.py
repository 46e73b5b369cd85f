"""Application service: Delete Category use case."""

from __future__ import annotations

from stockroom.domain.exceptions import EntityNotFoundError, ValidationError
from stockroom.domain.repository.category_repository import CategoryRepository
from stockroom.domain.repository.product_repository import ProductRepository


class DeleteCategoryHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(self, category_id: int) -> None:
        """Delete a category that no product uses any more."""
        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category #{category_id} not found")

        products = self._product_repo.list_all() + self._product_repo.list_inactive()
        in_use = sum(1 for p in products if p.category == category.name)
        if in_use:
            raise ValidationError(
                f"Cannot delete category '{category.name}': "
                f"{in_use} product(s) still use it"
            )

        self._category_repo.delete(category_id)
