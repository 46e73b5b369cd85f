"""Application service: Rename Category use case.

Products point at categories by name, so every product that used the
old name is moved to the new one.
"""

from __future__ import annotations

from stockroom.domain.exceptions import DuplicateNameError, EntityNotFoundError
from stockroom.domain.model.category import Category
from stockroom.domain.repository.category_repository import CategoryRepository
from stockroom.domain.repository.product_repository import ProductRepository


class RenameCategoryHandler:

    def __init__(
        self,
        category_repo: CategoryRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._category_repo = category_repo
        self._product_repo = product_repo

    def handle(self, category_id: int, new_name: str) -> Category:
        category = self._category_repo.get_by_id(category_id)
        if category is None:
            raise EntityNotFoundError(f"Category #{category_id} not found")

        old_name = category.name
        category.rename(new_name)

        clash = self._category_repo.get_by_name(category.name)
        if clash is not None and clash.id != category.id:
            raise DuplicateNameError(f"Category '{category.name}' already exists")

        self._category_repo.save(category)

        for product in self._product_repo.list_all() + self._product_repo.list_inactive():
            if product.category == old_name:
                product.category = category.name
                self._product_repo.save(product)

        return category
