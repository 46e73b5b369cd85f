"""Application service: Add Category use case."""

from __future__ import annotations

from stockroom.domain.exceptions import DuplicateNameError
from stockroom.domain.model.category import Category
from stockroom.domain.repository.category_repository import CategoryRepository


class AddCategoryHandler:

    def __init__(self, category_repo: CategoryRepository) -> None:
        self._category_repo = category_repo

    def handle(self, name: str) -> Category:
        category = Category.create(name)
        if self._category_repo.get_by_name(category.name) is not None:
            raise DuplicateNameError(f"Category '{category.name}' already exists")
        self._category_repo.save(category)
        return category
