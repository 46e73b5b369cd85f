"""Domain service: resolve a category name to an existing Category.

Products refer to their category by name.  Every add or update goes
through this lookup so a mistyped name fails loudly instead of creating
a dangling reference.
"""

from __future__ import annotations

from stockroom.domain.exceptions import CategoryNotFound
from stockroom.domain.model.category import Category
from stockroom.domain.repository.category_repository import CategoryRepository


def resolve_category(category_repo: CategoryRepository, name: str) -> Category:
    category = category_repo.get_by_name(name.strip()) if name else None
    if category is None:
        raise CategoryNotFound(name)
    return category
