"""Application service: Show Low Stock use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.domain.service.reporting import (
    ALL_CATEGORIES,
    LowStockSortField,
    low_stock_products,
    sort_low_stock,
)


@dataclass(frozen=True)
class LowStockLineDTO:
    product_id: int
    code: str
    name: str
    category: str
    stock: int
    min_stock: int
    deficit: int


class ShowLowStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        search: str = "",
        category: str = ALL_CATEGORIES,
        sort_by: LowStockSortField = LowStockSortField.DEFICIT,
        descending: bool = True,
    ) -> list[LowStockLineDTO]:
        """Active products at or under their minimum stock.

        ``search`` matches name or description; ``category`` narrows to
        one category unless it is ``"all"``.
        """
        products = low_stock_products(self._product_repo.list_all())

        needle = search.strip().lower()
        if needle:
            products = [
                p for p in products
                if needle in p.name.lower() or needle in p.description.lower()
            ]
        if category != ALL_CATEGORIES:
            products = [p for p in products if p.category == category]

        return [
            LowStockLineDTO(
                product_id=p.id,  # type: ignore[arg-type]
                code=p.code,
                name=p.name,
                category=p.category,
                stock=p.stock,
                min_stock=p.min_stock,
                deficit=p.deficit,
            )
            for p in sort_low_stock(products, sort_by, descending)
        ]
