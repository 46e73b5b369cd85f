"""JSON-file-backed implementation of ProductRepository.

Active and inactive products share one file; ``is_active`` tells them
apart.
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from stockroom.domain.model.product import Product
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.infrastructure.persistence.json_file import JsonFile


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        for raw in self._file.load():
            if raw["id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Product | None:
        for product in self.list_all():
            if product.name.lower() == name.lower():
                return product
        return None

    def list_all(self) -> list[Product]:
        return [p for p in self._load() if p.is_active]

    def list_inactive(self) -> list[Product]:
        return [p for p in self._load() if not p.is_active]

    def save(self, product: Product) -> None:
        self.save_many([product])

    def save_many(self, products: list[Product]) -> None:
        """Upsert several products with a single write."""
        records = self._file.load()
        for product in products:
            if product.id is None:
                product.id = self._file.next_id(records)
            for i, raw in enumerate(records):
                if raw["id"] == product.id:
                    records[i] = self.to_raw(product)
                    break
            else:
                records.append(self.to_raw(product))
        self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    def _load(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._file.load()]

    @staticmethod
    def to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "category": product.category,
            "stock": product.stock,
            "min_stock": product.min_stock,
            "code": product.code,
            "is_active": product.is_active,
            "created_at": product.created_at.isoformat(),
            "updated_at": product.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            category=raw["category"],
            stock=raw["stock"],
            min_stock=raw["min_stock"],
            code=raw.get("code", ""),
            is_active=raw.get("is_active", True),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
        )
