"""JSON-file-backed implementation of CategoryRepository."""

from __future__ import annotations

from pathlib import Path

from stockroom.domain.model.category import Category
from stockroom.domain.repository.category_repository import CategoryRepository
from stockroom.infrastructure.persistence.json_file import JsonFile


class JsonCategoryRepository(CategoryRepository):

    def __init__(self, file_path: Path) -> None:
        self._file = JsonFile(file_path)

    # --- CategoryRepository interface -----------------------------------------

    def get_by_id(self, category_id: int) -> Category | None:
        for raw in self._file.load():
            if raw["id"] == category_id:
                return self._to_domain(raw)
        return None

    def get_by_name(self, name: str) -> Category | None:
        for raw in self._file.load():
            if raw["name"].lower() == name.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Category]:
        categories = [self._to_domain(raw) for raw in self._file.load()]
        return sorted(categories, key=lambda c: c.name.lower())

    def save(self, category: Category) -> None:
        records = self._file.load()
        if category.id is None:
            category.id = self._file.next_id(records)

        for i, raw in enumerate(records):
            if raw["id"] == category.id:
                records[i] = self._to_raw(category)
                break
        else:
            records.append(self._to_raw(category))
        self._file.persist(records)

    def delete(self, category_id: int) -> None:
        records = [raw for raw in self._file.load() if raw["id"] != category_id]
        self._file.persist(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(category: Category) -> dict:
        return {"id": category.id, "name": category.name}

    @staticmethod
    def _to_domain(raw: dict) -> Category:
        return Category(id=raw["id"], name=raw["name"])
