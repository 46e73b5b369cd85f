"""Category aggregate — a named bucket that products refer to by name."""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.exceptions import ValidationError


@dataclass
class Category:

    id: int | None
    name: str

    @staticmethod
    def create(name: str) -> Category:
        return Category(id=None, name=_clean_name(name))

    def rename(self, new_name: str) -> None:
        self.name = _clean_name(new_name)


def _clean_name(name: str) -> str:
    if not name or not name.strip():
        raise ValidationError("Category name is required")
    return name.strip()
