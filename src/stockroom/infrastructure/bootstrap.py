"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.value_objects import UserIdentity
from stockroom.infrastructure.persistence.json_category_repository import (
    JsonCategoryRepository,
)
from stockroom.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from stockroom.infrastructure.persistence.json_withdrawal_repository import (
    JsonWithdrawalRepository,
)

DEFAULT_DATA_DIR = Path("data")


@dataclass(frozen=True)
class AppContext:
    """Settings resolved once by the CLI root and handed to every command."""

    data_dir: Path
    user: UserIdentity | None


def product_repository(data_dir: Path) -> JsonProductRepository:
    return JsonProductRepository(data_dir / "products.json")


def category_repository(data_dir: Path) -> JsonCategoryRepository:
    return JsonCategoryRepository(data_dir / "categories.json")


def withdrawal_repository(data_dir: Path) -> JsonWithdrawalRepository:
    return JsonWithdrawalRepository(
        data_dir / "withdrawals.json", product_repository(data_dir)
    )


def current_user(
    user_id: int | None, name: str | None, section: str | None
) -> UserIdentity | None:
    """Build the operator identity, or None when none was configured."""
    if user_id is None and not name and not section:
        return None
    if user_id is None or not name or not section:
        raise ValidationError("User identity needs an id, a name and a section")
    return UserIdentity(id=user_id, name=name, section=section)
