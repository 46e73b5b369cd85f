"""Product aggregate.

Products live independently of withdrawals. They have their own lifecycle:
stock is adjusted, details are edited, and products are deactivated
rather than erased so withdrawal history keeps pointing at them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from stockroom.domain.exceptions import ValidationError


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product kept in the warehouse.

    Use ``Product.create()`` for new products; it enforces all
    invariants.  ``__init__`` stays simple so repositories can
    reconstitute persisted products without re-validating.

    Invariants:
    - ``stock`` and ``min_stock`` are never negative
    - ``name`` and ``category`` are never blank
    """

    id: int | None
    name: str
    category: str
    stock: int
    min_stock: int
    description: str = ""
    code: str = ""
    is_active: bool = True
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        name: str,
        category: str,
        stock: int,
        min_stock: int,
        description: str = "",
        code: str = "",
    ) -> Product:
        """Create a new product, enforcing all invariants."""
        product = Product(
            id=None,
            name=_require_text(name, "Product name is required"),
            category=_require_text(category, "Category is required"),
            stock=_require_non_negative(stock, "Stock"),
            min_stock=_require_non_negative(min_stock, "Minimum stock"),
            description=(description or "").strip(),
            code=(code or "").strip(),
        )
        return product

    # --- Derived state --------------------------------------------------------

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.min_stock

    @property
    def deficit(self) -> int:
        """How many units are missing to reach the minimum (may be negative)."""
        return self.min_stock - self.stock

    # --- Mutations ------------------------------------------------------------

    def update_details(
        self,
        name: str | None = None,
        category: str | None = None,
        stock: int | None = None,
        min_stock: int | None = None,
        description: str | None = None,
        code: str | None = None,
    ) -> None:
        """Apply a partial edit; ``None`` keeps the current value."""
        new_name = self.name if name is None else _require_text(
            name, "Product name is required"
        )
        new_category = self.category if category is None else _require_text(
            category, "Category is required"
        )
        new_stock = self.stock if stock is None else _require_non_negative(
            stock, "Stock"
        )
        new_min = self.min_stock if min_stock is None else _require_non_negative(
            min_stock, "Minimum stock"
        )

        self.name = new_name
        self.category = new_category
        self.stock = new_stock
        self.min_stock = new_min
        if description is not None:
            self.description = description.strip()
        if code is not None:
            self.code = code.strip()
        self.touch()

    def adjust_stock(self, delta: int) -> None:
        """Add (or subtract, with a negative delta) units of stock."""
        new_stock = self.stock + delta
        if new_stock < 0:
            raise ValidationError(
                f"Stock for {self.name} cannot be negative "
                f"(current {self.stock}, change {delta:+d})"
            )
        self.stock = new_stock
        self.touch()

    def deactivate(self) -> None:
        if not self.is_active:
            raise ValidationError(f"Product '{self.name}' is already inactive")
        self.is_active = False
        self.touch()

    def activate(self) -> None:
        if self.is_active:
            raise ValidationError(f"Product '{self.name}' is already active")
        self.is_active = True
        self.touch()

    def touch(self) -> None:
        self.updated_at = _now()


# --- Validation helpers -------------------------------------------------------


def _require_text(value: str, message: str) -> str:
    if not value or not value.strip():
        raise ValidationError(message)
    return value.strip()


def _require_non_negative(value: int, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{label} must be an integer")
    if value < 0:
        raise ValidationError(f"{label} cannot be negative")
    return value
