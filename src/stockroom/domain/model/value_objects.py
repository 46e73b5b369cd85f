"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass

from stockroom.domain.exceptions import InvalidQuantity, ValidationError


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot withdraw zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise InvalidQuantity(self.value)

    def __add__(self, other: Quantity) -> Quantity:
        return Quantity(self.value + other.value)

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class UserIdentity:
    """The signed-in user who registers a withdrawal.

    Distinct from the *withdrawer*, who is the person physically taking
    the items and is recorded as free text.
    """

    id: int
    name: str
    section: str

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise ValidationError("User name is required")
        if not self.section or not self.section.strip():
            raise ValidationError("User section is required")

    def __str__(self) -> str:
        return f"{self.name} ({self.section})"


# Sections of the organisation, offered as suggestions when recording who
# withdrew items.  The withdrawer section itself stays free text.
KNOWN_SECTIONS = (
    "Ambientes Virtuales",
    "Ayudantía",
    "Capacitación",
    "Oficina de Partes",
    "Oficina de Profesores",
    "Perfeccionamiento",
    "Unidad de compras",
    "Otra Sección",
)
