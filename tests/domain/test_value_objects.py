"""Unit tests for domain value objects."""

import pytest

from stockroom.domain.exceptions import InvalidQuantity, ValidationError
from stockroom.domain.model.value_objects import Quantity, UserIdentity


class TestQuantity:

    def test_valid_quantity(self):
        q = Quantity(5)
        assert q.value == 5

    def test_zero_rejected(self):
        with pytest.raises(InvalidQuantity):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(InvalidQuantity):
            Quantity(-3)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(2.5)  # type: ignore[arg-type]

    def test_addition(self):
        assert Quantity(2) + Quantity(3) == Quantity(5)

    def test_str(self):
        assert str(Quantity(7)) == "7"


class TestUserIdentity:

    def test_valid_identity(self):
        user = UserIdentity(id=3, name="Bea", section="Capacitación")
        assert str(user) == "Bea (Capacitación)"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError, match="name is required"):
            UserIdentity(id=3, name="  ", section="Capacitación")

    def test_blank_section_rejected(self):
        with pytest.raises(ValidationError, match="section is required"):
            UserIdentity(id=3, name="Bea", section="")
