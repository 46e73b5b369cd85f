"""Unit tests for the Withdrawal aggregate."""

import pytest

from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.value_objects import Quantity
from stockroom.domain.model.withdrawal import Withdrawal, WithdrawalItem
from tests.fakes import ALICE, make_product


def _item(product_id: int, qty: int) -> WithdrawalItem:
    return WithdrawalItem(
        product_id=product_id,
        quantity=Quantity(qty),
        product=make_product(product_id, f"P{product_id}", stock=100),
    )


class TestWithdrawalCreate:

    def test_total_items_is_sum_of_quantities(self):
        w = Withdrawal.create(ALICE, "Bob", "Ayudantía", [_item(1, 3), _item(2, 4)])
        assert w.total_items == 7
        assert w.id is None

    def test_fields_trimmed_and_blank_notes_dropped(self):
        w = Withdrawal.create(ALICE, " Bob ", " Ayudantía ", [_item(1, 1)], notes="  ")
        assert w.withdrawer_name == "Bob"
        assert w.withdrawer_section == "Ayudantía"
        assert w.notes is None

    def test_notes_trimmed(self):
        w = Withdrawal.create(ALICE, "Bob", "Ayudantía", [_item(1, 1)], notes=" urgent ")
        assert w.notes == "urgent"

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Withdrawal.create(ALICE, "Bob", "Ayudantía", [])

    def test_blank_withdrawer_rejected(self):
        with pytest.raises(ValidationError, match="Withdrawer name"):
            Withdrawal.create(ALICE, "", "Ayudantía", [_item(1, 1)])

    def test_quantity_of(self):
        w = Withdrawal.create(ALICE, "Bob", "Ayudantía", [_item(1, 3), _item(2, 4)])
        assert w.quantity_of(2) == 4
        assert w.quantity_of(9) == 0
