"""Tests for the operator session: local copies and cart operations."""

import pytest

from stockroom.application.dto import WithdrawalItemSpec
from stockroom.application.session import WithdrawalSession
from stockroom.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStock,
    InvalidQuantity,
)
from tests.fakes import FakeProductRepository, FakeWithdrawalRepository, make_product


def _session() -> WithdrawalSession:
    product_repo = FakeProductRepository([
        make_product(1, "Paper", stock=10),
        make_product(2, "Toner", stock=2),
        make_product(3, "Old stapler", stock=4, is_active=False),
    ])
    session = WithdrawalSession(product_repo, FakeWithdrawalRepository(product_repo))
    session.load()
    return session


class TestSessionLoad:

    def test_only_active_products_loaded(self):
        session = _session()
        assert [p.name for p in session.products] == ["Paper", "Toner"]

    def test_products_property_is_a_copy(self):
        session = _session()
        session.products.clear()
        assert len(session.products) == 2

    def test_find_product_ignores_case_and_padding(self):
        session = _session()
        assert session.find_product("  paper ").id == 1
        assert session.find_product("Old stapler") is None


class TestSessionCart:

    def test_add_and_total(self):
        session = _session()
        session.add_to_cart(1, 3)
        session.add_to_cart(1, 2)
        session.add_to_cart(2, 1)
        assert session.cart.quantity_of(1) == 5
        assert session.cart_total_items == 6

    def test_add_unknown_product(self):
        session = _session()
        with pytest.raises(EntityNotFoundError, match="#99"):
            session.add_to_cart(99, 1)

    def test_add_over_stock_leaves_cart_unchanged(self):
        session = _session()
        session.add_to_cart(2, 1)
        with pytest.raises(InsufficientStock):
            session.add_to_cart(2, 2)
        assert session.cart.quantity_of(2) == 1

    def test_add_specs_by_name(self):
        session = _session()
        session.add_specs_to_cart([WithdrawalItemSpec("paper", 2), WithdrawalItemSpec("Toner", 1)])
        assert session.cart_total_items == 3

    def test_add_specs_unknown_name(self):
        session = _session()
        with pytest.raises(EntityNotFoundError, match="Product not found: 'Ink'"):
            session.add_specs_to_cart([WithdrawalItemSpec("Ink", 1)])

    def test_add_specs_stops_at_first_rejection(self):
        session = _session()
        with pytest.raises(InvalidQuantity):
            session.add_specs_to_cart([WithdrawalItemSpec("Paper", 2), WithdrawalItemSpec("Toner", 0)])
        assert session.cart.quantity_of(1) == 2
        assert session.cart.quantity_of(2) == 0

    def test_update_quantity_checks_live_stock(self):
        session = _session()
        session.add_to_cart(2, 1)
        with pytest.raises(InsufficientStock):
            session.update_cart_quantity(2, 3)
        session.update_cart_quantity(2, 2)
        assert session.cart.quantity_of(2) == 2

    def test_update_to_zero_removes_line(self):
        session = _session()
        session.add_to_cart(1, 4)
        session.update_cart_quantity(1, 0)
        assert session.cart.is_empty()

    def test_remove_from_cart(self):
        session = _session()
        session.add_to_cart(1, 4)
        session.remove_from_cart(1)
        session.remove_from_cart(1)
        assert session.cart_total_items == 0
