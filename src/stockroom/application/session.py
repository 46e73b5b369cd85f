"""Application state for one operator session.

Holds the cart together with local copies of the product list and the
withdrawal history.  The copies are refreshed wholesale from the
repositories; the session never patches stock values itself.
"""

from __future__ import annotations

import logging

from stockroom.application.dto import WithdrawalItemSpec
from stockroom.domain.exceptions import EntityNotFoundError
from stockroom.domain.model.cart import Cart, CartItem
from stockroom.domain.model.product import Product
from stockroom.domain.model.withdrawal import Withdrawal
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.domain.repository.withdrawal_repository import WithdrawalRepository

LOGGER = logging.getLogger(__name__)


class WithdrawalSession:

    def __init__(
        self,
        product_repo: ProductRepository,
        withdrawal_repo: WithdrawalRepository,
    ) -> None:
        self._product_repo = product_repo
        self._withdrawal_repo = withdrawal_repo
        self.cart = Cart()
        self._products: list[Product] = []
        self._withdrawals: list[Withdrawal] = []

    # --- Local copies ---------------------------------------------------------

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    @property
    def withdrawals(self) -> list[Withdrawal]:
        return list(self._withdrawals)

    def load(self) -> None:
        self.reload_products()
        self.reload_withdrawals()

    def reload_products(self) -> None:
        self._products = self._product_repo.list_all()
        LOGGER.debug("Loaded %d products", len(self._products))

    def reload_withdrawals(self) -> None:
        self._withdrawals = self._withdrawal_repo.list_all()
        LOGGER.debug("Loaded %d withdrawals", len(self._withdrawals))

    def record_withdrawal(self, withdrawal: Withdrawal) -> None:
        """Put a freshly committed withdrawal at the head of the history."""
        self._withdrawals.insert(0, withdrawal)

    def get_product(self, product_id: int) -> Product | None:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def find_product(self, name: str) -> Product | None:
        for product in self._products:
            if product.name.lower() == name.strip().lower():
                return product
        return None

    # --- Cart -----------------------------------------------------------------

    def add_to_cart(self, product_id: int, quantity: int) -> CartItem:
        product = self._require_product(product_id)
        item = self.cart.add_item(product, quantity)
        LOGGER.info("%s added to cart (now %d)", product.name, item.quantity)
        return item

    def add_specs_to_cart(self, specs: list[WithdrawalItemSpec]) -> None:
        """Add several lines by product name, stopping at the first rejection."""
        for spec in specs:
            product = self.find_product(spec.product_name)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.product_name}'")
            self.add_to_cart(product.id, spec.quantity)  # type: ignore[arg-type]

    def update_cart_quantity(self, product_id: int, quantity: int) -> None:
        product = self._require_product(product_id)
        self.cart.update_quantity(product_id, quantity, live_product=product)

    def remove_from_cart(self, product_id: int) -> None:
        self.cart.remove_item(product_id)

    @property
    def cart_total_items(self) -> int:
        return self.cart.total_items()

    def _require_product(self, product_id: int) -> Product:
        product = self.get_product(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        return product
