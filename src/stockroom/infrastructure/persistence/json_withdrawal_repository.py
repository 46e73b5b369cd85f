"""JSON-file-backed implementation of WithdrawalRepository.

``create`` stands in for the backend's withdrawal transaction: it checks
stock for every item before changing anything, then deducts stock and
stores the withdrawal.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime, timezone
from pathlib import Path

from stockroom.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStock,
    PersistenceError,
)
from stockroom.domain.model.product import Product
from stockroom.domain.model.value_objects import Quantity, UserIdentity
from stockroom.domain.model.withdrawal import Withdrawal, WithdrawalItem
from stockroom.domain.repository.withdrawal_repository import WithdrawalRepository
from stockroom.infrastructure.persistence.json_file import JsonFile
from stockroom.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


class JsonWithdrawalRepository(WithdrawalRepository):

    def __init__(self, file_path: Path, product_repo: JsonProductRepository) -> None:
        self._file = JsonFile(file_path)
        self._product_repo = product_repo

    # --- WithdrawalRepository interface ---------------------------------------

    def create(self, withdrawal: Withdrawal) -> Withdrawal:
        # Phase 1: validate every product against stored stock
        requested: dict[int, int] = {}
        for item in withdrawal.items:
            requested[item.product_id] = (
                requested.get(item.product_id, 0) + item.quantity.value
            )

        products: list[Product] = []
        for product_id, qty in requested.items():
            product = self._product_repo.get_by_id(product_id)
            if product is None or not product.is_active:
                raise EntityNotFoundError(f"Product with ID {product_id} not found")
            if product.stock < qty:
                raise InsufficientStock(
                    product_name=product.name,
                    requested=qty,
                    available=product.stock,
                )
            products.append(product)

        # Phase 2: deduct stock and store the withdrawal
        originals = [dataclasses.replace(p) for p in products]
        for product in products:
            product.adjust_stock(-requested[product.id])  # type: ignore[index]

        records = self._file.load()
        stored = dataclasses.replace(
            withdrawal,
            id=self._file.next_id(records),
            total_items=sum(item.quantity.value for item in withdrawal.items),
            created_at=datetime.now(timezone.utc),
        )
        records.append(self._to_raw(stored))

        self._product_repo.save_many(products)
        try:
            self._file.persist(records)
        except PersistenceError:
            # Nothing was stored, so restore the stock
            self._product_repo.save_many(originals)
            raise
        return stored

    def get_by_id(self, withdrawal_id: int) -> Withdrawal | None:
        for raw in self._file.load():
            if raw["id"] == withdrawal_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Withdrawal]:
        withdrawals = [self._to_domain(raw) for raw in self._file.load()]
        return sorted(withdrawals, key=lambda w: w.created_at, reverse=True)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(withdrawal: Withdrawal) -> dict:
        return {
            "id": withdrawal.id,
            "user_id": withdrawal.registered_by.id,
            "user_name": withdrawal.registered_by.name,
            "user_section": withdrawal.registered_by.section,
            "withdrawer_name": withdrawal.withdrawer_name,
            "withdrawer_section": withdrawal.withdrawer_section,
            "notes": withdrawal.notes,
            "total_items": withdrawal.total_items,
            "created_at": withdrawal.created_at.isoformat(),
            "items": [
                {
                    "product_id": item.product_id,
                    "quantity": item.quantity.value,
                    "product": {
                        "id": item.product.id,
                        "name": item.product.name,
                        "description": item.product.description,
                        "category": item.product.category,
                        "stock": item.product.stock,
                        "min_stock": item.product.min_stock,
                        "code": item.product.code,
                    },
                }
                for item in withdrawal.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Withdrawal:
        items = [
            WithdrawalItem(
                product_id=i["product_id"],
                quantity=Quantity(i["quantity"]),
                product=Product(
                    id=i["product"]["id"],
                    name=i["product"]["name"],
                    description=i["product"].get("description", ""),
                    category=i["product"]["category"],
                    stock=i["product"]["stock"],
                    min_stock=i["product"]["min_stock"],
                    code=i["product"].get("code", ""),
                ),
            )
            for i in raw["items"]
        ]
        return Withdrawal(
            id=raw["id"],
            items=items,
            total_items=raw["total_items"],
            registered_by=UserIdentity(
                id=raw["user_id"], name=raw["user_name"], section=raw["user_section"]
            ),
            withdrawer_name=raw["withdrawer_name"],
            withdrawer_section=raw["withdrawer_section"],
            notes=raw.get("notes"),
            created_at=datetime.fromisoformat(raw["created_at"]),
        )
