"""Application service: Show Statistics use case (query).

Product and category figures always cover every active product; the
withdrawal figures are restricted to the selected period.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.domain.repository.withdrawal_repository import WithdrawalRepository
from stockroom.domain.service.reporting import (
    ReportPeriod,
    bar_ratios,
    category_distribution,
    low_stock_products,
    rank,
    section_distribution,
    top_withdrawn_products,
    total_items_withdrawn,
    withdrawals_in_period,
)

TOP_LIMIT = 5
UNKNOWN_PRODUCT = "Unknown product"


@dataclass(frozen=True)
class DistributionLineDTO:
    label: str
    count: int
    ratio: float  # count relative to the largest line, 0..1


@dataclass(frozen=True)
class TopProductDTO:
    product_id: int
    name: str
    quantity: int
    is_active: bool | None  # None when the product no longer exists


@dataclass(frozen=True)
class StatisticsDTO:
    period: str
    total_products: int
    low_stock_count: int
    top_categories: list[DistributionLineDTO]
    total_withdrawals: int
    total_items_withdrawn: int
    top_products: list[TopProductDTO]
    sections: list[DistributionLineDTO]


class ShowStatisticsHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        withdrawal_repo: WithdrawalRepository,
    ) -> None:
        self._product_repo = product_repo
        self._withdrawal_repo = withdrawal_repo

    def handle(
        self,
        period: ReportPeriod = ReportPeriod.MONTH,
        now: datetime | None = None,
    ) -> StatisticsDTO:
        products = self._product_repo.list_all()
        inactive = self._product_repo.list_inactive()
        withdrawals = withdrawals_in_period(self._withdrawal_repo.list_all(), period, now)

        categories = rank(category_distribution(products), TOP_LIMIT)
        sections = rank(section_distribution(withdrawals))

        active_names = {p.id: p.name for p in products}
        inactive_names = {p.id: p.name for p in inactive}
        top_products = []
        for total in top_withdrawn_products(withdrawals, TOP_LIMIT):
            if total.product_id in active_names:
                name, is_active = active_names[total.product_id], True
            elif total.product_id in inactive_names:
                name, is_active = inactive_names[total.product_id], False
            else:
                name, is_active = UNKNOWN_PRODUCT, None
            top_products.append(
                TopProductDTO(
                    product_id=total.product_id,
                    name=name,
                    quantity=total.quantity,
                    is_active=is_active,
                )
            )

        return StatisticsDTO(
            period=period.value,
            total_products=len(products),
            low_stock_count=len(low_stock_products(products)),
            top_categories=_lines(categories),
            total_withdrawals=len(withdrawals),
            total_items_withdrawn=total_items_withdrawn(withdrawals),
            top_products=top_products,
            sections=_lines(sections),
        )


def _lines(ranked: list[tuple[str, int]]) -> list[DistributionLineDTO]:
    return [
        DistributionLineDTO(label=label, count=count, ratio=ratio)
        for (label, count), ratio in zip(ranked, bar_ratios(ranked))
    ]
