"""Domain service: read-only projections over products and withdrawals.

Nothing here mutates its input or caches results; every function is
recomputed from the collections it is given.  Empty input always gives
an empty result.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum

from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.product import Product
from stockroom.domain.model.withdrawal import Withdrawal

ALL_CATEGORIES = "all"


class ReportPeriod(Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


class LowStockSortField(Enum):
    CODE = "code"
    NAME = "name"
    CATEGORY = "category"
    STOCK = "stock"
    MIN_STOCK = "min_stock"
    DEFICIT = "deficit"


@dataclass(frozen=True)
class ProductWithdrawalTotal:
    product_id: int
    quantity: int


# --- Products -----------------------------------------------------------------


def low_stock_products(products: Iterable[Product]) -> list[Product]:
    return [p for p in products if p.stock <= p.min_stock]


def category_distribution(products: Iterable[Product]) -> dict[str, int]:
    """Number of products per category name, in first-seen order."""
    counts: dict[str, int] = {}
    for product in products:
        counts[product.category] = counts.get(product.category, 0) + 1
    return counts


def search_products(products: Iterable[Product], query: str) -> list[Product]:
    """Case-insensitive substring match on the product name."""
    if not query or not query.strip():
        return list(products)
    needle = query.strip().lower()
    return [p for p in products if needle in p.name.lower()]


def filter_by_category(products: Iterable[Product], category: str) -> list[Product]:
    if category == ALL_CATEGORIES:
        return list(products)
    return [p for p in products if p.category == category]


def sort_low_stock(
    products: Iterable[Product],
    field: LowStockSortField = LowStockSortField.DEFICIT,
    descending: bool = True,
) -> list[Product]:
    keys = {
        LowStockSortField.CODE: lambda p: p.code.lower(),
        LowStockSortField.NAME: lambda p: p.name.lower(),
        LowStockSortField.CATEGORY: lambda p: p.category.lower(),
        LowStockSortField.STOCK: lambda p: p.stock,
        LowStockSortField.MIN_STOCK: lambda p: p.min_stock,
        LowStockSortField.DEFICIT: lambda p: p.deficit,
    }
    return sorted(products, key=keys[field], reverse=descending)


# --- Withdrawals --------------------------------------------------------------


def top_withdrawn_products(
    withdrawals: Iterable[Withdrawal], limit: int
) -> list[ProductWithdrawalTotal]:
    """Products with the most units withdrawn, highest first.

    Ties keep the order in which products were first seen.
    """
    if limit < 0:
        raise ValidationError("Limit cannot be negative")

    totals: dict[int, int] = {}
    for withdrawal in withdrawals:
        for item in withdrawal.items:
            totals[item.product_id] = totals.get(item.product_id, 0) + item.quantity.value

    ranked = sorted(totals.items(), key=lambda pair: pair[1], reverse=True)
    return [
        ProductWithdrawalTotal(product_id=product_id, quantity=quantity)
        for product_id, quantity in ranked[:limit]
    ]


def section_distribution(withdrawals: Iterable[Withdrawal]) -> dict[str, int]:
    """Number of withdrawals per withdrawer section, in first-seen order."""
    counts: dict[str, int] = {}
    for withdrawal in withdrawals:
        section = withdrawal.withdrawer_section
        counts[section] = counts.get(section, 0) + 1
    return counts


def total_items_withdrawn(withdrawals: Iterable[Withdrawal]) -> int:
    return sum(w.total_items for w in withdrawals)


def recent_withdrawals(withdrawals: Iterable[Withdrawal], limit: int) -> list[Withdrawal]:
    if limit < 0:
        raise ValidationError("Limit cannot be negative")
    return sorted(withdrawals, key=lambda w: w.created_at, reverse=True)[:limit]


def withdrawals_in_period(
    withdrawals: Iterable[Withdrawal],
    period: ReportPeriod,
    now: datetime | None = None,
) -> list[Withdrawal]:
    if period is ReportPeriod.ALL:
        return list(withdrawals)
    cutoff = period_start(period, now or datetime.now(timezone.utc))
    return [w for w in withdrawals if w.created_at >= cutoff]


def withdrawals_between(
    withdrawals: Iterable[Withdrawal],
    start: date | None = None,
    end: date | None = None,
) -> list[Withdrawal]:
    """Withdrawals whose UTC timestamp falls on or between two dates."""
    lower = datetime.combine(start, time.min, tzinfo=timezone.utc) if start else None
    upper = datetime.combine(end, time.max, tzinfo=timezone.utc) if end else None

    result = []
    for withdrawal in withdrawals:
        if lower is not None and withdrawal.created_at < lower:
            continue
        if upper is not None and withdrawal.created_at > upper:
            continue
        result.append(withdrawal)
    return result


# --- Ranking helpers ----------------------------------------------------------


def rank(counts: dict[str, int], limit: int | None = None) -> list[tuple[str, int]]:
    """Sort a distribution by count, highest first (stable on ties)."""
    ranked = sorted(counts.items(), key=lambda pair: pair[1], reverse=True)
    return ranked if limit is None else ranked[:limit]


def bar_ratios(ranked: list[tuple[str, int]]) -> list[float]:
    """Each count relative to the largest one, for proportional bars."""
    if not ranked:
        return []
    largest = max(count for _, count in ranked)
    if largest == 0:
        return [0.0 for _ in ranked]
    return [count / largest for _, count in ranked]


def period_start(period: ReportPeriod, now: datetime) -> datetime:
    if period is ReportPeriod.WEEK:
        return now - timedelta(days=7)
    if period is ReportPeriod.MONTH:
        year, month = (now.year, now.month - 1) if now.month > 1 else (now.year - 1, 12)
        day = min(now.day, calendar.monthrange(year, month)[1])
        return now.replace(year=year, month=month, day=day)
    if period is ReportPeriod.YEAR:
        day = min(now.day, calendar.monthrange(now.year - 1, now.month)[1])
        return now.replace(year=now.year - 1, day=day)
    raise ValidationError(f"Period {period.value} has no start")
