"""Domain service: sequential product codes.

Codes look like ``PROD-0001``.  The next code is one past the highest
``PROD-`` number already in use, across active and inactive products;
codes in any other format are ignored.
"""

from __future__ import annotations

from collections.abc import Iterable

from stockroom.domain.model.product import Product

CODE_PREFIX = "PROD-"
CODE_DIGITS = 4


def next_product_code(products: Iterable[Product]) -> str:
    highest = 0
    for product in products:
        number = _code_number(product.code)
        if number is not None and number > highest:
            highest = number
    return f"{CODE_PREFIX}{highest + 1:0{CODE_DIGITS}d}"


def _code_number(code: str) -> int | None:
    if not code.startswith(CODE_PREFIX):
        return None
    digits = code[len(CODE_PREFIX):]
    return int(digits) if digits.isdigit() else None
