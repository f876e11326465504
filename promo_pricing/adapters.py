"""Boundary adapters from raw cart and promo payloads to calculator types.

Cart lines reach the storefront from several sources that disagree on field
names: the product identifier may be stored as ``product``, ``productId`` or
``id``, and prices may arrive as strings. These helpers resolve that once, at
the edge, so the calculator only ever sees canonical ``CartLineItem`` values.
"""

import math
import re
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any, Optional

from .calculator import calculate
from .types import CartLineItem, DiscountResult, ProductRule, PromoCodeDescriptor

PRODUCT_ID_FIELDS = ("product", "productId", "product_id", "id")
PRICE_FIELDS = ("price", "unitPrice", "unit_price")

DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
INFINITY_RE = re.compile(r"[+-]?Infinity")
RADIX_RE = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")


def _field(raw: Any, name: str) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


def _first_present(raw: Any, names: Sequence[str]) -> Any:
    for name in names:
        value = _field(raw, name)
        if value is not None:
            return value
    return None


def to_number(value: Any) -> float:
    """Coerce ``value`` to a float the way a lenient form field would.

    ``None`` and blank strings become 0.0. Strings must use plain decimal or
    exponent notation, ``Infinity``, or a 0x/0o/0b literal; anything else,
    including ``"inf"``, ``"nan"`` and ``"1_000"``, becomes NaN.
    """
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float, Decimal)):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        if DECIMAL_RE.fullmatch(text):
            return float(text)
        if INFINITY_RE.fullmatch(text):
            return -math.inf if text.startswith("-") else math.inf
        if RADIX_RE.fullmatch(text):
            return float(int(text, 0))
        return math.nan
    return math.nan


def _to_quantity(value: Any):
    number = to_number(value)
    return int(number) if number.is_integer() else number


def resolve_product_id(raw: Any) -> str:
    """Return the trimmed product identifier of a raw cart line, or ``""``."""
    if raw is None:
        return ""
    value = _first_present(raw, PRODUCT_ID_FIELDS)
    if value is None:
        return ""
    return str(value).strip()


def line_item_from_raw(raw: Any) -> CartLineItem:
    return CartLineItem(
        product_id=resolve_product_id(raw),
        unit_price=to_number(None if raw is None else _first_present(raw, PRICE_FIELDS)),
        quantity=_to_quantity(None if raw is None else _field(raw, "quantity")),
    )


def cart_from_raw(items: Any) -> tuple:
    """Adapt a raw cart payload; anything that is not a list is an empty cart."""
    if not isinstance(items, (list, tuple)):
        return ()
    return tuple(line_item_from_raw(item) for item in items)


def _rule_from_raw(raw: Any) -> ProductRule:
    cap = _first_present(raw, ("maxDiscountAmount", "max_discount_amount"))
    product_id = _first_present(raw, ("productId", "product_id"))
    return ProductRule(
        product_id="" if product_id is None else str(product_id),
        max_discount_amount=None if cap is None else to_number(cap),
    )


def promo_from_raw(raw: Any) -> Optional[PromoCodeDescriptor]:
    """Adapt a validated promo payload, e.g. the body of a validate response."""
    if raw is None:
        return None

    rules = _first_present(raw, ("applicableProducts", "applicable_products"))
    if not isinstance(rules, (list, tuple)):
        rules = ()

    return PromoCodeDescriptor(
        discount_percent=to_number(
            _first_present(raw, ("discountPercent", "discount_percent"))
        ),
        applicable_products=tuple(_rule_from_raw(rule) for rule in rules),
        code=str(_field(raw, "code") or ""),
    )


def calculate_from_raw(items: Any, promo: Any) -> DiscountResult:
    return calculate(cart_from_raw(items), promo_from_raw(promo))
