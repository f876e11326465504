"""Promo code discount calculation.

Business Rules:
1. No promo, or a promo with a zero/NaN percentage, yields no discount
2. A promo with an allow-list only discounts the listed products
3. Each line's discount is capped by its product's max discount, when set
4. Only lines with a positive discount count as eligible
5. The total is rounded half-up to 2 decimal places
"""

import math
import sys
from collections.abc import Iterable
from typing import Optional

import structlog

from .types import ZERO_RESULT, CartLineItem, DiscountResult, PromoCodeDescriptor

logger = structlog.get_logger()

EPSILON = sys.float_info.epsilon


def round2(value: float) -> float:
    """Round to cents, half-up on the epsilon-nudged value."""
    if not math.isfinite(value):
        return value
    return math.floor((value + EPSILON) * 100 + 0.5) / 100


def _is_blank(value) -> bool:
    if not value:
        return True
    return isinstance(value, float) and math.isnan(value)


def _usable_cap(cap) -> bool:
    return cap is not None and not math.isnan(cap) and cap >= 0


def calculate(
    cart_items: Optional[Iterable[CartLineItem]],
    promo: Optional[PromoCodeDescriptor],
) -> DiscountResult:
    """Compute the discount ``promo`` grants on ``cart_items``.

    Pure and total: malformed lines contribute nothing instead of raising.
    """
    if cart_items is None or promo is None or _is_blank(promo.discount_percent):
        return ZERO_RESULT

    percent = promo.discount_percent
    restricted = promo.is_restricted()

    total = 0.0
    eligible = []

    for item in cart_items:
        if _is_blank(item.unit_price) or _is_blank(item.quantity):
            continue

        product_id = "" if item.product_id is None else str(item.product_id).strip()
        if not product_id:
            continue

        rule = promo.rule_for(product_id)
        if restricted and rule is None:
            continue

        line_discount = item.unit_price * item.quantity * percent / 100

        if rule is not None and _usable_cap(rule.max_discount_amount):
            line_discount = min(line_discount, rule.max_discount_amount)

        if line_discount > 0:
            total += line_discount
            eligible.append(product_id)

    if total < 0:
        total = 0.0

    result = DiscountResult(discount=round2(total), eligible_items=tuple(eligible))

    logger.debug(
        "promo_discount_calculated",
        code=promo.code,
        discount=result.discount,
        eligible_count=len(result.eligible_items),
    )

    return result
