"""Authoritative order discount summary for order creation."""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional

import structlog

from .calculator import calculate, round2
from .errors import PromoRejectedError, errmsg
from .types import CartLineItem, PromoCodeDescriptor

logger = structlog.get_logger()


@dataclass(frozen=True)
class OrderDiscountSummary:
    items_price: float
    discount_amount: float
    tax: float
    total_price: float
    promo_code: Optional[str] = None
    discount_percent: Optional[float] = None

    def to_order_fields(self) -> dict:
        return {
            "itemsPrice": self.items_price,
            "taxPrice": self.tax,
            "totalPrice": self.total_price,
            "promoCode": self.promo_code,
            "discountPercent": self.discount_percent,
            "discountAmount": self.discount_amount if self.discount_percent is not None else None,
        }


def items_price(cart_items: Iterable[CartLineItem]) -> float:
    return round2(sum(item.unit_price * item.quantity for item in cart_items))


def summarize_order(
    cart_items: Iterable[CartLineItem],
    promo: Optional[PromoCodeDescriptor],
    tax: float = 0.0,
) -> OrderDiscountSummary:
    """Recompute the order's discount from its own line items.

    A client-submitted discount is never trusted; call this once while
    creating the order.
    """
    if tax < 0:
        raise PromoRejectedError(errmsg.TAX_NEGATIVE)

    items = tuple(cart_items)
    subtotal = items_price(items)
    result = calculate(items, promo)

    promo_code = None
    discount_percent = None
    if result.applied:
        promo_code = promo.code or None
        discount_percent = promo.discount_percent

    summary = OrderDiscountSummary(
        items_price=subtotal,
        discount_amount=result.discount,
        tax=round2(tax),
        total_price=round2(max(subtotal - result.discount, 0.0) + tax),
        promo_code=promo_code,
        discount_percent=discount_percent,
    )

    logger.info(
        "order_discount_summarized",
        promo_code=summary.promo_code,
        items_price=summary.items_price,
        discount_amount=summary.discount_amount,
        total_price=summary.total_price,
    )

    return summary
