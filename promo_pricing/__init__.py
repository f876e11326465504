"""Promo code discount calculation for storefront carts."""

from .types import (
    CartLineItem,
    ProductRule,
    PromoCodeDescriptor,
    PromoCodeRecord,
    DiscountResult,
)
from .calculator import calculate, round2
from .adapters import (
    resolve_product_id,
    to_number,
    line_item_from_raw,
    cart_from_raw,
    promo_from_raw,
    calculate_from_raw,
)
from .validation import (
    normalize_code,
    validate_code_input,
    validate_new_promo,
    validate_promo_code,
)
from .checkout import OrderDiscountSummary, summarize_order
from .errors import PromoRejectedError, errmsg
from .config import Settings, configure_logging

__all__ = [
    # Types
    "CartLineItem",
    "ProductRule",
    "PromoCodeDescriptor",
    "PromoCodeRecord",
    "DiscountResult",
    # Calculation
    "calculate",
    "round2",
    # Adapters
    "resolve_product_id",
    "to_number",
    "line_item_from_raw",
    "cart_from_raw",
    "promo_from_raw",
    "calculate_from_raw",
    # Validation
    "normalize_code",
    "validate_code_input",
    "validate_new_promo",
    "validate_promo_code",
    # Checkout
    "OrderDiscountSummary",
    "summarize_order",
    # Errors
    "PromoRejectedError",
    "errmsg",
    # Config
    "Settings",
    "configure_logging",
]
