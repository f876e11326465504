"""Cart snapshot, promo descriptor and discount result value types."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class CartLineItem:
    product_id: str
    unit_price: float
    quantity: int


@dataclass(frozen=True)
class ProductRule:
    """One entry of a promo's allow-list, with an optional per-line cap."""

    product_id: str
    max_discount_amount: Optional[float] = None


@dataclass(frozen=True)
class PromoCodeDescriptor:
    """A validated promo code as seen by the calculator.

    An empty ``applicable_products`` means the promo applies to every product
    in the cart. A non-empty one restricts it to the listed products.
    """

    discount_percent: float
    applicable_products: tuple = field(default_factory=tuple)  # of ProductRule
    code: str = ""

    def is_restricted(self) -> bool:
        return len(self.applicable_products) > 0

    def rule_for(self, product_id: str) -> Optional[ProductRule]:
        """Return the first rule matching ``product_id``, if any."""
        for rule in self.applicable_products:
            if rule.product_id == product_id:
                return rule
        return None


@dataclass(frozen=True)
class DiscountResult:
    discount: float = 0.0
    eligible_items: tuple = field(default_factory=tuple)  # of product_id

    @property
    def applied(self) -> bool:
        return self.discount > 0

    @property
    def discount_cents(self) -> int:
        return int(round(self.discount * 100))


ZERO_RESULT = DiscountResult()


@dataclass(frozen=True)
class PromoCodeRecord:
    """Stored promo code row handed over by the lookup layer."""

    code: str
    discount_percent: float
    is_active: bool = True
    expires_at: Optional[datetime] = None
    usage_limit: Optional[int] = None
    usage_count: int = 0
    applicable_products: tuple = field(default_factory=tuple)  # of ProductRule

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at < now

    def is_fully_used(self) -> bool:
        return bool(self.usage_limit) and self.usage_count >= self.usage_limit

    def to_descriptor(self) -> PromoCodeDescriptor:
        return PromoCodeDescriptor(
            discount_percent=self.discount_percent,
            applicable_products=tuple(self.applicable_products),
            code=self.code,
        )
