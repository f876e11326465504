"""Promo rejection errors and error message constants."""


class errmsg:
    """Error message constants for the promo domain."""

    CODE_REQUIRED = "Please enter a promo code"
    CODE_NOT_FOUND = "Invalid promo code"
    CODE_INACTIVE = "This code is not active"
    CODE_EXPIRED = "This code has expired"
    CODE_FULLY_USED = "This code has been fully used"
    PERCENT_REQUIRED = "Please enter the code and discount percentage"
    PERCENT_RANGE = "Discount percentage must be between 1% and 100%"
    USAGE_LIMIT_POSITIVE = "Usage limit must be positive"
    TAX_NEGATIVE = "Tax cannot be negative"


class PromoRejectedError(Exception):
    """Promo code was rejected due to a business rule violation."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
