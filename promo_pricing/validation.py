"""Promo code precondition checks.

The lookup layer fetches a ``PromoCodeRecord`` by its normalized code; these
checks decide whether it may be applied and hand the calculator its
``PromoCodeDescriptor``.
"""

from datetime import datetime
from typing import Optional

import structlog

from .errors import PromoRejectedError, errmsg
from .types import PromoCodeDescriptor, PromoCodeRecord

logger = structlog.get_logger()

MIN_PERCENT = 1
MAX_PERCENT = 100


def require_present(value, error_msg: str) -> None:
    """Require that a value is set and non-empty."""
    if not value:
        raise PromoRejectedError(error_msg)


def require_in_range(value: float, low: float, high: float, error_msg: str) -> None:
    """Require that ``low <= value <= high``."""
    if not low <= value <= high:
        raise PromoRejectedError(error_msg)


def require_positive(value: int, error_msg: str) -> None:
    if value <= 0:
        raise PromoRejectedError(error_msg)


def normalize_code(code: Optional[str]) -> str:
    """Codes are stored and matched upper-cased."""
    return (code or "").strip().upper()


def validate_code_input(code: Optional[str]) -> str:
    """Check a customer-entered code; returns the normalized lookup key."""
    normalized = normalize_code(code)
    require_present(normalized, errmsg.CODE_REQUIRED)
    return normalized


def validate_new_promo(
    code: Optional[str],
    discount_percent: float,
    usage_limit: Optional[int] = None,
    expires_at: Optional[datetime] = None,
) -> PromoCodeRecord:
    """Check an admin's new promo code input and build the record to store.

    The stored percentage is truncated to a whole number after the range
    check, so 12.9 is stored as 12.
    """
    normalized = normalize_code(code)
    require_present(normalized, errmsg.PERCENT_REQUIRED)
    require_present(discount_percent, errmsg.PERCENT_REQUIRED)
    require_in_range(discount_percent, MIN_PERCENT, MAX_PERCENT, errmsg.PERCENT_RANGE)
    if usage_limit is not None:
        require_positive(usage_limit, errmsg.USAGE_LIMIT_POSITIVE)
    return PromoCodeRecord(
        code=normalized,
        discount_percent=int(discount_percent),
        expires_at=expires_at,
        usage_limit=usage_limit,
    )


def validate_promo_code(
    record: Optional[PromoCodeRecord],
    now: Optional[datetime] = None,
) -> PromoCodeDescriptor:
    """Check that ``record`` may be applied to a cart right now.

    Raises:
        PromoRejectedError: if the code is missing, inactive, expired or
            has reached its usage limit.
    """
    if record is None:
        raise PromoRejectedError(errmsg.CODE_NOT_FOUND)

    log = logger.bind(code=record.code)

    if not record.is_active:
        log.info("promo_code_rejected", reason=errmsg.CODE_INACTIVE)
        raise PromoRejectedError(errmsg.CODE_INACTIVE)

    if record.expires_at is not None:
        if now is None:
            now = datetime.now(record.expires_at.tzinfo)
        if record.is_expired(now):
            log.info("promo_code_rejected", reason=errmsg.CODE_EXPIRED)
            raise PromoRejectedError(errmsg.CODE_EXPIRED)

    if record.is_fully_used():
        log.info("promo_code_rejected", reason=errmsg.CODE_FULLY_USED)
        raise PromoRejectedError(errmsg.CODE_FULLY_USED)

    log.info("promo_code_accepted", discount_percent=record.discount_percent)
    return record.to_descriptor()
