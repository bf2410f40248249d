"""Stateless coupon validity and discount rules.

Every function takes the current time explicitly so that callers decide
which clock applies. None of them touch the database.
"""

from datetime import datetime
from decimal import Decimal

from app.core.config import settings
from app.core.errors import InvalidArgumentError, InvalidStateError
from app.models.coupon import Coupon, CouponType
from app.models.shared import as_utc
from app.services.discounts.factory import get_discount_rule


def is_valid(coupon: Coupon, now: datetime) -> bool:
    """Return True if the coupon can be redeemed at ``now``.

    The validity window is open on both ends: a coupon is not usable at the
    exact ``valid_from`` or ``valid_until`` instant.
    """
    now = as_utc(now)
    return (
        bool(coupon.active)
        and coupon.used_count < coupon.max_uses
        and as_utc(coupon.valid_from) < now
        and now < as_utc(coupon.valid_until)
    )


def can_apply_to_order(coupon: Coupon, order_amount: Decimal, now: datetime) -> bool:
    if not is_valid(coupon, now):
        return False
    rule = get_discount_rule(coupon.coupon_type)
    return rule.applies(Decimal(order_amount), Decimal(coupon.min_order_amount))


def calculate_discount(coupon: Coupon, order_amount: Decimal, now: datetime) -> Decimal:
    """Calculate the discount a coupon yields for an order amount.

    Args:
        coupon: The coupon being redeemed.
        order_amount: The order total before discount.
        now: The instant the redemption is evaluated at.

    Returns:
        The discount, always between zero and ``order_amount``.

    Raises:
        InvalidArgumentError: If the order amount is negative.
        InvalidStateError: If the coupon is not valid, or the order is below
            the minimum amount of a FIXED coupon.
    """
    order_amount = Decimal(order_amount)
    if order_amount < 0:
        raise InvalidArgumentError("Order amount cannot be negative")

    if not is_valid(coupon, now):
        raise InvalidStateError("Coupon is not valid")

    rule = get_discount_rule(coupon.coupon_type)
    if not rule.applies(order_amount, Decimal(coupon.min_order_amount)):
        raise InvalidStateError("Order amount does not meet minimum requirement for this coupon")

    discount = rule.calculate(Decimal(coupon.value), order_amount)
    return max(Decimal("0"), min(discount, order_amount))


def validate_coupon(coupon: Coupon) -> None:
    """Check a coupon's configuration before it is persisted.

    Raises:
        InvalidArgumentError: If a percentage exceeds the allowed maximum, the
            validity window is empty, or ``max_uses`` is below ``used_count``.
    """
    limit = Decimal(settings.MAX_PERCENTAGE_DISCOUNT)
    if CouponType(coupon.coupon_type) == CouponType.PERCENTAGE and Decimal(coupon.value) > limit:
        raise InvalidArgumentError(f"Percentage discount cannot exceed {limit}%")

    if as_utc(coupon.valid_until) <= as_utc(coupon.valid_from):
        raise InvalidArgumentError("Valid until date must be after valid from date")

    if coupon.max_uses < (coupon.used_count or 0):
        raise InvalidArgumentError("Max uses cannot be lower than the current used count")
