from collections.abc import Callable
from dataclasses import dataclass
from decimal import Decimal

from app.models.coupon import CouponType
from app.services.discounts import fixed, percentage


@dataclass(frozen=True)
class DiscountRule:
    """Type-specific applicability check and discount arithmetic."""

    applies: Callable[[Decimal, Decimal], bool]
    calculate: Callable[[Decimal, Decimal], Decimal]


# Every CouponType member must have an entry here.
_RULES: dict[CouponType, DiscountRule] = {
    CouponType.FIXED: DiscountRule(applies=fixed.applies, calculate=fixed.calculate),
    CouponType.PERCENTAGE: DiscountRule(
        applies=percentage.applies, calculate=percentage.calculate
    ),
}


def get_discount_rule(coupon_type: CouponType | str) -> DiscountRule:
    rule = _RULES.get(CouponType(coupon_type))
    if rule is None:
        raise ValueError(f"No discount rule registered for coupon type {coupon_type}")
    return rule
