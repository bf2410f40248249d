"""Tests for the stateless coupon validity and discount rules."""

from datetime import timedelta
from decimal import Decimal

import pytest

from app.core.errors import InvalidArgumentError, InvalidStateError
from app.models.coupon import CouponType
from app.services import discount_engine
from app.services.discounts import fixed, percentage
from app.services.discounts.factory import _RULES, get_discount_rule
from tests.conftest import NOW, make_coupon


def fixed_coupon(**overrides):
    fields = {
        "code": "FLAT50OF",
        "coupon_type": CouponType.FIXED.value,
        "value": Decimal("50.00"),
        "min_order_amount": Decimal("100.00"),
    }
    fields.update(overrides)
    return make_coupon(**fields)


class TestIsValid:
    def test_valid_coupon(self):
        assert discount_engine.is_valid(make_coupon(), NOW) is True

    def test_inactive_coupon(self):
        assert discount_engine.is_valid(make_coupon(active=False), NOW) is False

    def test_exhausted_coupon(self):
        coupon = make_coupon(max_uses=10, used_count=10)
        assert discount_engine.is_valid(coupon, NOW) is False

    def test_one_use_left(self):
        coupon = make_coupon(max_uses=10, used_count=9)
        assert discount_engine.is_valid(coupon, NOW) is True

    def test_future_dated_coupon(self):
        coupon = make_coupon(valid_from=NOW + timedelta(hours=1))
        assert discount_engine.is_valid(coupon, NOW) is False

    def test_expired_coupon(self):
        coupon = make_coupon(valid_until=NOW - timedelta(seconds=1))
        assert discount_engine.is_valid(coupon, NOW) is False

    def test_exact_valid_from_instant_is_invalid(self):
        coupon = make_coupon(valid_from=NOW)
        assert discount_engine.is_valid(coupon, NOW) is False

    def test_exact_valid_until_instant_is_invalid(self):
        coupon = make_coupon(valid_until=NOW)
        assert discount_engine.is_valid(coupon, NOW) is False

    def test_naive_timestamps_are_treated_as_utc(self):
        coupon = make_coupon(
            valid_from=(NOW - timedelta(days=1)).replace(tzinfo=None),
            valid_until=(NOW + timedelta(days=1)).replace(tzinfo=None),
        )
        assert discount_engine.is_valid(coupon, NOW) is True


class TestCanApplyToOrder:
    def test_fixed_below_minimum(self):
        coupon = fixed_coupon()
        assert discount_engine.can_apply_to_order(coupon, Decimal("99.99"), NOW) is False

    def test_fixed_at_minimum(self):
        coupon = fixed_coupon()
        assert discount_engine.can_apply_to_order(coupon, Decimal("100.00"), NOW) is True

    def test_percentage_ignores_minimum(self):
        coupon = make_coupon(min_order_amount=Decimal("100.00"))
        assert discount_engine.can_apply_to_order(coupon, Decimal("0.01"), NOW) is True

    def test_invalid_coupon_cannot_apply(self):
        coupon = fixed_coupon(active=False)
        assert discount_engine.can_apply_to_order(coupon, Decimal("500.00"), NOW) is False


class TestCalculateDiscount:
    def test_percentage_rounds_half_up(self):
        discount = discount_engine.calculate_discount(make_coupon(), Decimal("33.33"), NOW)
        assert discount == Decimal("6.67")

    def test_percentage_half_cent_rounds_away_from_even(self):
        coupon = make_coupon(value=Decimal("10.00"))
        discount = discount_engine.calculate_discount(coupon, Decimal("10.05"), NOW)
        assert discount == Decimal("1.01")

    def test_percentage_round_amount(self):
        discount = discount_engine.calculate_discount(make_coupon(), Decimal("100.00"), NOW)
        assert discount == Decimal("20.00")

    def test_percentage_below_configured_minimum(self):
        coupon = make_coupon(min_order_amount=Decimal("100.00"))
        discount = discount_engine.calculate_discount(coupon, Decimal("0.01"), NOW)
        assert discount == Decimal("0.00")

    def test_percentage_maximum_rate_never_exceeds_order(self):
        coupon = make_coupon(value=Decimal("50.00"))
        discount = discount_engine.calculate_discount(coupon, Decimal("0.01"), NOW)
        assert Decimal("0") <= discount <= Decimal("0.01")

    def test_zero_order_amount(self):
        discount = discount_engine.calculate_discount(make_coupon(), Decimal("0"), NOW)
        assert discount == Decimal("0")

    def test_fixed_capped_at_order_amount(self):
        coupon = fixed_coupon(min_order_amount=Decimal("0.00"))
        discount = discount_engine.calculate_discount(coupon, Decimal("30.00"), NOW)
        assert discount == Decimal("30.00")

    def test_fixed_full_value(self):
        discount = discount_engine.calculate_discount(fixed_coupon(), Decimal("200.00"), NOW)
        assert discount == Decimal("50.00")

    def test_fixed_at_minimum_succeeds(self):
        discount = discount_engine.calculate_discount(fixed_coupon(), Decimal("100.00"), NOW)
        assert discount == Decimal("50.00")

    def test_fixed_below_minimum_rejected(self):
        with pytest.raises(InvalidStateError, match="minimum requirement"):
            discount_engine.calculate_discount(fixed_coupon(), Decimal("99.99"), NOW)

    def test_invalid_coupon_rejected(self):
        coupon = make_coupon(valid_until=NOW - timedelta(days=1))
        with pytest.raises(InvalidStateError, match="not valid"):
            discount_engine.calculate_discount(coupon, Decimal("100.00"), NOW)

    def test_exhausted_coupon_rejected(self):
        coupon = make_coupon(max_uses=5, used_count=5)
        with pytest.raises(InvalidStateError):
            discount_engine.calculate_discount(coupon, Decimal("100.00"), NOW)

    def test_negative_order_amount_rejected(self):
        with pytest.raises(InvalidArgumentError):
            discount_engine.calculate_discount(make_coupon(), Decimal("-1.00"), NOW)

    def test_does_not_consume_usage(self):
        coupon = make_coupon(used_count=5)
        discount_engine.calculate_discount(coupon, Decimal("100.00"), NOW)
        assert coupon.used_count == 5


class TestValidateCoupon:
    def test_percentage_at_limit_accepted(self):
        discount_engine.validate_coupon(make_coupon(value=Decimal("50.00")))

    def test_percentage_over_limit_rejected(self):
        with pytest.raises(InvalidArgumentError, match="cannot exceed"):
            discount_engine.validate_coupon(make_coupon(value=Decimal("50.01")))

    def test_fixed_has_no_upper_bound(self):
        discount_engine.validate_coupon(fixed_coupon(value=Decimal("5000.00")))

    def test_equal_window_bounds_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Valid until"):
            discount_engine.validate_coupon(make_coupon(valid_from=NOW, valid_until=NOW))

    def test_reversed_window_rejected(self):
        coupon = make_coupon(valid_from=NOW, valid_until=NOW - timedelta(days=1))
        with pytest.raises(InvalidArgumentError):
            discount_engine.validate_coupon(coupon)

    def test_max_uses_below_used_count_rejected(self):
        with pytest.raises(InvalidArgumentError, match="Max uses"):
            discount_engine.validate_coupon(make_coupon(max_uses=3, used_count=4))


class TestDiscountRules:
    def test_every_coupon_type_has_a_rule(self):
        assert set(_RULES) == set(CouponType)

    def test_rule_lookup_accepts_stored_string(self):
        assert get_discount_rule("FIXED") is get_discount_rule(CouponType.FIXED)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            get_discount_rule("BOGO")

    def test_fixed_calculator(self):
        assert fixed.calculate(Decimal("50.00"), Decimal("30.00")) == Decimal("30.00")
        assert fixed.applies(Decimal("99.99"), Decimal("100.00")) is False

    def test_percentage_calculator(self):
        assert percentage.calculate(Decimal("20.00"), Decimal("33.33")) == Decimal("6.67")
        assert percentage.applies(Decimal("0.01"), Decimal("100.00")) is True
