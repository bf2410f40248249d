from decimal import ROUND_HALF_UP, Decimal

CENT = Decimal("0.01")


def applies(order_amount: Decimal, min_order_amount: Decimal) -> bool:
    # Percentage coupons are not gated by a minimum order amount
    return True


def calculate(value: Decimal, order_amount: Decimal) -> Decimal:
    discount = order_amount * value / Decimal(100)
    return discount.quantize(CENT, rounding=ROUND_HALF_UP)
