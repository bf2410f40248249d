from decimal import Decimal


def applies(order_amount: Decimal, min_order_amount: Decimal) -> bool:
    return order_amount >= min_order_amount


def calculate(value: Decimal, order_amount: Decimal) -> Decimal:
    # Capped so the final amount never goes negative
    return min(value, order_amount)
