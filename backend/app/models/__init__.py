from app.models.coupon import Coupon, CouponType
from app.models.order import Order, OrderStatus

__all__ = [
    "Coupon",
    "CouponType",
    "Order",
    "OrderStatus",
]
