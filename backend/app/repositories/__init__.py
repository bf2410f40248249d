from app.repositories.coupon_repository import CouponRepository
from app.repositories.order_repository import OrderRepository

__all__ = [
    "CouponRepository",
    "OrderRepository",
]
