from app.schemas.coupon import (
    CouponCreate,
    CouponResponse,
    CouponUpdate,
    DiscountCalculationRequest,
    DiscountCalculationResponse,
)
from app.schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate, OrderUpdate

__all__ = [
    "CouponCreate",
    "CouponResponse",
    "CouponUpdate",
    "DiscountCalculationRequest",
    "DiscountCalculationResponse",
    "OrderCreate",
    "OrderResponse",
    "OrderStatusUpdate",
    "OrderUpdate",
]
