"""Order schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.order import OrderStatus


class OrderCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    customer_id: str = Field(min_length=1, max_length=255)
    original_amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    coupon_code: str | None = Field(default=None, max_length=8)


class OrderUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    customer_id: str | None = Field(default=None, min_length=1, max_length=255)
    original_amount: Decimal | None = Field(default=None, gt=0, max_digits=12, decimal_places=2)
    final_amount: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    customer_id: str
    original_amount: Decimal
    discount_amount: Decimal
    final_amount: Decimal
    coupon_code: str | None = None
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
