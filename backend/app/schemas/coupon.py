"""Coupon schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.coupon import CouponType
from app.models.shared import as_utc


class CouponCreate(BaseModel):
    code: str | None = Field(default=None, min_length=8, max_length=8, pattern=r"^[A-Z0-9]+$")
    coupon_type: CouponType
    value: Decimal = Field(ge=0, max_digits=12, decimal_places=2)
    min_order_amount: Decimal = Field(default=Decimal("0"), ge=0, max_digits=12, decimal_places=2)
    max_uses: int = Field(gt=0)
    valid_from: datetime
    valid_until: datetime
    active: bool = True

    @field_validator("valid_from", "valid_until")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        return as_utc(v)


class CouponUpdate(BaseModel):
    coupon_type: CouponType | None = None
    value: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    min_order_amount: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    max_uses: int | None = Field(default=None, gt=0)
    valid_from: datetime | None = None
    valid_until: datetime | None = None
    active: bool | None = None

    @field_validator("valid_from", "valid_until")
    @classmethod
    def normalize_to_utc(cls, v: datetime | None) -> datetime | None:
        return as_utc(v) if v is not None else None


class CouponResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    code: str
    coupon_type: CouponType
    value: Decimal
    min_order_amount: Decimal
    max_uses: int
    used_count: int
    valid_from: datetime
    valid_until: datetime
    active: bool
    created_at: datetime
    updated_at: datetime


class DiscountCalculationRequest(BaseModel):
    code: str = Field(max_length=8)
    order_amount: Decimal = Field(ge=0, max_digits=12, decimal_places=2)


class DiscountCalculationResponse(BaseModel):
    """Outcome of applying a coupon to an order amount."""

    original_amount: Decimal
    discount: Decimal
    final_amount: Decimal
