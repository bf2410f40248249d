"""Coupon model for promotional discounts."""

from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Integer,
    Numeric,
    String,
    func,
)

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class CouponType(str, Enum):
    FIXED = "FIXED"
    PERCENTAGE = "PERCENTAGE"


class Coupon(Base):
    """Coupon model for promotional discounts."""

    __tablename__ = "coupons"
    __table_args__ = (
        CheckConstraint("used_count >= 0", name="ck_coupons_used_count_non_negative"),
        CheckConstraint("used_count <= max_uses", name="ck_coupons_used_count_max_uses"),
    )

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    code = Column(String(8), unique=True, index=True, nullable=False)

    coupon_type = Column(String(20), nullable=False)
    value = Column(Numeric(12, 2), nullable=False)
    min_order_amount = Column(Numeric(12, 2), nullable=False, default=0)

    max_uses = Column(Integer, nullable=False)
    used_count = Column(Integer, nullable=False, default=0)

    valid_from = Column(DateTime(timezone=True), nullable=False)
    valid_until = Column(DateTime(timezone=True), nullable=False)

    active = Column(Boolean, nullable=False, default=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
