"""Order model for customer purchases."""

from enum import Enum

from sqlalchemy import Column, DateTime, Numeric, String, func

from app.core.database import Base
from app.models.shared import UUIDType, generate_uuid


class OrderStatus(str, Enum):
    CREATED = "CREATED"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class Order(Base):
    """Order placed by a customer, optionally discounted by a coupon."""

    __tablename__ = "orders"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    customer_id = Column(String(255), nullable=False, index=True)

    original_amount = Column(Numeric(12, 2), nullable=False)
    discount_amount = Column(Numeric(12, 2), nullable=False, default=0)
    final_amount = Column(Numeric(12, 2), nullable=False)
    coupon_code = Column(String(8), nullable=True)

    status = Column(String(20), nullable=False, default=OrderStatus.CREATED.value, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
