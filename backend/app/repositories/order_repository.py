"""Order repository for data access."""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.sorting import apply_order_by
from app.models.order import Order, OrderStatus
from app.schemas.order import OrderUpdate


class OrderRepository:
    """Repository for Order model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
        customer_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[Order]:
        """Get all orders with optional filters."""
        query = self.db.query(Order)

        if customer_id:
            query = query.filter(Order.customer_id == customer_id)
        if status:
            query = query.filter(Order.status == status.value)

        query = apply_order_by(query, Order, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self) -> int:
        """Count orders."""
        return self.db.query(func.count(Order.id)).scalar() or 0

    def get_by_id(self, order_id: UUID) -> Order | None:
        """Get an order by ID."""
        return self.db.query(Order).filter(Order.id == order_id).first()

    def get_by_customer_id(self, customer_id: str) -> list[Order]:
        return (
            self.db.query(Order)
            .filter(Order.customer_id == customer_id)
            .order_by(Order.created_at.desc())
            .all()
        )

    def get_by_status(self, status: OrderStatus) -> list[Order]:
        return (
            self.db.query(Order)
            .filter(Order.status == status.value)
            .order_by(Order.created_at.desc())
            .all()
        )

    def create(
        self,
        name: str,
        customer_id: str,
        original_amount: Decimal,
        discount_amount: Decimal = Decimal("0"),
        coupon_code: str | None = None,
    ) -> Order:
        """Create a new order in CREATED status."""
        order = Order(
            name=name,
            customer_id=customer_id,
            original_amount=original_amount,
            discount_amount=discount_amount,
            final_amount=original_amount - discount_amount,
            coupon_code=coupon_code,
            status=OrderStatus.CREATED.value,
        )
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def update(self, order_id: UUID, data: OrderUpdate) -> Order | None:
        """Update an order by ID."""
        order = self.get_by_id(order_id)
        if not order:
            return None

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)
        for key, value in update_data.items():
            setattr(order, key, value)

        self.db.commit()
        self.db.refresh(order)
        return order

    def set_status(self, order_id: UUID, status: OrderStatus) -> Order | None:
        order = self.get_by_id(order_id)
        if not order:
            return None

        order.status = status.value  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(order)
        return order

    def delete(self, order_id: UUID) -> bool:
        """Delete an order by ID."""
        order = self.get_by_id(order_id)
        if not order:
            return False

        self.db.delete(order)
        self.db.commit()
        return True
