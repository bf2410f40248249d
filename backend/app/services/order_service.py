"""Order service for checkout and order management."""

import logging
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.clock import Clock
from app.core.errors import NotFoundError
from app.models.order import Order, OrderStatus
from app.models.shared import utc_now
from app.repositories.order_repository import OrderRepository
from app.schemas.order import OrderCreate, OrderUpdate
from app.services.coupon_service import CouponService

logger = logging.getLogger(__name__)


class OrderService:
    """Service for order business logic."""

    def __init__(self, db: Session, clock: Clock = utc_now):
        self.db = db
        self.order_repo = OrderRepository(db)
        self.coupon_service = CouponService(db, clock=clock)

    def get_order_by_id(self, order_id: UUID) -> Order:
        order = self.order_repo.get_by_id(order_id)
        if not order:
            logger.error("Order not found with id: %s", order_id)
            raise NotFoundError(f"Order not found with id: {order_id}")
        return order

    def create_order(self, data: OrderCreate) -> Order:
        """Create an order, redeeming its coupon code if one is given.

        The discount is calculated first and the coupon's usage is consumed
        before the order is stored, so an exhausted coupon rejects the order.

        Raises:
            NotFoundError: If the coupon code does not exist.
            InvalidStateError: If the coupon cannot be applied or is exhausted.
        """
        logger.info("Creating new order for customer: %s", data.customer_id)

        discount = Decimal("0")
        if data.coupon_code:
            discount = self.coupon_service.calculate_discount(
                data.coupon_code, data.original_amount
            )
            self.coupon_service.increment_usage_by_code(data.coupon_code)

        order = self.order_repo.create(
            name=data.name,
            customer_id=data.customer_id,
            original_amount=data.original_amount,
            discount_amount=discount,
            coupon_code=data.coupon_code,
        )
        logger.info(
            "Order created with id: %s (original: %s, discount: %s, final: %s)",
            order.id,
            order.original_amount,
            order.discount_amount,
            order.final_amount,
        )
        return order

    def update_order(self, order_id: UUID, data: OrderUpdate) -> Order:
        logger.info("Updating order with id: %s", order_id)
        order = self.order_repo.update(order_id, data)
        if not order:
            logger.error("Order not found with id: %s", order_id)
            raise NotFoundError(f"Order not found with id: {order_id}")
        return order

    def update_order_status(self, order_id: UUID, status: OrderStatus) -> Order:
        order = self.get_order_by_id(order_id)
        previous_status = order.status
        order = self.order_repo.set_status(order_id, status)  # type: ignore[assignment]
        logger.info(
            "Order status changed from %s to %s for order id: %s",
            previous_status,
            status.value,
            order_id,
        )
        return order

    def delete_order(self, order_id: UUID) -> None:
        logger.info("Deleting order with id: %s", order_id)
        if not self.order_repo.delete(order_id):
            logger.error("Order not found with id: %s", order_id)
            raise NotFoundError(f"Order not found with id: {order_id}")

    def get_orders_by_customer_id(self, customer_id: str) -> list[Order]:
        orders = self.order_repo.get_by_customer_id(customer_id)
        logger.debug("Found %d orders for customer id: %s", len(orders), customer_id)
        return orders

    def get_orders_by_status(self, status: OrderStatus) -> list[Order]:
        orders = self.order_repo.get_by_status(status)
        logger.debug("Found %d orders with status: %s", len(orders), status.value)
        return orders
