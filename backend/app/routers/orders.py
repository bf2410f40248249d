"""Order API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from app.core.clock import Clock, get_clock
from app.core.database import get_db
from app.core.errors import http_error
from app.models.order import Order, OrderStatus
from app.repositories.order_repository import OrderRepository
from app.schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate, OrderUpdate
from app.services.order_service import OrderService

router = APIRouter()


def get_order_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> OrderService:
    return OrderService(db, clock=clock)


@router.post(
    "/",
    response_model=OrderResponse,
    status_code=201,
    summary="Create order",
    responses={
        400: {"description": "Coupon cannot be applied to this order"},
        404: {"description": "Coupon not found"},
        422: {"description": "Validation error"},
    },
)
async def create_order(
    data: OrderCreate,
    service: OrderService = Depends(get_order_service),
) -> Order:
    """Create an order, redeeming the coupon code if one is given."""
    try:
        return service.create_order(data)
    except ValueError as e:
        raise http_error(e) from None


@router.get(
    "/",
    response_model=list[OrderResponse],
    summary="List orders",
)
async def list_orders(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[Order]:
    """List orders."""
    repo = OrderRepository(db)
    response.headers["X-Total-Count"] = str(repo.count())
    return repo.get_all(skip=skip, limit=limit, order_by=order_by)


@router.get(
    "/customer/{customer_id}",
    response_model=list[OrderResponse],
    summary="List orders for customer",
)
async def list_customer_orders(
    customer_id: str,
    service: OrderService = Depends(get_order_service),
) -> list[Order]:
    return service.get_orders_by_customer_id(customer_id)


@router.get(
    "/status/{status}",
    response_model=list[OrderResponse],
    summary="List orders by status",
)
async def list_orders_by_status(
    status: OrderStatus,
    service: OrderService = Depends(get_order_service),
) -> list[Order]:
    return service.get_orders_by_status(status)


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Get order",
    responses={404: {"description": "Order not found"}},
)
async def get_order(
    order_id: UUID,
    service: OrderService = Depends(get_order_service),
) -> Order:
    """Get an order by ID."""
    try:
        return service.get_order_by_id(order_id)
    except ValueError as e:
        raise http_error(e) from None


@router.put(
    "/{order_id}",
    response_model=OrderResponse,
    summary="Update order",
    responses={404: {"description": "Order not found"}},
)
async def update_order(
    order_id: UUID,
    data: OrderUpdate,
    service: OrderService = Depends(get_order_service),
) -> Order:
    """Update an order by ID."""
    try:
        return service.update_order(order_id, data)
    except ValueError as e:
        raise http_error(e) from None


@router.patch(
    "/{order_id}/status",
    response_model=OrderResponse,
    summary="Update order status",
    responses={404: {"description": "Order not found"}},
)
async def update_order_status(
    order_id: UUID,
    data: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
) -> Order:
    try:
        return service.update_order_status(order_id, data.status)
    except ValueError as e:
        raise http_error(e) from None


@router.delete(
    "/{order_id}",
    status_code=204,
    summary="Delete order",
    responses={404: {"description": "Order not found"}},
)
async def delete_order(
    order_id: UUID,
    service: OrderService = Depends(get_order_service),
) -> None:
    """Delete an order by ID."""
    try:
        service.delete_order(order_id)
    except ValueError as e:
        raise http_error(e) from None
