"""Coupon API endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from app.core.clock import Clock, get_clock
from app.core.database import get_db
from app.core.errors import http_error
from app.models.coupon import Coupon
from app.repositories.coupon_repository import CouponRepository
from app.schemas.coupon import (
    CouponCreate,
    CouponResponse,
    CouponUpdate,
    DiscountCalculationRequest,
    DiscountCalculationResponse,
)
from app.services.coupon_service import CouponService

router = APIRouter()


def get_coupon_service(
    db: Session = Depends(get_db),
    clock: Clock = Depends(get_clock),
) -> CouponService:
    return CouponService(db, clock=clock)


@router.post(
    "/",
    response_model=CouponResponse,
    status_code=201,
    summary="Create coupon",
    responses={
        409: {"description": "Coupon with this code already exists"},
        422: {"description": "Validation error"},
    },
)
async def create_coupon(
    data: CouponCreate,
    db: Session = Depends(get_db),
    service: CouponService = Depends(get_coupon_service),
) -> Coupon:
    """Create a new coupon, generating a code if none is given."""
    if data.code and CouponRepository(db).exists_by_code(data.code):
        raise HTTPException(status_code=409, detail="Coupon with this code already exists")
    try:
        return service.create_coupon(data)
    except ValueError as e:
        raise http_error(e) from None


@router.get(
    "/",
    response_model=list[CouponResponse],
    summary="List coupons",
)
async def list_coupons(
    response: Response,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=1000),
    order_by: str | None = Query(default=None),
    active: bool | None = None,
    db: Session = Depends(get_db),
) -> list[Coupon]:
    """List coupons with optional active filter."""
    repo = CouponRepository(db)
    response.headers["X-Total-Count"] = str(repo.count(active=active))
    return repo.get_all(skip=skip, limit=limit, order_by=order_by, active=active)


@router.get(
    "/active",
    response_model=list[CouponResponse],
    summary="List active coupons",
)
async def list_active_coupons(
    service: CouponService = Depends(get_coupon_service),
) -> list[Coupon]:
    """List coupons whose active flag is set."""
    return service.get_active_coupons()


@router.get(
    "/valid",
    response_model=list[CouponResponse],
    summary="List valid coupons",
)
async def list_valid_coupons(
    service: CouponService = Depends(get_coupon_service),
) -> list[Coupon]:
    """List active, non-exhausted coupons within their validity window."""
    return service.get_valid_coupons()


@router.post(
    "/calculate-discount",
    response_model=DiscountCalculationResponse,
    summary="Calculate discount",
    responses={
        400: {"description": "Coupon cannot be applied to this order"},
        404: {"description": "Coupon not found"},
    },
)
async def calculate_discount(
    data: DiscountCalculationRequest,
    service: CouponService = Depends(get_coupon_service),
) -> DiscountCalculationResponse:
    """Calculate the discount a coupon yields without consuming it."""
    try:
        discount = service.calculate_discount(data.code, data.order_amount)
    except ValueError as e:
        raise http_error(e) from None
    return DiscountCalculationResponse(
        original_amount=data.order_amount,
        discount=discount,
        final_amount=data.order_amount - discount,
    )


@router.get(
    "/code/{code}",
    response_model=CouponResponse,
    summary="Get coupon by code",
    responses={404: {"description": "Coupon not found"}},
)
async def get_coupon_by_code(
    code: str,
    service: CouponService = Depends(get_coupon_service),
) -> Coupon:
    """Get a coupon by code."""
    try:
        return service.get_coupon_by_code(code)
    except ValueError as e:
        raise http_error(e) from None


@router.patch(
    "/code/{code}/use",
    response_model=CouponResponse,
    summary="Use coupon",
    responses={
        400: {"description": "Coupon has reached maximum uses"},
        404: {"description": "Coupon not found"},
    },
)
async def use_coupon(
    code: str,
    service: CouponService = Depends(get_coupon_service),
) -> Coupon:
    """Consume one use of a coupon."""
    try:
        return service.increment_usage_by_code(code)
    except ValueError as e:
        raise http_error(e) from None


@router.get(
    "/{coupon_id}",
    response_model=CouponResponse,
    summary="Get coupon",
    responses={404: {"description": "Coupon not found"}},
)
async def get_coupon(
    coupon_id: UUID,
    service: CouponService = Depends(get_coupon_service),
) -> Coupon:
    """Get a coupon by ID."""
    try:
        return service.get_coupon_by_id(coupon_id)
    except ValueError as e:
        raise http_error(e) from None


@router.put(
    "/{coupon_id}",
    response_model=CouponResponse,
    summary="Update coupon",
    responses={
        404: {"description": "Coupon not found"},
        422: {"description": "Validation error"},
    },
)
async def update_coupon(
    coupon_id: UUID,
    data: CouponUpdate,
    service: CouponService = Depends(get_coupon_service),
) -> Coupon:
    """Update a coupon by ID."""
    try:
        return service.update_coupon(coupon_id, data)
    except ValueError as e:
        raise http_error(e) from None


@router.patch(
    "/{coupon_id}/deactivate",
    response_model=CouponResponse,
    summary="Deactivate coupon",
    responses={404: {"description": "Coupon not found"}},
)
async def deactivate_coupon(
    coupon_id: UUID,
    service: CouponService = Depends(get_coupon_service),
) -> Coupon:
    """Switch a coupon off without deleting it."""
    try:
        return service.deactivate_coupon(coupon_id)
    except ValueError as e:
        raise http_error(e) from None


@router.delete(
    "/{coupon_id}",
    status_code=204,
    summary="Delete coupon",
    responses={404: {"description": "Coupon not found"}},
)
async def delete_coupon(
    coupon_id: UUID,
    service: CouponService = Depends(get_coupon_service),
) -> None:
    """Delete a coupon by ID."""
    try:
        service.delete_coupon(coupon_id)
    except ValueError as e:
        raise http_error(e) from None
