"""Coupon service for validation, discount calculation and usage tracking."""

import logging
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.clock import Clock
from app.core.errors import InvalidStateError, NotFoundError
from app.models.coupon import Coupon, CouponType
from app.models.shared import as_utc, utc_now
from app.repositories.coupon_repository import CouponRepository
from app.schemas.coupon import CouponCreate, CouponUpdate
from app.services import discount_engine

logger = logging.getLogger(__name__)


class CouponService:
    """Service for coupon business logic.

    ``clock`` supplies the current time for every validity decision; tests
    pass a fixed clock instead of the wall clock.
    """

    def __init__(self, db: Session, clock: Clock = utc_now):
        self.db = db
        self.clock = clock
        self.coupon_repo = CouponRepository(db)

    def now(self) -> datetime:
        return as_utc(self.clock())

    # Lookups

    def get_coupon_by_id(self, coupon_id: UUID) -> Coupon:
        coupon = self.coupon_repo.get_by_id(coupon_id)
        if not coupon:
            logger.error("Coupon not found with id: %s", coupon_id)
            raise NotFoundError(f"Coupon not found with id: {coupon_id}")
        return coupon

    def get_coupon_by_code(self, code: str) -> Coupon:
        coupon = self.coupon_repo.get_by_code(code)
        if not coupon:
            logger.error("Coupon not found with code: %s", code)
            raise NotFoundError(f"Coupon not found with code: {code}")
        return coupon

    def get_active_coupons(self) -> list[Coupon]:
        coupons = self.coupon_repo.get_by_active(True)
        logger.debug("Found %d active coupons", len(coupons))
        return coupons

    def get_valid_coupons(self, as_of: datetime | None = None) -> list[Coupon]:
        """List coupons redeemable at ``as_of`` (defaults to the service clock)."""
        as_of = as_utc(as_of) if as_of is not None else self.now()
        coupons = self.coupon_repo.get_valid_as_of(as_of)
        logger.debug("Found %d valid coupons as of %s", len(coupons), as_of)
        return coupons

    # Administration

    def validate_coupon(self, coupon: Coupon) -> None:
        try:
            discount_engine.validate_coupon(coupon)
        except ValueError as e:
            logger.error("Coupon validation failed: %s", e)
            raise
        logger.debug("Coupon validation passed")

    def create_coupon(self, data: CouponCreate) -> Coupon:
        """Validate and persist a new coupon."""
        logger.info("Creating new coupon of type: %s", data.coupon_type.value)
        self.validate_coupon(
            Coupon(
                coupon_type=data.coupon_type.value,
                value=data.value,
                max_uses=data.max_uses,
                used_count=0,
                valid_from=data.valid_from,
                valid_until=data.valid_until,
            )
        )
        coupon = self.coupon_repo.create(data)
        logger.info("Coupon created with id: %s and code: %s", coupon.id, coupon.code)
        return coupon

    def update_coupon(self, coupon_id: UUID, data: CouponUpdate) -> Coupon:
        """Apply an administrative update, revalidating the resulting coupon."""
        logger.info("Updating coupon with id: %s", coupon_id)
        coupon = self.get_coupon_by_id(coupon_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        coupon_type = changes.get("coupon_type", CouponType(coupon.coupon_type))
        self.validate_coupon(
            Coupon(
                coupon_type=coupon_type.value,
                value=changes.get("value", coupon.value),
                max_uses=changes.get("max_uses", coupon.max_uses),
                used_count=coupon.used_count,
                valid_from=changes.get("valid_from", coupon.valid_from),
                valid_until=changes.get("valid_until", coupon.valid_until),
            )
        )

        updated = self.coupon_repo.update(coupon_id, data)
        if not updated:
            raise NotFoundError(f"Coupon not found with id: {coupon_id}")
        logger.info("Coupon updated with id: %s", coupon_id)
        return updated

    def deactivate_coupon(self, coupon_id: UUID) -> Coupon:
        logger.info("Deactivating coupon with id: %s", coupon_id)
        coupon = self.coupon_repo.deactivate(coupon_id)
        if not coupon:
            logger.error("Coupon not found with id: %s", coupon_id)
            raise NotFoundError(f"Coupon not found with id: {coupon_id}")
        return coupon

    def delete_coupon(self, coupon_id: UUID) -> None:
        logger.info("Deleting coupon with id: %s", coupon_id)
        if not self.coupon_repo.delete(coupon_id):
            logger.error("Coupon not found with id: %s", coupon_id)
            raise NotFoundError(f"Coupon not found with id: {coupon_id}")

    # Redemption

    def is_valid(self, coupon: Coupon, now: datetime | None = None) -> bool:
        return discount_engine.is_valid(coupon, now or self.now())

    def can_apply_to_order(
        self,
        coupon: Coupon,
        order_amount: Decimal,
        now: datetime | None = None,
    ) -> bool:
        return discount_engine.can_apply_to_order(coupon, order_amount, now or self.now())

    def calculate_discount(self, code: str, order_amount: Decimal) -> Decimal:
        """Calculate the discount for an order without consuming the coupon.

        Args:
            code: The coupon code.
            order_amount: The order total before discount.

        Returns:
            The discount amount to subtract from the order.

        Raises:
            NotFoundError: If no coupon has this code.
            InvalidStateError: If the coupon cannot be applied right now.
        """
        logger.info(
            "Calculating discount for coupon code: %s with order amount: %s", code, order_amount
        )
        coupon = self.get_coupon_by_code(code)

        try:
            discount = discount_engine.calculate_discount(coupon, order_amount, self.now())
        except InvalidStateError as e:
            logger.warning("Coupon code %s rejected for order amount %s: %s", code, order_amount, e)
            raise

        logger.info(
            "Calculated discount: %s for coupon code: %s (type: %s)",
            discount,
            code,
            coupon.coupon_type,
        )
        return discount

    def increment_usage(self, coupon_id: UUID) -> Coupon:
        """Consume one use of a coupon.

        The ceiling check and the increment happen in a single conditional
        update, so racing callers cannot exceed ``max_uses``.

        Raises:
            NotFoundError: If the coupon does not exist.
            InvalidStateError: If the coupon has reached maximum uses.
        """
        logger.info("Incrementing used count for coupon id: %s", coupon_id)
        coupon = self.get_coupon_by_id(coupon_id)

        if not self.coupon_repo.increment_used_count(coupon_id):
            current = self.get_coupon_by_id(coupon_id)
            logger.warning(
                "Coupon id: %s has reached maximum uses (%s/%s)",
                coupon_id,
                current.used_count,
                current.max_uses,
            )
            raise InvalidStateError("Coupon has reached maximum uses")

        self.db.refresh(coupon)
        logger.info(
            "Coupon usage incremented to %s/%s for coupon id: %s",
            coupon.used_count,
            coupon.max_uses,
            coupon_id,
        )
        return coupon

    def increment_usage_by_code(self, code: str) -> Coupon:
        coupon = self.get_coupon_by_code(code)
        return self.increment_usage(coupon.id)  # type: ignore[arg-type]
