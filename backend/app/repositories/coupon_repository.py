"""Coupon repository for data access."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.sorting import apply_order_by
from app.models.coupon import Coupon
from app.models.shared import generate_code
from app.schemas.coupon import CouponCreate, CouponUpdate


class CouponRepository:
    """Repository for Coupon model."""

    def __init__(self, db: Session):
        self.db = db

    def get_all(
        self,
        skip: int = 0,
        limit: int = 100,
        order_by: str | None = None,
        active: bool | None = None,
    ) -> list[Coupon]:
        """Get all coupons with optional filters."""
        query = self.db.query(Coupon)

        if active is not None:
            query = query.filter(Coupon.active == active)

        query = apply_order_by(query, Coupon, order_by)
        return query.offset(skip).limit(limit).all()

    def count(self, active: bool | None = None) -> int:
        """Count coupons."""
        query = self.db.query(func.count(Coupon.id))
        if active is not None:
            query = query.filter(Coupon.active == active)
        return query.scalar() or 0

    def get_by_id(self, coupon_id: UUID) -> Coupon | None:
        """Get a coupon by ID."""
        return self.db.query(Coupon).filter(Coupon.id == coupon_id).first()

    def get_by_code(self, code: str) -> Coupon | None:
        """Get a coupon by code."""
        return self.db.query(Coupon).filter(Coupon.code == code).first()

    def exists_by_code(self, code: str) -> bool:
        return self.db.query(Coupon.id).filter(Coupon.code == code).first() is not None

    def get_by_active(self, active: bool) -> list[Coupon]:
        """Get coupons by their administrative active flag."""
        return (
            self.db.query(Coupon)
            .filter(Coupon.active == active)
            .order_by(Coupon.created_at.desc())
            .all()
        )

    def get_valid_as_of(self, now: datetime) -> list[Coupon]:
        """Get active, non-exhausted coupons whose window contains ``now``.

        Window bounds are inclusive here, unlike the redemption check.
        """
        return (
            self.db.query(Coupon)
            .filter(
                Coupon.active.is_(True),
                Coupon.used_count < Coupon.max_uses,
                Coupon.valid_from <= now,
                Coupon.valid_until >= now,
            )
            .order_by(Coupon.valid_until.asc())
            .all()
        )

    def generate_unique_code(self) -> str:
        code = generate_code(settings.COUPON_CODE_LENGTH)
        while self.exists_by_code(code):
            code = generate_code(settings.COUPON_CODE_LENGTH)
        return code

    def create(self, data: CouponCreate) -> Coupon:
        """Create a new coupon, generating a code when none is given."""
        coupon = Coupon(
            code=data.code or self.generate_unique_code(),
            coupon_type=data.coupon_type.value,
            value=data.value,
            min_order_amount=data.min_order_amount,
            max_uses=data.max_uses,
            used_count=0,
            valid_from=data.valid_from,
            valid_until=data.valid_until,
            active=data.active,
        )
        self.db.add(coupon)
        self.db.commit()
        self.db.refresh(coupon)
        return coupon

    def update(self, coupon_id: UUID, data: CouponUpdate) -> Coupon | None:
        """Update a coupon by ID."""
        coupon = self.get_by_id(coupon_id)
        if not coupon:
            return None

        update_data = data.model_dump(exclude_unset=True, exclude_none=True)

        if "coupon_type" in update_data and update_data["coupon_type"]:
            update_data["coupon_type"] = update_data["coupon_type"].value

        for key, value in update_data.items():
            setattr(coupon, key, value)

        self.db.commit()
        self.db.refresh(coupon)
        return coupon

    def deactivate(self, coupon_id: UUID) -> Coupon | None:
        """Deactivate a coupon by ID."""
        coupon = self.get_by_id(coupon_id)
        if not coupon:
            return None

        coupon.active = False  # type: ignore[assignment]
        self.db.commit()
        self.db.refresh(coupon)
        return coupon

    def delete(self, coupon_id: UUID) -> bool:
        """Delete a coupon by ID."""
        coupon = self.get_by_id(coupon_id)
        if not coupon:
            return False

        self.db.delete(coupon)
        self.db.commit()
        return True

    def increment_used_count(self, coupon_id: UUID) -> bool:
        """Atomically consume one use of a coupon.

        The increment only applies while ``used_count < max_uses``, so
        concurrent callers can never push the count past the ceiling.

        Returns:
            True if a use was consumed, False if the coupon is missing or
            already exhausted.
        """
        updated = (
            self.db.query(Coupon)
            .filter(Coupon.id == coupon_id, Coupon.used_count < Coupon.max_uses)
            .update(
                {Coupon.used_count: Coupon.used_count + 1},
                synchronize_session=False,
            )
        )
        self.db.commit()
        return updated == 1
