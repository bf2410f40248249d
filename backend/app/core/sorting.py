"""Sorting for list endpoints: ``order_by=field:direction`` query strings."""

from __future__ import annotations

from sqlalchemy import asc, desc
from sqlalchemy.orm import Query

from app.core.database import Base

DIRECTIONS = {"asc": asc, "desc": desc}


def parse_order_by(
    model: type[Base],
    order_by: str | None,
    default_field: str = "created_at",
    default_direction: str = "desc",
) -> tuple[str, str]:
    """Resolve an order_by string to a (column, direction) pair.

    Unknown columns fall back to the defaults; a known column with a missing
    or unknown direction sorts ascending.
    """
    if not order_by:
        return default_field, default_direction

    field, _, direction = order_by.partition(":")
    if field not in model.__table__.columns:
        return default_field, default_direction
    if direction not in DIRECTIONS:
        direction = "asc"
    return field, direction


def apply_order_by(
    query: Query,  # type: ignore[type-arg]
    model: type[Base],
    order_by: str | None,
    default_field: str = "created_at",
    default_direction: str = "desc",
) -> Query:  # type: ignore[type-arg]
    """Order a query by a table column, with the primary key as tie-breaker.

    The tie-breaker keeps skip/limit pages stable when many rows share a
    value, e.g. coupons created in the same second.
    """
    field, direction = parse_order_by(model, order_by, default_field, default_direction)
    order_func = DIRECTIONS[direction]
    return query.order_by(order_func(getattr(model, field)), order_func(model.id))
