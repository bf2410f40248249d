"""Shared test fixtures for all test modules."""

import contextlib
from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import app.models  # noqa: F401
from app.core import database as db_module
from app.core.database import Base, get_db
from app.models.coupon import Coupon, CouponType

# Create an in-memory SQLite engine with StaticPool so all connections
# share the same database state and there are no file-locking issues.
_test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
_TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_test_engine)

# Fixed instant used as "now" by clock-dependent tests
NOW = datetime(2026, 6, 15, 12, 0, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return NOW


@pytest.fixture(autouse=True)
def setup_database():
    """Create tables before each test and truncate all data after.

    Patches the module-level engine and SessionLocal so all application code
    uses the in-memory test database. Clears data after each test.
    """
    original_engine = db_module.engine
    original_session = db_module.SessionLocal
    db_module.engine = _test_engine
    db_module.SessionLocal = _TestSessionLocal

    Base.metadata.create_all(bind=_test_engine)

    yield
    with _test_engine.connect() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            with contextlib.suppress(OperationalError):
                conn.execute(table.delete())
        conn.commit()

    db_module.engine = original_engine
    db_module.SessionLocal = original_session


@pytest.fixture
def db_session():
    """Create a database session for direct repository testing."""
    gen = get_db()
    db = next(gen)
    try:
        yield db
    finally:
        for _ in gen:
            pass


def make_coupon(**overrides) -> Coupon:
    """Build an unsaved coupon valid at NOW; keyword arguments override fields."""
    fields = {
        "code": "SAVE20PC",
        "coupon_type": CouponType.PERCENTAGE.value,
        "value": Decimal("20.00"),
        "min_order_amount": Decimal("0.00"),
        "max_uses": 100,
        "used_count": 5,
        "valid_from": NOW - timedelta(days=1),
        "valid_until": NOW + timedelta(days=30),
        "active": True,
    }
    fields.update(overrides)
    return Coupon(**fields)


@pytest.fixture
def percentage_coupon(db_session):
    """Persisted 20% coupon, valid at NOW, 5 of 100 uses consumed."""
    coupon = make_coupon()
    db_session.add(coupon)
    db_session.commit()
    db_session.refresh(coupon)
    return coupon


@pytest.fixture
def fixed_coupon(db_session):
    """Persisted 50.00 fixed coupon with a 100.00 minimum, valid at NOW."""
    coupon = make_coupon(
        code="FLAT50OF",
        coupon_type=CouponType.FIXED.value,
        value=Decimal("50.00"),
        min_order_amount=Decimal("100.00"),
        max_uses=50,
        used_count=10,
    )
    db_session.add(coupon)
    db_session.commit()
    db_session.refresh(coupon)
    return coupon
