from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.core.config import settings


def sqlite_connect_args(dsn: str) -> dict[str, Any]:
    """Connection arguments for SQLite DSNs; empty for other backends.

    Concurrent usage increments on SQLite queue behind the write lock, so the
    busy timeout has to outlast a burst of redemptions.
    """
    if not dsn.startswith("sqlite"):
        return {}
    return {"check_same_thread": False, "timeout": 30}


engine = create_engine(
    settings.APP_DATABASE_DSN,
    connect_args=sqlite_connect_args(settings.APP_DATABASE_DSN),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Initialize database tables."""
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
