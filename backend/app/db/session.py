"""Database session factory and the per-request session dependency."""

from collections.abc import Generator

from sqlalchemy.orm import Session, sessionmaker

from backend.app.db.engine import engine

SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db() -> Generator[Session, None, None]:
    """Yield one session per request; repositories commit, this only closes."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
