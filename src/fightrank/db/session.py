"""
Database session management for Fightrank.

Provides the SQLAlchemy engine and session factory with connection pooling
configured from config.py.

Usage:
    # As a context manager (recommended for scripts)
    from fightrank.db import get_session

    with get_session() as session:
        fighters = session.query(Fighter).all()
        # Commits automatically on exit, rolls back on exception

    # As a dependency (for FastAPI)
    from fightrank.db.session import get_db

    @app.get("/fighters")
    def list_fighters(db: Session = Depends(get_db)):
        ...
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from fightrank.config import settings


def get_engine() -> Engine:
    """
    Create SQLAlchemy engine with connection pooling.

    The engine is configured with:
    - Connection pool sizes from settings (server databases only; SQLite
      picks its own pool)
    - SQL echo only when LOG_LEVEL=DEBUG
    - Pre-ping to verify connections before use
    """
    kwargs = {
        "pool_pre_ping": True,
        "echo": settings.log_level == "DEBUG",
    }
    if not settings.database_url.startswith("sqlite"):
        kwargs["pool_size"] = settings.db_pool_size
        kwargs["max_overflow"] = settings.db_max_overflow

    return create_engine(settings.database_url, **kwargs)


_engine = None


def _get_engine() -> Engine:
    """Get or create the singleton engine instance."""
    global _engine
    if _engine is None:
        _engine = get_engine()
    return _engine


SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=_get_engine(),
)


@contextmanager
def get_session() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Automatically commits on successful exit, rolls back on exception.
    This is what keeps a recompute or a publish all-or-nothing: nothing is
    visible to other readers until the block exits cleanly.

    Raises:
        Any exception from the database operation (after rollback)
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency injection function for FastAPI.

    Handlers that write are responsible for calling commit().
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
