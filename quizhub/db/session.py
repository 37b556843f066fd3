"""SQLAlchemy engine & session factory."""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

# Lazy initialization - the engine is only created when first needed
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None  # type: ignore[type-arg]
_database_url: str | None = None
_echo: bool = False


def configure(database_url: str, echo: bool = False) -> None:
    """Point the session factory at *database_url*.

    Called once by ``create_app``; an already-built engine is discarded so the
    next request picks up the new URL.
    """
    global _engine, _SessionLocal, _database_url, _echo
    _database_url = database_url
    _echo = echo
    _engine = None
    _SessionLocal = None


def get_engine() -> Engine:
    """Get or create SQLAlchemy engine."""
    global _engine
    if _engine is None:
        if _database_url is None:
            raise RuntimeError("Database is not configured; call configure() first")
        _engine = create_engine(_database_url, echo=_echo, pool_pre_ping=True)
    return _engine


def get_session_factory():
    """Get or create session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autocommit=False, autoflush=False)
    return _SessionLocal


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


def get_db() -> Session:  # type: ignore[misc]
    """FastAPI dependency: yields a DB session and closes it after the request."""
    factory = get_session_factory()
    db = factory()
    try:
        yield db  # type: ignore[misc]
    finally:
        db.close()
