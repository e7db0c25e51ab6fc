"""
Database configuration and session management.

This module sets up the SQLAlchemy engine and session factory. PostgreSQL is
the production target; SQLite URLs are accepted for local runs and tests.
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings


def _engine_options(database_url: str, echo: bool) -> dict:
    """Build create_engine keyword arguments for the given backend."""
    if database_url.startswith("sqlite"):
        options = {
            "echo": echo,
            "connect_args": {"check_same_thread": False},
        }
        # In-memory databases live on a single connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options

    # - pool_pre_ping: Verify connections are alive before using them
    # - pool_size: Number of connections to keep in pool
    # - max_overflow: Number of connections to allow beyond pool_size
    return {
        "echo": echo,
        "pool_pre_ping": True,
        "pool_size": 5,
        "max_overflow": 10,
    }


_settings = get_settings()

engine = create_engine(
    _settings.database_url,
    **_engine_options(_settings.database_url, _settings.sql_debug),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Base class for declarative models
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Dependency that provides a database session.

    Usage in FastAPI:
        @app.get("/items")
        def get_items(db: Session = Depends(get_db)):
            ...

    Yields:
        Session: SQLAlchemy database session
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Create the tenants and quotations tables if they do not exist.
    """
    # Import models to ensure they are registered with Base
    from . import models_db  # noqa: F401

    Base.metadata.create_all(bind=engine)
