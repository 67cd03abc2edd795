"""
Database Configuration

Shared SQLAlchemy Base and database session management.
"""

from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

# Shared declarative base
Base = declarative_base()

# Global engine and session factory (to be initialized)
engine: Optional[Engine] = None
SessionLocal = None


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine; SQLite connections are shared across threads."""
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url, connect_args={"check_same_thread": False}, poolclass=StaticPool, echo=echo
        )
    return create_engine(database_url, echo=echo, pool_pre_ping=True)


def init_database(database_url: str = "sqlite:///./clarvoy.db", echo: bool = False) -> None:
    """
    Initialize database engine and session factory.

    Args:
        database_url: SQLAlchemy database URL
        echo: Whether to echo SQL statements (for debugging)
    """
    global engine, SessionLocal

    if engine is not None:
        engine.dispose()

    engine = build_engine(database_url, echo=echo)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def create_tables() -> None:
    """Create all tables in the database"""
    if engine is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")

    # Import models so every table is registered on Base.metadata
    from src.models import audit_models, decision_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_session() -> Generator[Session, None, None]:
    """
    Get database session (dependency injection for FastAPI).

    Usage:
        @router.get("/items")
        def read_items(db: Session = Depends(get_session)):
            return db.query(Item).all()
    """
    if SessionLocal is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
