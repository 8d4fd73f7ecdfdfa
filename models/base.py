"""
Database configuration and base model.

Uses SQLAlchemy 2.0 declarative style with SQLite by default.
"""

from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from config import DATABASE_URL


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def make_engine(url: str = DATABASE_URL, **kwargs) -> Engine:
    """Create an engine; SQLite connections may be shared across threads."""
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(url, echo=False, **kwargs)


engine = make_engine()

# Session factory. Objects stay readable after commit so services can
# build response snapshots before the session closes.
SessionLocal = sessionmaker(
    bind=engine, autocommit=False, autoflush=False, expire_on_commit=False
)


@contextmanager
def get_session(factory: Optional[sessionmaker] = None) -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Everything done inside the block is committed as one transaction, or
    rolled back entirely if the block raises.
    """
    session = (factory or SessionLocal)()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(bind: Optional[Engine] = None) -> None:
    """Initialize the database, creating all tables."""
    # Import models so their tables are registered on the metadata
    import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)

