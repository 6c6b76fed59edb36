"""Database configuration and session management."""

from sqlalchemy.engine import Engine
from sqlmodel import Session, SQLModel, create_engine

from wallet.config import settings


def make_engine(database_url: str) -> Engine:
    """Create a SQLite engine usable from the UI event loop thread."""
    return create_engine(
        database_url,
        echo=False,
        connect_args={"check_same_thread": False},
    )


engine = make_engine(settings.database_url)


def init_db(bind: Engine = engine) -> None:
    """Initialize database tables."""
    # Import models to register them with SQLModel
    from wallet.models import StorageEntry  # noqa: F401
    SQLModel.metadata.create_all(bind)


def get_session(bind: Engine = engine) -> Session:
    """Get a new database session."""
    return Session(bind)
