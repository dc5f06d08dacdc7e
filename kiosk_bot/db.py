"""
Database connection management.

Environment variables:
    - DATABASE_URL: SQLAlchemy connection URL (default: local SQLite file)
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from .config import DATABASE_URL
from .models import Base


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # FastAPI may use the session from a worker thread
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(DATABASE_URL, echo=False, **_engine_kwargs(DATABASE_URL))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def init_db(bind=None) -> None:
    """Create tables if they do not exist."""
    Base.metadata.create_all(bind=bind or engine)

