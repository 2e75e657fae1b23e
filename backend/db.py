"""
Database setup for the FastAPI backend.
Provides SQLAlchemy engine/session utilities for SQLite.
"""
from pathlib import Path
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from settings import settings

DB_PATH = Path(settings.HOBBYMAP_DB_PATH)
DATABASE_URL = f"sqlite:///{DB_PATH}"

# check_same_thread=False allows usage across FastAPI threads
engine = create_engine(
    DATABASE_URL, connect_args={"check_same_thread": False}, echo=settings.SQL_ECHO
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
Base = declarative_base()


def init_db() -> None:
    """Create tables if they don't exist."""
    from repositories import models  # noqa: F401  Ensures models are registered

    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)

