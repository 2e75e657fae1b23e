import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))


@pytest.fixture(autouse=True)
def no_nominatim_throttle(monkeypatch):
    from services import geocoding as geo

    monkeypatch.setattr(geo, "_MIN_INTERVAL_SEC", 0.0)


@pytest.fixture
def session_factory(tmp_path):
    """Sessions bound to a throwaway SQLite database."""
    from sqlalchemy import create_engine
    from sqlalchemy.orm import sessionmaker

    from db import Base
    from repositories import models  # noqa: F401

    engine = create_engine(
        f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(bind=engine, autoflush=False, autocommit=False)
    engine.dispose()
