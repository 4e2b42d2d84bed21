"""Pytest configuration and fixtures."""
from __future__ import annotations

import os
import sys
import uuid
from pathlib import Path
from typing import Dict

import pytest
from sqlalchemy.orm import Session, sessionmaker

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

# Set test environment
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "Testing")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-flightbook-0123456789")
os.environ.setdefault("ALLOWED_ORIGINS", "http://localhost:3000")

from core.auth import create_access_token
from core.db import Base, create_db_engine
import core.models  # noqa: F401  (registers the mappers)


@pytest.fixture(scope="session")
def engine():
    """In-memory engine with the schema created straight from the models."""
    engine = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session(engine) -> Session:
    """
    Returns a SQLAlchemy session for testing.

    Each test gets a fresh transaction that is rolled back after the test.
    """
    connection = engine.connect()
    transaction = connection.begin()

    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=connection)
    session = SessionLocal()

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def file_engine(tmp_path):
    """Empty file-backed SQLite database, for running real migrations."""
    engine = create_db_engine(f"sqlite:///{(tmp_path / 'flightbook-test.db').as_posix()}")
    yield engine
    engine.dispose()


@pytest.fixture(scope="module")
def client():
    """Test client over HTTPS; startup migrates and seeds the in-memory database."""
    from fastapi.testclient import TestClient

    from api.app import app

    with TestClient(app, base_url="https://testserver") as c:
        yield c


@pytest.fixture
def user_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture
def auth_headers(user_id) -> Dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}
