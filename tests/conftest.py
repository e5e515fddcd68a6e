"""
Fixtures for the estimator tests.

Every test gets an empty storage_entries table in a throwaway SQLite file.
The API client and the direct `db` session share that file.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

TEST_DATABASE_URL = "sqlite:///./test_estimates.db"

# Must be set before fence_estimator.config builds its settings
os.environ["DATABASE_URL"] = TEST_DATABASE_URL

from fence_estimator.database import Base, get_db
from fence_estimator.main import app
from fence_estimator.quote_store import QuoteStore


test_engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestSession = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def _test_session():
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


app.dependency_overrides[get_db] = _test_session


@pytest.fixture(autouse=True)
def fresh_storage():
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def db():
    """Session for seeding raw storage values and checking what was written."""
    session = TestSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return QuoteStore(db)
