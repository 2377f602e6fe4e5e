"""Pytest configuration and shared fixtures."""

import os
import tempfile
from pathlib import Path
from typing import Generator

# Configuration is read once at import time; point it at a scratch
# directory before anything from freelance_market is imported.
_TEST_DIR = Path(tempfile.mkdtemp(prefix="freelance-market-tests-"))
TEST_DATABASE_URL = f"sqlite:///{_TEST_DIR / 'test.db'}"
os.environ["FREELANCE_DATABASE_URL"] = TEST_DATABASE_URL
os.environ["FREELANCE_CONFIG_FILE"] = str(_TEST_DIR / "config.json")
os.environ["FREELANCE_LOG_TO_FILE"] = "0"
os.environ["FREELANCE_LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from freelance_market.db.database import Base, create_database_engine, init_db  # noqa: E402
from freelance_market.db.seed import seed_database  # noqa: E402
from freelance_market.store.ledger import Ledger  # noqa: E402


@pytest.fixture
def test_db():
    """Session factory over a freshly created and seeded database."""
    engine = create_database_engine(TEST_DATABASE_URL)
    Base.metadata.drop_all(bind=engine)
    init_db(engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    with TestingSessionLocal() as session:
        seed_database(session)

    yield TestingSessionLocal

    engine.dispose()


@pytest.fixture
def db_session(test_db):
    """A database session closed after the test."""
    session = test_db()

    yield session

    session.close()


@pytest.fixture
def ledger(db_session) -> Ledger:
    return Ledger(db_session)


@pytest.fixture
def client(test_db) -> Generator[TestClient, None, None]:
    """Create a test client with database dependency override."""
    from freelance_market.main import app
    from freelance_market.db.database import get_db

    def override_get_db():
        # Use a fresh session per request in tests
        db = test_db()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    # Clear overrides to avoid affecting other tests
    app.dependency_overrides.clear()


@pytest.fixture
def as_profile():
    """Build request headers identifying the calling profile."""

    def headers(profile_id) -> dict:
        return {"profile_id": str(profile_id)}

    return headers
