"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- test_db: In-memory SQLite database for isolated testing
- test_client: FastAPI TestClient for API integration tests
- test_user / h2_user: employees on the H1 and H2 schedule types
- jobs: active and inactive jobs for the activity form
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# ruff: noqa: E402
from app.database.database import Base, JobRow, User, get_db
from app.main import app


@pytest.fixture(scope="function")
def test_db():
    """
    Create an in-memory SQLite database for testing.

    This fixture creates a fresh database for each test function,
    ensuring test isolation. The database is destroyed after each test.

    Yields:
        SQLAlchemy Session: Database session for test use
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_client(test_db):
    """
    Create FastAPI TestClient with test database dependency override.

    Args:
        test_db: Test database session fixture

    Yields:
        TestClient: FastAPI test client for API testing
    """

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    # Clean up
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def test_user(test_db):
    """
    Employee on schedule H1 (07:00-16:00, Monday-Friday).

    Returns:
        User: Created test user object
    """
    user = User(id=1, username="mlopez", name="María López", schedule_type="H1")
    test_db.add(user)
    test_db.commit()
    test_db.refresh(user)
    return user


@pytest.fixture(scope="function")
def h2_user(test_db):
    """Employee on schedule H2 (07:00-17:00, Saturday until noon)."""
    user = User(id=2, username="jreyes", name="José Reyes", schedule_type="H2")
    test_db.add(user)
    test_db.commit()
    test_db.refresh(user)
    return user


@pytest.fixture(scope="function")
def user_headers(test_user):
    """Headers identifying test_user."""
    return {"X-User-Id": str(test_user.id)}


@pytest.fixture(scope="function")
def jobs(test_db):
    """
    Create jobs: two active, one inactive.

    Returns:
        dict: JobRow objects keyed by code
    """
    rows = [
        JobRow(id=10, code="MANT-01", name="Mantenimiento preventivo", active=True),
        JobRow(id=11, code="PROD-02", name="Línea de producción 2", active=True),
        JobRow(id=12, code="OLD-99", name="Proyecto cerrado", active=False),
    ]
    test_db.add_all(rows)
    test_db.commit()
    return {row.code: row for row in rows}
